"""Catalog API schemas."""

from pydantic import BaseModel, Field

from src.modules.catalog.application.view_state import ViewSnapshot


class EntryResponse(BaseModel):
    """Catalog entry."""

    name: str = Field(..., description="条目名称")
    display_name: str = Field(..., description="展示名称")
    url: str = Field(..., description="详情定位地址")


class CategoryOptionResponse(BaseModel):
    """Category selector row."""

    label: str = Field(..., description="显示文本")
    value: str = Field(..., description="取值，空字符串表示不过滤")


class ViewSnapshotResponse(BaseModel):
    """Catalog view snapshot."""

    visible_entries: list[EntryResponse] = Field(..., description="可见条目")
    is_loading: bool = Field(..., description="是否有当前输入的请求在途")
    categories: list[CategoryOptionResponse] = Field(..., description="分类选项")
    selected_category: str = Field(..., description="当前分类，空表示不过滤")
    limit: int = Field(..., ge=1, description="当前条目上限")
    mode: str = Field(..., description="limit 或 category")

    @classmethod
    def from_snapshot(cls, snapshot: ViewSnapshot) -> "ViewSnapshotResponse":
        return cls(
            visible_entries=[
                EntryResponse(
                    name=entry.name,
                    display_name=entry.display_name,
                    url=entry.url,
                )
                for entry in snapshot.visible_entries
            ],
            is_loading=snapshot.is_loading,
            categories=[
                CategoryOptionResponse(label=option.label, value=option.value)
                for option in snapshot.categories
            ],
            selected_category=snapshot.selected_category,
            limit=snapshot.limit,
            mode=snapshot.mode,
        )


class SelectCategoryRequest(BaseModel):
    """Select category request."""

    name: str = Field("", max_length=100, description="分类名称，空字符串清除筛选")

    class Config:
        json_schema_extra = {"example": {"name": "water"}}
