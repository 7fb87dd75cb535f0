"""Catalog domain entities."""

from pydantic import BaseModel, ConfigDict, Field

# 选择器中代表"不过滤"的哨兵值
NO_CATEGORY = ""


class Entry(BaseModel):
    """目录条目。

    `name` 是唯一的展示键（不区分大小写）；`url` 只用于后续获取详情，
    编排层不会解引用它。
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="条目名称")
    url: str = Field(..., description="详情定位地址")

    @property
    def key(self) -> str:
        return self.name.casefold()

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class Category(BaseModel):
    """分类，一旦加载即不可变。"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="分类名称")


class CategoryOption(BaseModel):
    """分类选择器中的一行。"""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str

    @classmethod
    def placeholder(cls, label: str) -> "CategoryOption":
        return cls(label=label, value=NO_CATEGORY)

    @classmethod
    def from_category(cls, category: Category) -> "CategoryOption":
        return cls(label=category.name, value=category.name)
