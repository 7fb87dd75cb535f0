"""View state owned by the orchestrator and the snapshot handed to presentation."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, computed_field

from src.modules.catalog.domain.entities import CategoryOption, Entry


class ViewState:
    """可见条目的唯一持有者。

    只有编排器在通过新鲜度检查后才能调用 commit；每次提交整体替换条目序列，
    不做增量合并。
    """

    def __init__(self) -> None:
        self.visible_entries: tuple[Entry, ...] = ()
        self.committed_by: str | None = None

    def commit(self, lineage: str, entries: Iterable[Entry]) -> None:
        self.visible_entries = tuple(entries)
        self.committed_by = lineage


class ViewSnapshot(BaseModel):
    """Read-only view of the catalog for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    visible_entries: tuple[Entry, ...]
    is_loading: bool
    categories: tuple[CategoryOption, ...]
    selected_category: str
    limit: int
    committed_by: str | None = None

    @computed_field
    @property
    def mode(self) -> str:
        return "category" if self.selected_category else "limit"
