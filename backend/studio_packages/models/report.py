"""
运行报告 - 记录每个语言/文件的处理结果

批处理语义：单项失败记录在报告中，不中断其余项。
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


class ItemOutcome(BaseModel):
    """单项结果"""
    item: str
    succeeded: bool
    path: Path | None = None
    error: str | None = None


class RunReport(BaseModel):
    """一次导出/导入的运行报告"""

    operation: str
    project: str = ""
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None

    def add_success(self, item: str, path: Path | None = None) -> None:
        self.outcomes.append(ItemOutcome(item=item, succeeded=True, path=path))

    def add_failure(self, item: str, error: str) -> None:
        self.outcomes.append(ItemOutcome(item=item, succeeded=False, error=error))

    def mark_finished(self) -> None:
        self.finished_at = datetime.now()

    @property
    def succeeded(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.succeeded]
