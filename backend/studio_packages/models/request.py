"""
请求模型 - 导出/导入操作的输入参数

在边界处完成校验：任务类型与项目TM模式越界时抛出 InvalidArgumentError，
此时尚未发生任何 SDK 调用。
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .options import PackageSwitches, ProjectTmMode, TaskKind

_LANGUAGE_SEPARATORS = re.compile(r"[ ;,]+")


def parse_language_filter(value: str | list[str] | None) -> list[str] | None:
    """
    解析目标语言过滤串

    "fi-FI,sv-SE; de-DE en-US" -> ["fi-FI", "sv-SE", "de-DE", "en-US"]
    None/空串 -> None（表示使用项目全部目标语言）
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    codes: list[str] = []
    for item in value:
        codes.extend(code for code in _LANGUAGE_SEPARATORS.split(item) if code)
    return codes or None


class ExportRequest(BaseModel):
    """导出包请求"""

    project_path: Path
    output_dir: Path
    languages: list[str] | None = None
    task_kind: TaskKind = TaskKind.TRANSLATE
    tm_mode: ProjectTmMode = ProjectTmMode.NONE
    comment: str = ""
    switches: PackageSwitches = Field(default_factory=PackageSwitches)

    @field_validator("languages", mode="before")
    @classmethod
    def _split_languages(cls, v):
        return parse_language_filter(v)

    @field_validator("task_kind", mode="before")
    @classmethod
    def _parse_task_kind(cls, v):
        return TaskKind.parse(v)

    @field_validator("tm_mode", mode="before")
    @classmethod
    def _parse_tm_mode(cls, v):
        return ProjectTmMode.parse(v)


class ImportRequest(BaseModel):
    """导入返回包请求"""

    project_path: Path
    import_location: Path
