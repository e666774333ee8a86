"""
项目模型 - SDK 边界上交换的数据结构

- ProjectInfo: 项目名称与目标语言
- TargetLanguage: 语言代码 + 派生的指派人标签
- FileRef / ManualTask: 手动任务及其文件
- PackageResult: 包创建结果
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .options import TaskKind

# 无截止日期（对应 SDK 的 DateTime.MaxValue）
NO_DUE_DATE = datetime.max


class PackageStatus(str, Enum):
    """包创建状态"""
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    UNKNOWN = "Unknown"

    @classmethod
    def from_sdk(cls, name: str) -> PackageStatus:
        for member in cls:
            if member.value.lower() == str(name).lower():
                return member
        return cls.UNKNOWN


class MessageLevel(str, Enum):
    """SDK 消息级别"""
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"


class ProjectInfo(BaseModel):
    """项目信息"""
    name: str
    target_languages: list[str] = Field(default_factory=list)


class TargetLanguage(BaseModel):
    """目标语言"""
    code: str
    assignee_suffix: str = " translator"

    @property
    def assignee(self) -> str:
        """名义指派人，如 'fi-FI translator'"""
        return f"{self.code}{self.assignee_suffix}"

    def package_name(self, project_name: str) -> str:
        return f"{project_name}_{self.code}"


class FileRef(BaseModel):
    """项目文件引用"""
    file_id: str
    name: str = ""


class ManualTask(BaseModel):
    """手动任务"""
    task_id: str
    kind: TaskKind
    assignee: str
    due_date: datetime = NO_DUE_DATE
    files: list[FileRef] = Field(default_factory=list)


class PackageResult(BaseModel):
    """包创建结果"""
    package_id: str
    status: PackageStatus

    @property
    def completed(self) -> bool:
        return self.status is PackageStatus.COMPLETED
