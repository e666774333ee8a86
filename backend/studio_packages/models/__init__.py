"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- PackageOptions: 项目包选项（不可变）
- ExportRequest / ImportRequest: 操作输入
- ProjectInfo / ManualTask / PackageResult: SDK 边界数据
- RunReport: 批处理结果
"""

from .options import (
    PackageOptions,
    PackageSwitches,
    ProjectTmMode,
    TaskKind,
    build_package_options,
    conservative_package_options,
    unconfigured_package_options,
)
from .project import (
    NO_DUE_DATE,
    FileRef,
    ManualTask,
    MessageLevel,
    PackageResult,
    PackageStatus,
    ProjectInfo,
    TargetLanguage,
)
from .report import ItemOutcome, RunReport
from .request import ExportRequest, ImportRequest, parse_language_filter

__all__ = [
    "PackageOptions",
    "PackageSwitches",
    "ProjectTmMode",
    "TaskKind",
    "build_package_options",
    "conservative_package_options",
    "unconfigured_package_options",
    "NO_DUE_DATE",
    "FileRef",
    "ManualTask",
    "MessageLevel",
    "PackageResult",
    "PackageStatus",
    "ProjectInfo",
    "TargetLanguage",
    "ItemOutcome",
    "RunReport",
    "ExportRequest",
    "ImportRequest",
    "parse_language_filter",
]
