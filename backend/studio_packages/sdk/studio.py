"""
Studio SDK 绑定 - 通过 pythonnet 调用 Sdl.ProjectAutomation

职责：
- 从 Studio 安装目录加载程序集（惰性加载）
- 打开 FileBasedProject 并封装为 IStudioProject
- PackageOptions -> ProjectPackageCreationOptions 映射
- IPackageReporter -> SDK 事件委托适配

依赖：
- pythonnet: .NET 互操作（仅 Windows + Studio 安装环境可用）

测试要点：
- test_apply_options_skips_unset: None 字段不写入
- test_apply_options_optional_report_fields: 报告字段仅在 SDK 对象存在时写入
- test_missing_install_dir: 安装目录不存在时抛出 SdkUnavailableError
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Any

from ..config import RuntimeConfig, get_config
from ..interfaces import (
    IPackageReporter,
    IProjectAutomation,
    IStudioProject,
    PackageOperationError,
    ProjectNotFoundError,
    SdkUnavailableError,
)
from ..models import (
    NO_DUE_DATE,
    FileRef,
    ManualTask,
    PackageOptions,
    PackageResult,
    PackageStatus,
    ProjectInfo,
    TaskKind,
)

logger = logging.getLogger(__name__)

# PackageOptions 字段 -> ProjectPackageCreationOptions 属性
_OPTION_PROPERTIES = {
    "include_auto_suggest_dictionaries": "IncludeAutoSuggestDictionaries",
    "include_main_translation_memories": "IncludeMainTranslationMemories",
    "include_termbases": "IncludeTermbases",
    "include_reports": "IncludeReports",
    "include_existing_reports": "IncludeExistingReports",
    "recompute_analysis_statistics": "RecomputeAnalysisStatistics",
    "remove_automated_translation_providers": "RemoveAutomatedTranslationProviders",
    "remove_server_based_translation_memories": "RemoveServerBasedTranslationMemories",
}

# 并非所有 SDK 版本都有的属性
_OPTIONAL_PROPERTIES = {"IncludeReports", "IncludeExistingReports"}


def apply_package_options(target: Any, options: PackageOptions, tm_enum: Any) -> Any:
    """
    将 PackageOptions 写入 SDK 选项对象

    Args:
        target: ProjectPackageCreationOptions 实例
        options: 本地选项（None 字段保持 SDK 默认值）
        tm_enum: ProjectTranslationMemoryPackageOptions 枚举类型

    Returns:
        target（便于链式使用）
    """
    if options.project_tm_mode is not None:
        target.ProjectTranslationMemoryOptions = getattr(tm_enum, options.project_tm_mode.value)

    for field, prop in _OPTION_PROPERTIES.items():
        value = getattr(options, field)
        if value is None:
            continue
        if prop in _OPTIONAL_PROPERTIES and not hasattr(target, prop):
            logger.debug(f"SDK 选项不支持 {prop}，跳过")
            continue
        setattr(target, prop, value)
    return target


def _to_dotnet_date(sdk: SimpleNamespace, value: datetime) -> Any:
    if value == NO_DUE_DATE:
        return sdk.DateTime.MaxValue
    return sdk.DateTime(value.year, value.month, value.day, value.hour, value.minute, value.second)


class _ReporterBridge:
    """IPackageReporter -> SDK EventHandler"""

    def __init__(self, reporter: IPackageReporter):
        self.reporter = reporter

    def on_status(self, sender: Any, args: Any) -> None:
        try:
            message = args.StatusMessage
            self.reporter.on_progress(int(args.PercentComplete), str(message) if message else None)
        except Exception:
            logger.debug("进度事件处理失败", exc_info=True)

    def on_message(self, sender: Any, args: Any) -> None:
        try:
            msg = args.Message
            exception = msg.Exception
            self.reporter.on_message(
                str(msg.Source),
                str(msg.Level),
                str(msg.Message),
                str(exception.Message) if exception is not None else None,
            )
        except Exception:
            logger.debug("消息事件处理失败", exc_info=True)


class StudioProject(IStudioProject):
    """FileBasedProject 封装"""

    def __init__(self, project: Any, sdk: SimpleNamespace, config: RuntimeConfig):
        self._project = project
        self._sdk = sdk
        self.config = config

    def get_info(self) -> ProjectInfo:
        info = self._project.GetProjectInfo()
        return ProjectInfo(
            name=str(info.Name),
            target_languages=[str(lang.IsoAbbreviation) for lang in info.TargetLanguages],
        )

    def get_task_files(self, language: str) -> list[FileRef]:
        files = self._project.GetTargetLanguageFiles(self._sdk.Language(language))
        return [FileRef(file_id=str(f.Id), name=str(f.Name)) for f in files]

    def create_manual_task(
        self,
        kind: TaskKind,
        assignee: str,
        due_date: datetime,
        files: list[FileRef],
    ) -> ManualTask:
        task_type_id = self.config.studio.task_type_ids.get(kind.value, kind.value)
        file_ids = self._sdk.Array[self._sdk.Guid](
            [self._sdk.Guid.Parse(f.file_id) for f in files]
        )
        try:
            task = self._project.CreateManualTask(
                task_type_id, assignee, _to_dotnet_date(self._sdk, due_date), file_ids
            )
        except Exception as e:
            raise PackageOperationError(f"手动任务创建失败: {e}") from e
        return ManualTask(
            task_id=str(task.Id),
            kind=kind,
            assignee=assignee,
            due_date=due_date,
            files=files,
        )

    def create_package(
        self,
        task_id: str,
        name: str,
        comment: str,
        options: PackageOptions,
        reporter: IPackageReporter,
    ) -> PackageResult:
        sdk_options = apply_package_options(
            self._sdk.ProjectPackageCreationOptions(),
            options,
            self._sdk.ProjectTranslationMemoryPackageOptions,
        )
        bridge = _ReporterBridge(reporter)
        try:
            creation = self._project.CreatePackage(
                self._sdk.Guid.Parse(task_id),
                name,
                comment,
                sdk_options,
                self._sdk.EventHandler[self._sdk.ProjectPackageCreationEventArgs](bridge.on_status),
                self._sdk.EventHandler[self._sdk.MessageEventArgs](bridge.on_message),
            )
        except Exception as e:
            raise PackageOperationError(f"项目包创建失败: {e}") from e
        return PackageResult(
            package_id=str(creation.PackageId),
            status=PackageStatus.from_sdk(str(creation.Status)),
        )

    def save_package(self, package_id: str, path: Path) -> None:
        try:
            self._project.SavePackageAs(self._sdk.Guid.Parse(package_id), str(path))
        except Exception as e:
            raise PackageOperationError(f"项目包保存失败: {path}: {e}") from e

    def import_return_package(self, path: Path, reporter: IPackageReporter) -> None:
        bridge = _ReporterBridge(reporter)
        try:
            result = self._project.ImportReturnPackage(
                str(path),
                self._sdk.EventHandler[self._sdk.ProjectPackageImportEventArgs](bridge.on_status),
                self._sdk.EventHandler[self._sdk.MessageEventArgs](bridge.on_message),
            )
        except Exception as e:
            raise PackageOperationError(f"返回包导入失败: {path}: {e}") from e

        status = getattr(result, "Status", None)
        if status is not None and PackageStatus.from_sdk(str(status)) is not PackageStatus.COMPLETED:
            raise PackageOperationError(f"返回包导入状态: {status}")


class StudioProjectAutomation(IProjectAutomation):
    """Sdl.ProjectAutomation.FileBased 封装"""

    def __init__(self, install_dir: str | None = None, config: RuntimeConfig | None = None):
        self.config = config or get_config()
        self.install_dir = Path(install_dir or self.config.studio.install_dir)
        self._sdk: SimpleNamespace | None = None

    def _load_sdk(self) -> SimpleNamespace:
        """加载 .NET 程序集并缓存类型引用"""
        if self._sdk is not None:
            return self._sdk

        if not self.install_dir.is_dir():
            raise SdkUnavailableError(f"Studio安装目录不存在: {self.install_dir}")

        try:
            import clr
        except ImportError as e:
            raise SdkUnavailableError("pythonnet未安装，无法加载 Studio SDK") from e

        # 依赖程序集从安装目录解析
        if str(self.install_dir) not in sys.path:
            sys.path.append(str(self.install_dir))

        try:
            for name in self.config.studio.assemblies:
                clr.AddReference(str(self.install_dir / f"{name}.dll"))

            from Sdl.Core.Globalization import Language
            from Sdl.ProjectAutomation.Core import (
                MessageEventArgs,
                ProjectPackageCreationEventArgs,
                ProjectPackageCreationOptions,
                ProjectPackageImportEventArgs,
                ProjectTranslationMemoryPackageOptions,
            )
            from Sdl.ProjectAutomation.FileBased import FileBasedProject
            from System import Array, DateTime, EventHandler, Guid
        except Exception as e:
            raise SdkUnavailableError(f"Studio SDK 加载失败: {e}") from e

        self._sdk = SimpleNamespace(
            Array=Array,
            DateTime=DateTime,
            EventHandler=EventHandler,
            FileBasedProject=FileBasedProject,
            Guid=Guid,
            Language=Language,
            MessageEventArgs=MessageEventArgs,
            ProjectPackageCreationEventArgs=ProjectPackageCreationEventArgs,
            ProjectPackageCreationOptions=ProjectPackageCreationOptions,
            ProjectPackageImportEventArgs=ProjectPackageImportEventArgs,
            ProjectTranslationMemoryPackageOptions=ProjectTranslationMemoryPackageOptions,
        )
        logger.info(f"Studio SDK 已加载: {self.install_dir}")
        return self._sdk

    def open_project(self, project_path: Path) -> IStudioProject:
        sdk = self._load_sdk()
        try:
            project = sdk.FileBasedProject(str(Path(project_path).resolve()))
        except Exception as e:
            raise ProjectNotFoundError(f"无法打开项目: {project_path}: {e}") from e
        return StudioProject(project, sdk, self.config)
