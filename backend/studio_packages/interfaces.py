"""
模块接口契约 - 定义 SDK 边界与回调的抽象接口

设计原则：
1. 流程编排只依赖接口，不直接依赖 SDK 绑定
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（测试中使用内存假实现）

使用方式：
    from studio_packages.interfaces import IProjectAutomation

    class MyAutomation(IProjectAutomation):
        def open_project(self, project_path: Path) -> IStudioProject:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import (
        FileRef,
        ManualTask,
        PackageOptions,
        PackageResult,
        ProjectInfo,
        TaskKind,
    )


# ============================================================================
# 回调接口
# ============================================================================

class IPackageReporter(Protocol):
    """包创建/导入过程的回调协议

    由 SDK 在长时间运行的调用中同步触发。实现方不得抛出异常，
    否则会中断进行中的 SDK 操作。
    """

    def on_progress(self, percent: int, message: str | None = None) -> None:
        """进度回调"""
        ...

    def on_message(
        self,
        source: str,
        level: str,
        text: str,
        exception: str | None = None,
    ) -> None:
        """结构化消息回调"""
        ...


# ============================================================================
# SDK 边界接口
# ============================================================================

class IStudioProject(ABC):
    """已打开的项目句柄"""

    @abstractmethod
    def get_info(self) -> ProjectInfo:
        """
        获取项目信息

        Returns:
            项目名称与目标语言列表（保持项目中的顺序）
        """
        ...

    @abstractmethod
    def get_task_files(self, language: str) -> list[FileRef]:
        """获取目标语言下的项目文件"""
        ...

    @abstractmethod
    def create_manual_task(
        self,
        kind: TaskKind,
        assignee: str,
        due_date: datetime,
        files: list[FileRef],
    ) -> ManualTask:
        """
        创建手动任务

        Args:
            kind: 任务类型（Translate/Review）
            assignee: 指派人
            due_date: 截止日期（datetime.max 表示无截止日期）
            files: 任务涵盖的文件

        Returns:
            创建的任务
        """
        ...

    @abstractmethod
    def create_package(
        self,
        task_id: str,
        name: str,
        comment: str,
        options: PackageOptions,
        reporter: IPackageReporter,
    ) -> PackageResult:
        """
        创建项目包

        Raises:
            PackageOperationError: SDK 调用失败
        """
        ...

    @abstractmethod
    def save_package(self, package_id: str, path: Path) -> None:
        """保存项目包（仅在状态为 Completed 时调用）"""
        ...

    @abstractmethod
    def import_return_package(self, path: Path, reporter: IPackageReporter) -> None:
        """
        导入返回包

        Raises:
            PackageOperationError: SDK 调用失败
        """
        ...


class IProjectAutomation(ABC):
    """项目自动化入口"""

    @abstractmethod
    def open_project(self, project_path: Path) -> IStudioProject:
        """
        打开项目

        Args:
            project_path: 项目文件路径（.sdlproj）

        Returns:
            项目句柄

        Raises:
            ProjectNotFoundError: 路径无法解析为有效项目
            SdkUnavailableError: SDK 无法加载
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class StudioPackagesError(Exception):
    """基础异常"""
    pass


class InvalidArgumentError(StudioPackagesError):
    """参数错误（枚举越界、路径缺失等）"""
    pass


class ProjectNotFoundError(StudioPackagesError):
    """项目路径无法解析"""
    pass


class SdkUnavailableError(StudioPackagesError):
    """SDK 未安装或无法加载"""
    pass


class PackageOperationError(StudioPackagesError):
    """包创建/保存/导入失败"""
    pass
