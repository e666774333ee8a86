"""
包导出器 - 按目标语言创建并保存项目包

职责：
1. 校验项目路径并打开项目
2. 确定目标语言（过滤串或项目全部目标语言）
3. 每个语言：取文件 -> 建手动任务 -> 建包 -> 状态为 Completed 时保存
4. 单语言失败隔离（输出失败行，继续下一个语言）

测试要点：
- test_one_package_per_language: 每个语言一个包
- test_default_languages_from_project: 未过滤时使用项目语言顺序
- test_not_completed_skips_save: 非 Completed 不保存且继续
- test_invalid_project_fails_fast: 项目路径无效立即失败
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import RuntimeConfig, get_config
from ..interfaces import (
    IPackageReporter,
    IProjectAutomation,
    InvalidArgumentError,
    IStudioProject,
    PackageOperationError,
    ProjectNotFoundError,
)
from ..models import (
    NO_DUE_DATE,
    ExportRequest,
    PackageOptions,
    RunReport,
    TargetLanguage,
    build_package_options,
)
from .reporter import ConsolePackageReporter

logger = logging.getLogger(__name__)


def open_project(automation: IProjectAutomation, project_path: Path) -> IStudioProject:
    """校验路径后打开项目"""
    if not project_path.exists():
        raise ProjectNotFoundError(f"项目文件不存在: {project_path}")
    return automation.open_project(project_path)


class PackageExporter:
    """项目包导出器"""

    def __init__(
        self,
        automation: IProjectAutomation,
        reporter: IPackageReporter | None = None,
        console: Console | None = None,
        config: RuntimeConfig | None = None,
    ):
        self.automation = automation
        self.config = config or get_config()
        self.console = console or Console()
        self.reporter = reporter or ConsolePackageReporter(self.console)

    def export(self, request: ExportRequest) -> RunReport:
        """执行导出"""
        if request.output_dir.exists() and not request.output_dir.is_dir():
            raise InvalidArgumentError(f"输出位置不是目录: {request.output_dir}")
        project = open_project(self.automation, request.project_path)
        info = project.get_info()
        report = RunReport(operation="export", project=info.name)

        languages = request.languages or list(info.target_languages)
        options = build_package_options(
            request.tm_mode, request.switches, comment=request.comment
        )

        self._prepare_output_dir(request.output_dir)
        logger.info(f"导出项目包: {info.name} -> {request.output_dir} ({', '.join(languages)})")

        for code in languages:
            language = TargetLanguage(
                code=code, assignee_suffix=self.config.packages.assignee_suffix
            )
            try:
                path = self._export_language(project, info.name, language, request, options)
            except Exception as e:
                logger.warning(f"项目包创建失败: {info.name}_{code}: {e}")
                self.console.print(f"[red]Failed to create package for {escape(code)}: {escape(str(e))}[/red]")
                report.add_failure(code, str(e))
                continue
            report.add_success(code, path)

        report.mark_finished()
        return report

    @staticmethod
    def _prepare_output_dir(output_dir: Path) -> None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InvalidArgumentError(f"无法创建输出目录: {output_dir}: {e}") from e

    def _export_language(
        self,
        project: IStudioProject,
        project_name: str,
        language: TargetLanguage,
        request: ExportRequest,
        options: PackageOptions,
    ) -> Path:
        """导出单个语言的项目包"""
        package_name = language.package_name(project_name)
        self.console.print(f"[bold]Creating package {escape(package_name)}[/bold]")

        files = project.get_task_files(language.code)
        if not files:
            raise PackageOperationError(f"目标语言无文件: {language.code}")

        task = project.create_manual_task(
            request.task_kind, language.assignee, NO_DUE_DATE, files
        )
        result = project.create_package(
            task.task_id, package_name, options.comment or "", options, self.reporter
        )
        if not result.completed:
            raise PackageOperationError(f"项目包状态: {result.status.value}")

        path = request.output_dir / self.config.package_file_name(project_name, language.code)
        project.save_package(result.package_id, path)
        self.console.print(f"[green]Package saved: {escape(str(path))}[/green]")
        logger.info(f"项目包已保存: {path}")
        return path
