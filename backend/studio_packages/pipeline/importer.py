"""
返回包导入器 - 逐个导入 .sdlrpx

职责：
1. 发现返回包（单文件或目录递归搜索）
2. 顺序导入，导入前输出文件名
3. 单文件失败隔离

测试要点：
- test_discover_recursive: 任意深度递归发现
- test_one_import_per_file: 每个文件一次导入，按发现顺序
- test_no_files_is_not_error: 无文件时不报错
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import RuntimeConfig, get_config
from ..interfaces import (
    InvalidArgumentError,
    IPackageReporter,
    IProjectAutomation,
)
from ..models import ImportRequest, RunReport
from .exporter import open_project
from .reporter import ConsolePackageReporter

logger = logging.getLogger(__name__)


def discover_return_packages(location: Path, extension: str = ".sdlrpx") -> list[Path]:
    """
    发现返回包

    Args:
        location: 单个返回包文件，或递归搜索的目录
        extension: 返回包扩展名（大小写不敏感）

    Returns:
        按相对路径排序的文件列表
    """
    if location.is_file():
        return [location]
    if not location.is_dir():
        raise InvalidArgumentError(f"导入位置不存在: {location}")

    suffix = extension.lower()
    found = [
        p for p in location.rglob("*")
        if p.is_file() and p.suffix.lower() == suffix
    ]
    return sorted(found, key=lambda p: p.relative_to(location).parts)


class PackageImporter:
    """返回包导入器"""

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

    def import_packages(self, request: ImportRequest) -> RunReport:
        """执行导入"""
        project = open_project(self.automation, request.project_path)
        info = project.get_info()
        report = RunReport(operation="import", project=info.name)

        packages = discover_return_packages(
            request.import_location, self.config.packages.return_package_ext
        )
        if not packages:
            logger.warning(f"未找到返回包: {request.import_location}")

        for package_path in packages:
            self.console.print(f"[bold]{escape(package_path.name)}[/bold]")
            try:
                project.import_return_package(package_path, self.reporter)
            except Exception as e:
                logger.warning(f"返回包导入失败: {package_path}: {e}")
                self.console.print(f"[red]Failed to import {escape(package_path.name)}: {escape(str(e))}[/red]")
                report.add_failure(package_path.name, str(e))
                continue
            report.add_success(package_path.name, package_path)

        report.mark_finished()
        return report
