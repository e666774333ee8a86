"""
命令行入口 - export-package / import-package

使用方式：
    studio-packages export-package -p D:\\Projects\\Demo\\Demo.sdlproj -o D:\\Out -l "fi-FI,sv-SE"
    studio-packages import-package -p D:\\Projects\\Demo\\Demo.sdlproj -i D:\\Returns
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import LoggingConfig, RuntimeConfig, get_config, reload_config
from .interfaces import IProjectAutomation, StudioPackagesError
from .models import ExportRequest, ImportRequest, PackageSwitches, ProjectTmMode, TaskKind
from .pipeline import ConsolePackageReporter, PackageExporter, PackageImporter

logger = logging.getLogger(__name__)

# 开关参数 -> PackageSwitches 字段
_SWITCH_FLAGS = {
    "--include-auto-suggest-dictionaries": "include_auto_suggest_dictionaries",
    "--include-main-tms": "include_main_translation_memories",
    "--include-termbases": "include_termbases",
    "--include-existing-reports": "include_existing_reports",
    "--recompute-analysis": "recompute_analysis_statistics",
    "--keep-automated-translation-providers": "keep_automated_translation_providers",
    "--remove-server-based-tms": "remove_server_based_translation_memories",
}


def configure_logging(config: LoggingConfig, level: str | None = None) -> None:
    """按运行期配置初始化日志"""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_to_file:
        log_file = Path(config.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studio-packages",
        description="Create and import Trados Studio project packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default="", help="运行期配置YAML（默认：config/runtime.yaml）")
    parser.add_argument("--log-level", default="", help="日志级别（覆盖配置）")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser(
        "export-package",
        aliases=["export"],
        help="为每个目标语言创建项目包（.sdlppx）",
    )
    export.add_argument("-p", "--project-location", required=True, help="项目文件路径（.sdlproj）")
    export.add_argument("-o", "--output-location", required=True, help="输出目录（不存在时创建）")
    export.add_argument(
        "-l",
        "--target-languages",
        default=None,
        help='目标语言，空格/分号/逗号分隔，如 "fi-FI,sv-SE"（默认：项目全部目标语言）',
    )
    export.add_argument(
        "-t",
        "--task-type",
        default=TaskKind.TRANSLATE.value,
        help=f"手动任务类型：{' | '.join(k.value for k in TaskKind)}",
    )
    export.add_argument(
        "-m",
        "--project-tm-mode",
        default=ProjectTmMode.NONE.value,
        help=f"项目TM：{' | '.join(m.value for m in ProjectTmMode)}",
    )
    export.add_argument("-c", "--comment", default="", help="包备注")
    for flag, field in _SWITCH_FLAGS.items():
        export.add_argument(flag, dest=field, action="store_true")
    export.set_defaults(handler=_run_export)

    imp = sub.add_parser(
        "import-package",
        aliases=["import"],
        help="导入返回包（.sdlrpx，目录递归搜索）",
    )
    imp.add_argument("-p", "--project-location", required=True, help="项目文件路径（.sdlproj）")
    imp.add_argument("-i", "--import-location", required=True, help="返回包文件或目录")
    imp.set_defaults(handler=_run_import)

    return parser


def _run_export(
    args: argparse.Namespace,
    automation: IProjectAutomation,
    console: Console,
    config: RuntimeConfig,
) -> int:
    request = ExportRequest(
        project_path=Path(args.project_location),
        output_dir=Path(args.output_location),
        languages=args.target_languages,
        task_kind=args.task_type,
        tm_mode=args.project_tm_mode,
        comment=args.comment,
        switches=PackageSwitches(**{field: getattr(args, field) for field in _SWITCH_FLAGS.values()}),
    )
    exporter = PackageExporter(
        automation, ConsolePackageReporter(console), console=console, config=config
    )
    report = exporter.export(request)
    logger.info(f"导出完成: 成功 {len(report.succeeded)}，失败 {len(report.failed)}")
    return 0


def _run_import(
    args: argparse.Namespace,
    automation: IProjectAutomation,
    console: Console,
    config: RuntimeConfig,
) -> int:
    request = ImportRequest(
        project_path=Path(args.project_location),
        import_location=Path(args.import_location),
    )
    importer = PackageImporter(
        automation, ConsolePackageReporter(console), console=console, config=config
    )
    report = importer.import_packages(request)
    logger.info(f"导入完成: 成功 {len(report.succeeded)}，失败 {len(report.failed)}")
    return 0


def main(
    argv: list[str] | None = None,
    automation: IProjectAutomation | None = None,
    console: Console | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = reload_config(args.config) if args.config else get_config()
    configure_logging(config.logging, args.log_level or None)
    console = console or Console()

    if automation is None:
        from .sdk import StudioProjectAutomation

        automation = StudioProjectAutomation(config=config)

    try:
        return args.handler(args, automation, console, config)
    except StudioPackagesError as e:
        logger.error(str(e))
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
