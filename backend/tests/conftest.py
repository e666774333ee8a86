"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(fake_automation, demo_project_path):
        project = fake_automation.open_project(demo_project_path)
"""

from __future__ import annotations

import io
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest
from rich.console import Console

from studio_packages.config import RuntimeConfig
from studio_packages.interfaces import (
    IPackageReporter,
    IProjectAutomation,
    IStudioProject,
    PackageOperationError,
    ProjectNotFoundError,
)
from studio_packages.models import (
    FileRef,
    ManualTask,
    PackageOptions,
    PackageResult,
    PackageStatus,
    ProjectInfo,
    TaskKind,
)


# ============================================================================
# SDK 假实现
# ============================================================================

class FakeStudioProject(IStudioProject):
    """内存项目：记录所有调用"""

    def __init__(
        self,
        name: str = "Demo",
        languages: list[str] | None = None,
        statuses: dict[str, PackageStatus] | None = None,
        failing_imports: set[str] | None = None,
    ):
        self.name = name
        self.languages = languages if languages is not None else ["fi-FI", "sv-SE", "de-DE"]
        self.statuses = statuses or {}
        self.failing_imports = failing_imports or set()
        self.calls: list[tuple] = []
        self.tasks: list[ManualTask] = []
        self.saved: list[tuple[str, Path]] = []
        self.imported: list[Path] = []

    def get_info(self) -> ProjectInfo:
        self.calls.append(("get_info",))
        return ProjectInfo(name=self.name, target_languages=list(self.languages))

    def get_task_files(self, language: str) -> list[FileRef]:
        self.calls.append(("get_task_files", language))
        return [FileRef(file_id=f"{language}-1", name=f"doc.{language}.docx")]

    def create_manual_task(
        self,
        kind: TaskKind,
        assignee: str,
        due_date: datetime,
        files: list[FileRef],
    ) -> ManualTask:
        self.calls.append(("create_manual_task", kind, assignee, due_date))
        task = ManualTask(
            task_id=f"task-{len(self.tasks) + 1}",
            kind=kind,
            assignee=assignee,
            due_date=due_date,
            files=files,
        )
        self.tasks.append(task)
        return task

    def create_package(
        self,
        task_id: str,
        name: str,
        comment: str,
        options: PackageOptions,
        reporter: IPackageReporter,
    ) -> PackageResult:
        self.calls.append(("create_package", task_id, name, comment, options))
        reporter.on_progress(50, f"Packaging {name}")
        reporter.on_message("PackageCreation", "Information", f"{name} created")
        language = name.rsplit("_", 1)[-1]
        status = self.statuses.get(language, PackageStatus.COMPLETED)
        return PackageResult(package_id=f"pkg-{name}", status=status)

    def save_package(self, package_id: str, path: Path) -> None:
        self.calls.append(("save_package", package_id, path))
        self.saved.append((package_id, path))
        path.write_bytes(b"PK")

    def import_return_package(self, path: Path, reporter: IPackageReporter) -> None:
        self.calls.append(("import_return_package", path))
        if path.name in self.failing_imports:
            reporter.on_message("PackageImport", "Error", f"{path.name} is corrupt")
            raise PackageOperationError(f"返回包导入失败: {path}")
        self.imported.append(path)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakeAutomation(IProjectAutomation):
    """内存自动化入口"""

    def __init__(self, project: FakeStudioProject | None = None):
        self.project = project or FakeStudioProject()
        self.opened: list[Path] = []

    def open_project(self, project_path: Path) -> IStudioProject:
        if project_path.suffix.lower() != ".sdlproj":
            raise ProjectNotFoundError(f"无法打开项目: {project_path}")
        self.opened.append(project_path)
        return self.project


class RecordingReporter:
    """记录回调的 reporter"""

    def __init__(self):
        self.progress: list[tuple[int, str | None]] = []
        self.messages: list[tuple[str, str, str, str | None]] = []

    def on_progress(self, percent: int, message: str | None = None) -> None:
        self.progress.append((percent, message))

    def on_message(self, source: str, level: str, text: str, exception: str | None = None) -> None:
        self.messages.append((source, level, text, exception))


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置"""
    return RuntimeConfig()


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def demo_project_path(temp_dir: Path) -> Path:
    """示例项目文件（空文件）"""
    path = temp_dir / "Demo" / "Demo.sdlproj"
    path.parent.mkdir(parents=True)
    path.write_text("<Project />", encoding="utf-8")
    return path


# ============================================================================
# SDK / 输出 Fixtures
# ============================================================================

@pytest.fixture
def fake_project() -> FakeStudioProject:
    return FakeStudioProject()


@pytest.fixture
def fake_automation(fake_project: FakeStudioProject) -> FakeAutomation:
    return FakeAutomation(fake_project)


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    """无颜色的内存控制台"""
    return Console(file=console_output, force_terminal=False, color_system=None, width=200)


@pytest.fixture
def make_project():
    """FakeStudioProject 工厂"""
    return FakeStudioProject


@pytest.fixture
def make_automation():
    """FakeAutomation 工厂"""
    return FakeAutomation
