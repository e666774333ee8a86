"""
包选项模型 - 定义项目包内容的开关与构建规则

对应 SDK 的 ProjectPackageCreationOptions。本地构建为不可变值，
按值传入 create_package，不存在全局共享的可变默认值。

测试要点：
- test_switch_sets_field: 每个开关映射到对应字段
- test_create_new_forces_reports: CreateNew 强制包含报告
- test_existing_reports_forces_reports: 包含现有报告时强制包含报告
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ..interfaces import InvalidArgumentError


class _ChoiceEnum(str, Enum):
    """可按名称（大小写不敏感）解析的枚举"""

    @classmethod
    def parse(cls, value: str | _ChoiceEnum):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise InvalidArgumentError(f"无效的{cls.__doc__}: {value!r}（允许值: {allowed}）")


class TaskKind(_ChoiceEnum):
    """手动任务类型"""

    TRANSLATE = "Translate"
    REVIEW = "Review"


class ProjectTmMode(_ChoiceEnum):
    """项目TM打包方式"""

    NONE = "None"
    USE_EXISTING = "UseExisting"
    CREATE_NEW = "CreateNew"


class PackageSwitches(BaseModel):
    """命令行开关（七项）"""

    include_auto_suggest_dictionaries: bool = False
    include_main_translation_memories: bool = False
    include_termbases: bool = False
    include_existing_reports: bool = False
    recompute_analysis_statistics: bool = False
    keep_automated_translation_providers: bool = False
    remove_server_based_translation_memories: bool = False

    model_config = {"frozen": True}


class PackageOptions(BaseModel):
    """项目包选项（None 表示保留 SDK 默认值）"""

    project_tm_mode: ProjectTmMode | None = None
    include_auto_suggest_dictionaries: bool | None = None
    include_main_translation_memories: bool | None = None
    include_termbases: bool | None = None
    include_reports: bool | None = None
    include_existing_reports: bool | None = None
    recompute_analysis_statistics: bool | None = None
    remove_automated_translation_providers: bool | None = None
    remove_server_based_translation_memories: bool | None = None
    comment: str | None = None

    model_config = {"frozen": True}

    def pinned_fields(self) -> dict[str, object]:
        """已显式设置的字段（不含 comment）"""
        return {
            k: v for k, v in self.model_dump(exclude={"comment"}).items()
            if v is not None
        }


def unconfigured_package_options() -> PackageOptions:
    """未配置的选项（全部沿用 SDK 默认值）"""
    return PackageOptions()


def conservative_package_options() -> PackageOptions:
    """保守默认选项：不附带任何可选内容，移除自动翻译提供方"""
    return PackageOptions(
        project_tm_mode=ProjectTmMode.NONE,
        include_auto_suggest_dictionaries=False,
        include_main_translation_memories=False,
        include_termbases=False,
        include_reports=False,
        include_existing_reports=False,
        recompute_analysis_statistics=False,
        remove_automated_translation_providers=True,
        remove_server_based_translation_memories=False,
        comment="",
    )


def build_package_options(
    tm_mode: ProjectTmMode | str = ProjectTmMode.NONE,
    switches: PackageSwitches | None = None,
    comment: str = "",
    base: PackageOptions | None = None,
) -> PackageOptions:
    """
    由保守默认值 + 开关构建包选项

    规则：
    1. 开关为 True 时覆盖对应字段；未给出的开关保持基础值
    2. keep_automated_translation_providers 反向映射为 remove_automated_translation_providers=False
    3. CreateNew 时 SDK 需要 include_reports 才会创建新项目TM，强制打开
    4. include_existing_reports 同样需要 include_reports
    """
    mode = ProjectTmMode.parse(tm_mode)
    switches = switches or PackageSwitches()
    base = base or conservative_package_options()

    update: dict[str, object] = {"project_tm_mode": mode, "comment": comment or ""}

    for name in (
        "include_auto_suggest_dictionaries",
        "include_main_translation_memories",
        "include_termbases",
        "include_existing_reports",
        "recompute_analysis_statistics",
        "remove_server_based_translation_memories",
    ):
        if getattr(switches, name):
            update[name] = True

    if switches.keep_automated_translation_providers:
        update["remove_automated_translation_providers"] = False

    if mode is ProjectTmMode.CREATE_NEW:
        update["include_reports"] = True

    if switches.include_existing_reports:
        update["include_reports"] = True

    return base.model_copy(update=update)
