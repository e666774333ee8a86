"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载 Studio 安装路径/程序集/任务类型等运行参数
- 提供环境变量覆盖机制（前缀 STUDIO_PKG_，嵌套分隔符 __）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

# 仓库根目录下的 config/runtime.yaml，与当前工作目录无关
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "runtime.yaml"


class StudioConfig(BaseModel):
    """Studio SDK 配置"""

    install_dir: str = r"C:\Program Files (x86)\Trados\Trados Studio\Studio17"
    assemblies: list[str] = Field(
        default_factory=lambda: [
            "Sdl.Core.Globalization",
            "Sdl.ProjectAutomation.Core",
            "Sdl.ProjectAutomation.FileBased",
        ]
    )
    # TaskKind -> 手动任务类型ID
    task_type_ids: dict[str, str] = Field(
        default_factory=lambda: {"Translate": "Translate", "Review": "Review"}
    )


class PackagesConfig(BaseModel):
    """包文件配置"""

    package_ext: str = ".sdlppx"
    return_package_ext: str = ".sdlrpx"
    assignee_suffix: str = " translator"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "studio_packages.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    base_dir: Path = Path(".")

    studio: StudioConfig = Field(default_factory=StudioConfig)
    packages: PackagesConfig = Field(default_factory=PackagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "STUDIO_PKG_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        # 环境变量优先于YAML：只取环境变量实际设置过的字段覆盖YAML值
        env_config = cls()
        sections = {}
        for key in ("studio", "packages", "logging"):
            section = getattr(env_config, key)
            sections[key] = {
                **cls._extract(runtime_opts, key),
                **section.model_dump(include=section.model_fields_set),
            }

        config = cls(
            base_dir=path.parent,
            studio=StudioConfig(**sections["studio"]),
            packages=PackagesConfig(**sections["packages"]),
            logging=LoggingConfig(**sections["logging"]),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            else:
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if self.logging.log_file:
            log_file = Path(self.logging.log_file)
            if not log_file.is_absolute():
                self.logging.log_file = str((base_dir / log_file).resolve())

    @property
    def install_dir(self) -> Path:
        return Path(self.studio.install_dir)

    def package_file_name(self, project_name: str, language: str) -> str:
        """包文件名：<项目名>_<语言代码>.sdlppx"""
        return f"{project_name}_{language}{self.packages.package_ext}"


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
