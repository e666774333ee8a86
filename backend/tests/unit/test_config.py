"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest

from studio_packages.config import RuntimeConfig, reload_config
from studio_packages.config.runtime_config import DEFAULT_CONFIG_PATH


class TestRuntimeConfig:
    """运行期配置测试"""

    def test_default_config(self, runtime_config: RuntimeConfig):
        """测试默认配置"""
        assert runtime_config.packages.package_ext == ".sdlppx"
        assert runtime_config.packages.return_package_ext == ".sdlrpx"
        assert runtime_config.studio.task_type_ids["Review"] == "Review"
        assert "Sdl.ProjectAutomation.FileBased" in runtime_config.studio.assemblies

    def test_package_file_name(self, runtime_config: RuntimeConfig):
        """测试包文件命名"""
        assert runtime_config.package_file_name("Demo", "fi-FI") == "Demo_fi-FI.sdlppx"

    def test_missing_yaml_returns_defaults(self, temp_dir: Path):
        """测试配置文件不存在时使用默认值"""
        config = RuntimeConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.logging.log_level == "INFO"

    def test_from_yaml_flattens_defaults(self, temp_dir: Path):
        """测试 {default: ...} 展平与相对路径解析"""
        yaml_path = temp_dir / "runtime.yaml"
        yaml_path.write_text(
            "runtime_options:\n"
            "  studio:\n"
            "    install_dir:\n"
            "      default: D:/Trados/Studio18\n"
            "      desc: install\n"
            "  packages:\n"
            "    return_package_ext: .SDLRPX\n"
            "  logging:\n"
            "    log_level: DEBUG\n"
            "    log_file: logs/run.log\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(yaml_path)
        assert config.studio.install_dir == "D:/Trados/Studio18"
        assert config.packages.return_package_ext == ".SDLRPX"
        assert config.packages.package_ext == ".sdlppx"
        assert config.logging.log_level == "DEBUG"
        assert Path(config.logging.log_file) == (temp_dir / "logs" / "run.log").resolve()

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("STUDIO_PKG_LOGGING__LOG_LEVEL", "WARNING")
        monkeypatch.setenv("STUDIO_PKG_STUDIO__INSTALL_DIR", "E:/Studio")
        config = RuntimeConfig()
        assert config.logging.log_level == "WARNING"
        assert config.studio.install_dir == "E:/Studio"

    def test_env_override_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path):
        """测试加载YAML时环境变量仍然优先，未覆盖字段取YAML值"""
        monkeypatch.setenv("STUDIO_PKG_STUDIO__INSTALL_DIR", "E:/Studio")
        monkeypatch.setenv("STUDIO_PKG_LOGGING__LOG_LEVEL", "WARNING")
        monkeypatch.setenv("STUDIO_PKG_PACKAGES__ASSIGNEE_SUFFIX", "-reviewer")
        yaml_path = temp_dir / "runtime.yaml"
        yaml_path.write_text(
            "runtime_options:\n"
            "  studio:\n"
            "    install_dir: D:/A\n"
            "    task_type_ids:\n"
            "      default: {Translate: T1, Review: R1}\n"
            "  logging:\n"
            "    log_level: DEBUG\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(yaml_path)
        assert config.studio.install_dir == "E:/Studio"
        assert config.logging.log_level == "WARNING"
        assert config.studio.task_type_ids == {"Translate": "T1", "Review": "R1"}
        # YAML中没有 packages 段时同样取环境变量
        assert config.packages.assignee_suffix == "-reviewer"
        assert config.packages.package_ext == ".sdlppx"

    def test_reload_config(self, temp_dir: Path):
        """测试重新加载"""
        yaml_path = temp_dir / "runtime.yaml"
        yaml_path.write_text("runtime_options:\n  packages:\n    assignee_suffix: ' reviewer'\n", encoding="utf-8")
        config = reload_config(yaml_path)
        assert config.packages.assignee_suffix == " reviewer"
        reload_config(temp_dir / "missing.yaml")

    def test_shipped_yaml_loads(self):
        """测试仓库自带的 config/runtime.yaml"""
        yaml_path = Path(__file__).resolve().parents[3] / "config" / "runtime.yaml"
        config = RuntimeConfig.from_yaml(yaml_path)
        assert config.studio.assemblies[0] == "Sdl.Core.Globalization"
        assert config.studio.task_type_ids == {"Translate": "Translate", "Review": "Review"}

    def test_default_path_independent_of_cwd(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path):
        """测试默认配置路径不依赖当前工作目录"""
        monkeypatch.chdir(temp_dir)
        assert DEFAULT_CONFIG_PATH.is_absolute()
        assert DEFAULT_CONFIG_PATH == Path(__file__).resolve().parents[3] / "config" / "runtime.yaml"
        config = reload_config()
        assert config.base_dir == DEFAULT_CONFIG_PATH.parent
        assert config.studio.assemblies[0] == "Sdl.Core.Globalization"
