"""
SDK 绑定层 - Trados Studio 项目自动化 SDK

- StudioProjectAutomation: 打开 FileBasedProject
- apply_package_options: 本地包选项写入 SDK 选项对象
"""

from .studio import StudioProject, StudioProjectAutomation, apply_package_options

__all__ = [
    "StudioProjectAutomation",
    "StudioProject",
    "apply_package_options",
]
