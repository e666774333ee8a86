"""
流程模块 - 导出包与导入返回包

子模块：
- exporter: 按目标语言创建项目包
- importer: 发现并导入返回包
- reporter: SDK 进度/消息回调的控制台实现
"""

from .exporter import PackageExporter, open_project
from .importer import PackageImporter, discover_return_packages
from .reporter import ConsolePackageReporter

__all__ = [
    "PackageExporter",
    "PackageImporter",
    "ConsolePackageReporter",
    "discover_return_packages",
    "open_project",
]
