"""
Studio 项目包自动化 - 后端核心模块

模块结构：
- config/     运行期配置加载
- models/     数据模型定义（包选项/项目/任务/运行报告）
- pipeline/   导出包与导入返回包的流程编排
- sdk/        Trados Studio 项目自动化 SDK 绑定（pythonnet）
- cli         命令行入口（export-package / import-package）
"""

__version__ = "0.1.0"
