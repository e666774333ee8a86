"""
控制台回调 - 输出 SDK 进度与消息

职责：
1. 进度回调："<百分比>% <消息>"（消息为空时不输出）
2. 消息回调：来源 / "<级别>: <文本>" / 异常文本，按级别着色
3. 同步写入日志

约束：回调由 SDK 在阻塞调用中同步触发，任何方法都不得抛出异常。

测试要点：
- test_progress_line: 进度行格式
- test_progress_silent_without_message: 无消息时静默
- test_message_lines: 消息三段输出
- test_never_raises: 控制台故障时不抛出
"""

from __future__ import annotations

import logging

from rich.console import Console

logger = logging.getLogger(__name__)

_LEVEL_STYLES = {
    "warning": "yellow",
    "error": "bold red",
}

_LEVEL_LOGGING = {
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class ConsolePackageReporter:
    """基于 rich 控制台的回调实现"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def on_progress(self, percent: int, message: str | None = None) -> None:
        if not message:
            return
        try:
            self.console.print(f"{percent}% {message}", markup=False, highlight=False)
        except Exception:
            logger.debug("进度输出失败", exc_info=True)

    def on_message(
        self,
        source: str,
        level: str,
        text: str,
        exception: str | None = None,
    ) -> None:
        key = str(level).lower()
        try:
            logger.log(
                _LEVEL_LOGGING.get(key, logging.INFO),
                "[%s] %s: %s%s",
                source,
                level,
                text,
                f" ({exception})" if exception else "",
            )
            self.console.print(source, style="cyan", markup=False, highlight=False)
            self.console.print(
                f"{level}: {text}",
                style=_LEVEL_STYLES.get(key, ""),
                markup=False,
                highlight=False,
            )
            if exception:
                self.console.print(str(exception), style="red", markup=False, highlight=False)
        except Exception:
            logger.debug("消息输出失败", exc_info=True)
