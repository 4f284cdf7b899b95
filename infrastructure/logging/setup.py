"""
日志配置

使用标准库 logging：控制台输出，可选按大小滚动的日志文件。
各服务通过 logging.getLogger(__name__) 获取 logger，不依赖本模块。
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"

# 日志文件滚动：10 MB × 5
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    配置根 logger

    重复调用会替换之前安装的 handler。

    Args:
        level: 日志级别名称（DEBUG/INFO/WARNING/ERROR）
        log_file: 日志文件路径，为空则只输出到控制台
    """
    root = logging.getLogger()
    root.setLevel(logging.getLevelName(level.upper()))

    for handler in list(root.handlers):
        if getattr(handler, "_otp_service_handler", False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console._otp_service_handler = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler._otp_service_handler = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)
