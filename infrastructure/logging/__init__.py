"""日志基础设施"""

from infrastructure.logging.setup import setup_logging

__all__ = ["setup_logging"]
