"""
通用工具模块，提供日志功能
"""

from .logger import get_logger, init_logger, set_log_level

__all__ = [
    "get_logger",
    "init_logger",
    "set_log_level"
]

__version__ = "1.0.0"
