"""设置模块，负责库设置的加载、管理和保存"""

from .settings import DEFAULT_SETTINGS, Settings

__all__ = ["Settings", "DEFAULT_SETTINGS"]
__version__ = "1.0.0"
