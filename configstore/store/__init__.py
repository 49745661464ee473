"""内存中的配置数据库及其记录类型"""

from .config_object import ConfigObject, resolve_type_name, type_name_of, zero_value
from .database import ConfigDatabase

__all__ = [
    "ConfigObject",
    "ConfigDatabase",
    "resolve_type_name",
    "type_name_of",
    "zero_value"
]
