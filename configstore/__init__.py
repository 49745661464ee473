# 配置存储核心包
__version__ = "1.0.0"

"""
持久化的键值配置存储

ConfigManager 负责类型化的读写和安全保存，数据库通过可替换的序列化器
（yaml 或 pickle）整体写入单个文件。
"""
from configstore.exceptions import (
    ConfigStoreError,
    CorruptStoreError,
    DuplicateKeyError,
    KeyNotFoundError,
    TypeMismatchError
)
from configstore.manager import ConfigManager
from configstore.serializers import (
    BaseSerializer,
    PickleSerializer,
    YamlSerializer,
    create_serializer,
    register_yaml_type
)
from configstore.store import ConfigDatabase, ConfigObject

__all__ = [
    "ConfigManager",
    "ConfigDatabase",
    "ConfigObject",
    "BaseSerializer",
    "YamlSerializer",
    "PickleSerializer",
    "create_serializer",
    "register_yaml_type",
    "ConfigStoreError",
    "KeyNotFoundError",
    "DuplicateKeyError",
    "TypeMismatchError",
    "CorruptStoreError"
]
