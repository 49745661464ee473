"""
序列化模块，负责配置数据库与文件之间的编解码

提供两种可互换的格式：yaml（结构化文本）和 pickle（紧凑二进制）。
两种格式的文件互不兼容。
"""
import pickle
from typing import Dict, List, Type

from .base_serializer import BaseSerializer
from .pickle_serializer import PickleSerializer
from .yaml_serializer import ConfigDumper, ConfigLoader, YamlSerializer, register_yaml_type

# 格式名称到序列化器类的映射
_serializer_classes: Dict[str, Type[BaseSerializer]] = {
    "yaml": YamlSerializer,
    "pickle": PickleSerializer
}


def available_formats() -> List[str]:
    """返回支持的格式名称"""
    return list(_serializer_classes.keys())


def create_serializer(name: str, settings=None) -> BaseSerializer:
    """
    按格式名称创建序列化器
    
    参数:
        name: 格式名称（yaml 或 pickle）
        settings: 可选的Settings，提供各格式的参数
    
    返回:
        序列化器实例
    """
    serializer_class = _serializer_classes.get(name.lower())
    if serializer_class is None:
        raise ValueError(f"不支持的序列化格式: {name}，可选: {', '.join(available_formats())}")
    
    if settings is None:
        return serializer_class()
    if serializer_class is YamlSerializer:
        return YamlSerializer(
            indent=settings.get("yaml.indent", 2),
            encoding=settings.get("yaml.encoding", "utf-8")
        )
    return PickleSerializer(protocol=settings.get("pickle.protocol", pickle.HIGHEST_PROTOCOL))


__all__ = [
    "BaseSerializer",
    "YamlSerializer",
    "PickleSerializer",
    "ConfigDumper",
    "ConfigLoader",
    "register_yaml_type",
    "create_serializer",
    "available_formats"
]
