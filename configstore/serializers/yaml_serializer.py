import dataclasses
import io
from typing import Any, BinaryIO, Callable, Dict, Optional

import yaml

from configstore.exceptions import CorruptStoreError
from configstore.store import ConfigDatabase, ConfigObject, type_name_of
from .base_serializer import BaseSerializer


class ConfigDumper(yaml.SafeDumper):
    """只输出安全标签和已注册类型的Dumper"""


class ConfigLoader(yaml.SafeLoader):
    """与ConfigDumper对应的Loader"""


def _represent_tuple(dumper: yaml.SafeDumper, data: tuple) -> yaml.Node:
    return dumper.represent_sequence("!tuple", list(data))


def _construct_tuple(loader: yaml.SafeLoader, node: yaml.Node) -> tuple:
    return tuple(loader.construct_sequence(node, deep=True))


ConfigDumper.add_representer(tuple, _represent_tuple)
ConfigLoader.add_constructor("!tuple", _construct_tuple)


def register_yaml_type(
    cls: type = None,
    *,
    tag: Optional[str] = None,
    to_dict: Optional[Callable[[Any], Dict[str, Any]]] = None,
    from_dict: Optional[Callable[[Dict[str, Any]], Any]] = None
):
    """
    向YAML序列化器声明自定义类型的结构，可以作为装饰器使用
    
    dataclass 按字段自动转换；其他类需要提供 to_dict() 方法和
    from_dict(data) 类方法，或者显式传入 to_dict / from_dict。
    
    Args:
        cls: 要注册的类型
        tag: YAML标签，默认为 "!" + 类名
        to_dict: 对象 -> 字典
        from_dict: 字典 -> 对象
    """
    def decorator(target: type) -> type:
        type_tag = tag or f"!{target.__qualname__}"
        
        if to_dict is not None:
            dump = to_dict
        elif dataclasses.is_dataclass(target):
            def dump(obj):
                return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
        else:
            def dump(obj):
                return obj.to_dict()
        
        if from_dict is not None:
            load = from_dict
        elif dataclasses.is_dataclass(target):
            def load(data):
                return target(**data)
        else:
            load = target.from_dict
        
        def represent(dumper, obj):
            return dumper.represent_mapping(type_tag, dump(obj))
        
        def construct(loader, node):
            return load(loader.construct_mapping(node, deep=True))
        
        ConfigDumper.add_representer(target, represent)
        ConfigLoader.add_constructor(type_tag, construct)
        return target
    
    if cls is None:
        return decorator
    return decorator(cls)


class YamlSerializer(BaseSerializer):
    """
    结构化文本格式序列化器（基于PyYAML）
    
    输出可读、可手工编辑。文件结构:
    
        objects:
        - key: msg
          type: builtins.str
          value: Hello, World!
    
    标量、字符串、字节串、列表、字典、集合、元组和日期时间可直接保存，
    其他类型需要先通过 register_yaml_type 声明结构。
    """
    format_name = "yaml"
    file_extension = ".yaml"

    def __init__(self, indent: int = 2, encoding: str = "utf-8"):
        super().__init__()
        self.indent = indent
        self.encoding = encoding

    def _dump(self, database: ConfigDatabase, stream: BinaryIO) -> None:
        document = {
            "objects": [
                {"key": obj.key, "type": obj.type_name, "value": obj.value}
                for obj in database
            ]
        }
        yaml.dump(
            document,
            stream,
            Dumper=ConfigDumper,
            encoding=self.encoding,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
            indent=self.indent
        )

    def _load(self, stream: BinaryIO, source: str) -> ConfigDatabase:
        # PyYAML只能自动识别UTF-8/UTF-16，其他编码需要按配置解码
        text = io.TextIOWrapper(stream, encoding=self.encoding)
        try:
            document = yaml.load(text, Loader=ConfigLoader) or {}
        finally:
            text.detach()
        if not isinstance(document, dict):
            raise CorruptStoreError(source, "顶层结构不是映射")
        
        items = document.get("objects") or []
        if not isinstance(items, list):
            raise CorruptStoreError(source, "objects 字段不是列表")
        
        database = ConfigDatabase()
        for index, item in enumerate(items):
            if not isinstance(item, dict) or not isinstance(item.get("key"), str):
                raise CorruptStoreError(source, f"第 {index} 条记录缺少字符串类型的 key")
            value = item.get("value")
            type_name = item.get("type") or type_name_of(type(value))
            database.set(ConfigObject(key=item["key"], value=value, type_name=str(type_name)))
        return database
