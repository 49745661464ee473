from typing import Iterator, List

from configstore.exceptions import DuplicateKeyError, KeyNotFoundError
from .config_object import ConfigObject


class ConfigDatabase:
    """
    配置数据库，按插入顺序保存ConfigObject
    
    查找和删除都是线性扫描，配置数据量通常只有几十到几百条。
    """

    def __init__(self, objects: List[ConfigObject] = None):
        self.objects: List[ConfigObject] = []
        for obj in objects or []:
            self.set(obj)

    def get(self, key: str) -> ConfigObject:
        """
        获取指定键的记录
        
        Args:
            key: 键（区分大小写）
        
        Returns:
            对应的ConfigObject
        
        Raises:
            KeyNotFoundError: 键不存在
        """
        for obj in self.objects:
            if obj.key == key:
                return obj
        raise KeyNotFoundError(key)

    def contains(self, key: str) -> bool:
        """判断是否存在指定键"""
        return any(obj.key == key for obj in self.objects)

    def set(self, obj: ConfigObject, overwrite: bool = False) -> None:
        """
        插入记录
        
        Args:
            obj: 要插入的记录
            overwrite: 键已存在时是否覆盖，为False时抛出DuplicateKeyError
        """
        if self.contains(obj.key):
            if not overwrite:
                raise DuplicateKeyError(obj.key)
            self.remove(obj.key)
        self.objects.append(obj)

    def remove(self, key: str) -> None:
        """删除指定键的所有记录，键不存在时不做任何操作"""
        self.objects = [obj for obj in self.objects if obj.key != key]

    def keys(self) -> List[str]:
        return [obj.key for obj in self.objects]

    def clear(self) -> None:
        self.objects = []

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[ConfigObject]:
        return iter(list(self.objects))

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConfigDatabase):
            return NotImplemented
        return self.objects == other.objects

    def __repr__(self) -> str:
        return f"ConfigDatabase(keys={self.keys()})"
