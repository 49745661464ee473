import importlib
from dataclasses import dataclass
from typing import Any, Optional

from configstore.exceptions import TypeMismatchError

# 具有零值的内置类型，缺失键时返回 value_type()
ZERO_VALUE_TYPES = (bool, int, float, complex, str, bytes, list, dict, tuple, set, frozenset)


def type_name_of(value_type: type) -> str:
    """返回类型的完整名称，如 builtins.int"""
    return f"{value_type.__module__}.{value_type.__qualname__}"


def resolve_type_name(type_name: str) -> Optional[type]:
    """
    根据完整名称导入类型
    
    Args:
        type_name: 类型完整名称，如 "datetime.datetime"
    
    Returns:
        类型对象，当前环境无法解析时返回None
    """
    module_name, _, qualname = type_name.rpartition(".")
    # 嵌套类的qualname中也带点，逐级向上尝试模块名
    while module_name:
        try:
            target = importlib.import_module(module_name)
        except ImportError:
            module_name, _, head = module_name.rpartition(".")
            qualname = f"{head}.{qualname}"
            continue
        for part in qualname.split("."):
            target = getattr(target, part, None)
            if target is None:
                return None
        return target if isinstance(target, type) else None
    return None


def zero_value(value_type: Optional[type]) -> Any:
    """返回类型的零值，没有零值的类型返回None"""
    # 只认精确类型，namedtuple、IntEnum等子类构造时需要参数
    if value_type in ZERO_VALUE_TYPES:
        return value_type()
    return None


@dataclass
class ConfigObject:
    """数据库中的一条记录：键、值以及声明类型"""
    key: str
    value: Any
    type_name: str

    @classmethod
    def wrap(cls, key: str, value: Any, value_type: Optional[type] = None) -> "ConfigObject":
        """
        将值包装为记录
        
        Args:
            key: 键
            value: 值
            value_type: 声明类型，为None时使用值的运行时类型
        
        Returns:
            新的ConfigObject
        """
        if value_type is None:
            value_type = type(value)
        elif value is not None and not isinstance(value, value_type):
            raise TypeMismatchError(key, value_type, type(value))
        return cls(key=key, value=value, type_name=type_name_of(value_type))

    def resolve_type(self) -> Optional[type]:
        """解析声明类型"""
        return resolve_type_name(self.type_name)
