"""配置存储的异常定义

所有异常都继承自ConfigStoreError，同时继承对应的内置异常，
调用方可以按任一类型捕获。文件缺失和I/O错误直接使用内置的
FileNotFoundError / OSError。
"""


class ConfigStoreError(Exception):
    """配置存储异常基类"""
    pass


class KeyNotFoundError(ConfigStoreError, KeyError):
    """数据库中不存在指定键"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"数据库中不存在键: {key!r}")

    def __str__(self) -> str:
        # KeyError默认会给消息加引号
        return self.args[0]


class DuplicateKeyError(ConfigStoreError, ValueError):
    """不允许覆盖时插入了已存在的键"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"数据库中已存在相同的键: {key!r}")


class TypeMismatchError(ConfigStoreError, TypeError):
    """存储值的实际类型与请求类型不兼容"""

    def __init__(self, key: str, expected: type, actual: type):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"键 {key!r} 的值类型为 {actual.__name__}，无法作为 {expected.__name__} 返回"
        )


class CorruptStoreError(ConfigStoreError, ValueError):
    """存储文件内容无法解码"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"无法解码存储文件 {path}: {reason}")
