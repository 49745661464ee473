import pickle
from typing import BinaryIO

from configstore.exceptions import CorruptStoreError
from configstore.store import ConfigDatabase
from .base_serializer import BaseSerializer


class PickleSerializer(BaseSerializer):
    """
    紧凑二进制格式序列化器（基于pickle）
    
    类型信息随数据一起写入，任意对象图都可以还原，但读取端必须能导入
    所有存储值的类型。不要读取来源不可信的文件。
    """
    format_name = "pickle"
    file_extension = ".pkl"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        super().__init__()
        self.protocol = protocol

    def _dump(self, database: ConfigDatabase, stream: BinaryIO) -> None:
        pickle.dump(database, stream, protocol=self.protocol)

    def _load(self, stream: BinaryIO, source: str) -> ConfigDatabase:
        database = pickle.load(stream)
        if not isinstance(database, ConfigDatabase):
            raise CorruptStoreError(source, f"内容类型为 {type(database).__name__}，不是配置数据库")
        return database
