import abc
import io
import os
from typing import BinaryIO, Optional, Tuple

from configstore.exceptions import CorruptStoreError
from configstore.store import ConfigDatabase
from configstore.utils.logger import get_logger


class BaseSerializer(metaclass=abc.ABCMeta):
    """
    序列化器基类，定义数据库与文件/字节流之间的编解码接口
    
    子类只需实现 _dump 和 _load，两者都作用于二进制流。
    序列化器除构造参数外不保存状态，可以在多个ConfigManager之间共享。
    """
    format_name: str = ""
    file_extension: str = ""

    def __init__(self):
        self.logger = get_logger(f"configstore.serializer.{self.format_name}")

    @abc.abstractmethod
    def _dump(self, database: ConfigDatabase, stream: BinaryIO) -> None:
        """
        将数据库编码写入二进制流

        参数:
            database: 要编码的数据库
            stream: 可写的二进制流
        """

    @abc.abstractmethod
    def _load(self, stream: BinaryIO, source: str) -> ConfigDatabase:
        """
        从二进制流解码数据库

        参数:
            stream: 可读的二进制流
            source: 数据来源描述，用于错误信息

        返回:
            解码后的数据库
        """

    def serialize(self, database: ConfigDatabase, output_path: str) -> None:
        """
        将数据库直接写入文件（覆盖已有内容，不保证原子性）
        
        Args:
            database: 要保存的数据库
            output_path: 输出文件路径
        """
        with open(output_path, "wb") as f:
            self._dump(database, f)
            f.flush()
            os.fsync(f.fileno())
        self.logger.debug(f"已写入 {len(database)} 条记录到 {output_path}")

    def deserialize(self, input_path: str) -> ConfigDatabase:
        """
        从文件读取数据库
        
        Args:
            input_path: 输入文件路径
        
        Returns:
            解码后的数据库
        
        Raises:
            FileNotFoundError: 文件不存在
            CorruptStoreError: 文件内容无法解码
        """
        if not os.path.exists(input_path):
            raise FileNotFoundError(f"存储文件不存在: {input_path}")
        
        with open(input_path, "rb") as f:
            database = self._safe_load(f, input_path)
        self.logger.debug(f"已从 {input_path} 读取 {len(database)} 条记录")
        return database

    def try_deserialize(self, input_path: str) -> Tuple[Optional[ConfigDatabase], bool]:
        """尝试读取数据库，失败时返回 (None, False) 而不抛出异常"""
        try:
            return self.deserialize(input_path), True
        except Exception as e:
            self.logger.debug(f"读取 {input_path} 失败: {str(e)}")
            return None, False

    def dumps(self, database: ConfigDatabase) -> bytes:
        """将数据库编码为字节串"""
        buffer = io.BytesIO()
        self._dump(database, buffer)
        return buffer.getvalue()

    def loads(self, data: bytes) -> ConfigDatabase:
        """从字节串解码数据库"""
        return self._safe_load(io.BytesIO(data), "<bytes>")

    def _safe_load(self, stream: BinaryIO, source: str) -> ConfigDatabase:
        # 解码过程中的任何错误都统一为CorruptStoreError
        try:
            return self._load(stream, source)
        except CorruptStoreError:
            raise
        except Exception as e:
            raise CorruptStoreError(source, f"{e.__class__.__name__}: {e}") from e

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(format={self.format_name})"
