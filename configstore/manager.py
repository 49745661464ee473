import os
from typing import Any, List, Optional

from configstore.exceptions import CorruptStoreError, TypeMismatchError
from configstore.serializers import BaseSerializer, create_serializer
from configstore.store import ConfigDatabase, ConfigObject, zero_value
from configstore.utils.logger import get_logger

TEMP_SUFFIX = ".tmp"

_MISSING = object()


class ConfigManager:
    """
    配置管理器，对外的统一入口

    持有一个ConfigDatabase和一个序列化器，绑定一个存储文件。
    auto_save为True时，每次set/remove之后立即保存。
    不做任何加锁，多线程或多进程访问需要调用方自行同步。
    """

    def __init__(
        self,
        path: str,
        serializer: BaseSerializer,
        auto_save: bool = True,
        strict: bool = False
    ):
        """
        初始化配置管理器

        Args:
            path: 存储文件路径
            serializer: 使用的序列化器
            auto_save: 是否在修改后自动保存
            strict: 为True时已有文件解码失败直接抛出异常，否则回退为空数据库
        """
        self.path = path
        self.auto_save = auto_save
        self.strict = strict
        self.logger = get_logger("configstore.manager")
        self._serializer = serializer
        self._database = ConfigDatabase()
        # 最近一次加载失败的异常，用于区分“文件损坏”和“首次运行”
        self.load_error: Optional[Exception] = None

        self._load()

    @classmethod
    def from_settings(cls, settings, path: Optional[str] = None) -> "ConfigManager":
        """
        根据库设置创建配置管理器

        Args:
            settings: Settings实例
            path: 存储文件路径，默认使用 store.path
        """
        serializer = create_serializer(settings.get("store.format", "yaml"), settings)
        return cls(
            path or settings.get("store.path", "config.yaml"),
            serializer,
            auto_save=bool(settings.get("store.auto_save", True))
        )

    @property
    def serializer(self) -> BaseSerializer:
        return self._serializer

    @property
    def database(self) -> ConfigDatabase:
        return self._database

    @property
    def temp_path(self) -> str:
        return self.path + TEMP_SUFFIX

    def _load(self) -> None:
        """加载已有的存储文件，不存在时使用空数据库"""
        if not os.path.exists(self.path):
            self.logger.debug(f"存储文件 {self.path} 不存在，使用空数据库")
            return

        try:
            self._database = self._serializer.deserialize(self.path)
            self.logger.info(f"已加载存储文件: {self.path}，记录数: {len(self._database)}")
        except CorruptStoreError as e:
            if self.strict:
                raise
            self.load_error = e
            self._database = ConfigDatabase()
            self.logger.warning(f"存储文件 {self.path} 无法解码，已使用空数据库: {str(e)}")

    def get(self, key: str, value_type: Optional[type] = None, default: Any = _MISSING) -> Any:
        """
        获取指定键的值

        Args:
            key: 键
            value_type: 期望的类型，值类型不兼容时抛出TypeMismatchError
            default: 键不存在时的返回值，不指定时返回value_type的零值

        Returns:
            存储的值，或默认值
        """
        if not self._database.contains(key):
            if default is not _MISSING:
                return default
            return zero_value(value_type)

        value = self._database.get(key).value
        if value_type is not None and value is not None and not isinstance(value, value_type):
            raise TypeMismatchError(key, value_type, type(value))
        return value

    def set(self, key: str, value: Any, value_type: Optional[type] = None) -> None:
        """
        设置或覆盖指定键的值

        Args:
            key: 键
            value: 值
            value_type: 声明类型，默认使用值的运行时类型
        """
        previous = list(self._database.objects)
        self._database.set(ConfigObject.wrap(key, value, value_type), overwrite=True)
        self.logger.debug(f"设置配置 {key} = {value!r}")
        if self.auto_save:
            self._save_or_rollback(previous)

    def remove(self, key: str) -> None:
        """删除指定键，键不存在时不报错"""
        previous = list(self._database.objects)
        self._database.remove(key)
        self.logger.debug(f"删除配置 {key}")
        if self.auto_save:
            self._save_or_rollback(previous)

    def _save_or_rollback(self, previous: List[ConfigObject]) -> None:
        """自动保存失败时恢复修改前的记录，内存与文件保持一致"""
        try:
            self.save()
        except BaseException:
            self._database.objects = previous
            raise

    def contains(self, key: str) -> bool:
        return self._database.contains(key)

    def keys(self) -> List[str]:
        return self._database.keys()

    def save(self) -> None:
        """
        保存数据库

        先写入临时文件，成功后原子地替换目标文件；
        失败时删除临时文件并重新抛出异常，原文件保持不变。
        """
        temp_path = self.temp_path
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)

            self._serializer.serialize(self._database, temp_path)
            os.replace(temp_path, self.path)
        except BaseException as e:
            # 清理失败不能掩盖原始异常
            try:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
            except OSError as cleanup_error:
                self.logger.warning(f"删除临时文件 {temp_path} 失败: {str(cleanup_error)}")
            self.logger.error(f"保存存储文件 {self.path} 失败: {e!r}", exc_info=True)
            raise

        self.logger.info(f"已保存存储文件: {self.path}，记录数: {len(self._database)}")

    def __getitem__(self, key: str) -> ConfigObject:
        return self._database.get(key)

    def __contains__(self, key: str) -> bool:
        return self._database.contains(key)

    def __len__(self) -> int:
        return len(self._database)

    def __str__(self) -> str:
        return f"ConfigManager(path={self.path}, format={self._serializer.format_name})"
