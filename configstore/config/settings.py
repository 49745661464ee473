import copy
import os
import pickle
from typing import Any, Dict, Optional

import yaml

from configstore.utils.logger import get_logger

# 默认设置
DEFAULT_SETTINGS: Dict[str, Any] = {
    "general": {
        "log_level": "INFO",
        "log_dir": "logs"
    },
    "store": {
        "path": "config.yaml",
        "format": "yaml",     # yaml 或 pickle
        "auto_save": True
    },
    "yaml": {
        "indent": 2,
        "encoding": "utf-8"
    },
    "pickle": {
        "protocol": pickle.HIGHEST_PROTOCOL
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """递归合并字典，override中的值优先"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


class Settings:
    """库设置，负责加载、保存和访问设置文件"""
    
    def __init__(self, config_path: Optional[str] = None):
        """
        初始化设置
        
        Args:
            config_path: 设置文件路径，为None时只使用默认设置
        """
        self.config_path = os.path.abspath(config_path) if config_path else None
        self.logger = get_logger("configstore.settings")
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULT_SETTINGS)
        
        self.load()
    
    def load(self) -> None:
        """加载设置文件，文件缺失或损坏时使用默认设置"""
        self._settings = copy.deepcopy(DEFAULT_SETTINGS)
        if self.config_path is None:
            return
        
        if not os.path.exists(self.config_path):
            self.logger.warning(f"设置文件 {self.config_path} 不存在，使用默认设置")
            return
        
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError("顶层结构不是映射")
            self._settings = _merge(DEFAULT_SETTINGS, loaded)
            self.logger.info(f"已加载设置: {self.config_path}")
        except (yaml.YAMLError, ValueError, OSError) as e:
            self.logger.warning(f"加载设置失败: {str(e)}，使用默认设置")
    
    def save(self, config_path: Optional[str] = None) -> None:
        """
        保存设置到文件
        
        Args:
            config_path: 目标路径，默认为加载时的路径
        """
        path = config_path or self.config_path
        if path is None:
            raise ValueError("未指定设置文件路径")
        
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._settings, f, sort_keys=False, indent=2)
        self.logger.info(f"已保存设置: {path}")
    
    def get(self, path: str, default: Any = None) -> Any:
        """
        通过点路径获取设置值
        
        Args:
            path: 设置路径，如 "store.format"
            default: 默认值
        
        Returns:
            设置值或默认值
        """
        current = self._settings
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
    
    def set(self, path: str, value: Any) -> None:
        """
        通过点路径设置值
        
        Args:
            path: 设置路径，如 "store.auto_save"
            value: 要设置的值
        """
        parts = path.split(".")
        current = self._settings
        for part in parts[:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]
        
        current[parts[-1]] = value
        self.logger.debug(f"设置 {path} = {value}")
    
    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._settings)
    
    def __str__(self) -> str:
        return f"Settings(config_path={self.config_path})"
