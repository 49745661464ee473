import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

# 日志格式配置
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_DIR = "logs"

# init_logger调用后，日志统一交给根记录器处理
_root_configured = False


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """获取指定名称的日志器"""
    logger = logging.getLogger(name)
    if _root_configured:
        return logger

    # 避免重复添加处理器和日志传播，已配置过的日志器保留当前级别
    if not logger.handlers:
        logger.setLevel(level)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)
        
        # 防止日志传播到父级记录器，避免重复输出
        logger.propagate = False
    
    return logger


def init_logger(
    log_dir: Optional[str] = None,
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> None:
    """
    初始化全局日志系统（CLI启动时调用）
    
    参数:
        log_dir: 日志存储目录，为None时只输出到控制台
        level: 全局日志级别
        max_bytes: 单个日志文件最大字节数
        backup_count: 日志备份文件数量
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    
    # 清除已有的处理器（避免重复）
    if root_logger.handlers:
        root_logger.handlers.clear()
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)
    
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "configstore.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    # 已创建的本包日志器改为向根记录器传播
    global _root_configured
    _root_configured = True
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("configstore") and isinstance(logger, logging.Logger):
            logger.handlers.clear()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    root_logger.debug(f"日志系统初始化完成，日志目录: {log_dir}")


def set_log_level(level: int) -> None:
    """设置全局日志级别（同时作用于本包已创建的日志器）"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
    
    # get_logger创建的日志器不向上传播，需要单独设置
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("configstore") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
