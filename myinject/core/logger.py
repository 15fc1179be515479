"""
日志管理模块

基于 loguru 的日志管理，提供初始化配置功能
所有代码可以直接使用: from loguru import logger
"""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

from .config import get_settings

logger = loguru_logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# 标准 logging 格式到 loguru 格式的映射
_STD_FORMAT_MAP = {
    "%(asctime)s": "{time:YYYY-MM-DD HH:mm:ss}",
    "%(name)s": "{name}",
    "%(levelname)s": "{level: <8}",
    "%(message)s": "{message}",
    "%(filename)s": "{file.name}",
    "%(funcName)s": "{function}",
    "%(lineno)d": "{line}",
}


def _convert_format(user_format: str) -> str:
    """将标准 logging 格式转换为 loguru 格式"""
    for std, loguru_fmt in _STD_FORMAT_MAP.items():
        user_format = user_format.replace(std, loguru_fmt)
    return user_format


def setup_logging(config_file: Optional[str] = None) -> None:
    """
    根据配置文件初始化 loguru 日志系统

    Args:
        config_file: 配置文件路径，如果为 None 则使用默认配置
    """
    config = get_settings(config_file)

    loguru_logger.remove()

    log_level = str(config.get("logging.level", "INFO")).upper()

    use_json = config.get("logging.json", False)
    if isinstance(use_json, str):
        use_json = use_json.lower() in ("true", "1", "yes", "on")

    if use_json:
        console_kwargs = {
            "sink": sys.stdout,
            "serialize": True,
            "level": log_level,
        }
        file_kwargs = {
            "serialize": True,
            "level": log_level,
            "rotation": "10 MB",
            "retention": "7 days",
        }
    else:
        user_format = config.get("logging.format", None)
        log_format = _convert_format(user_format) if user_format else DEFAULT_FORMAT

        console_kwargs = {
            "sink": sys.stdout,
            "format": log_format,
            "level": log_level,
            "colorize": True,
        }
        file_kwargs = {
            "format": log_format,
            "level": log_level,
            "rotation": "10 MB",
            "retention": "7 days",
        }

    loguru_logger.add(**console_kwargs)

    log_file = config.get("logging.file")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        loguru_logger.add(log_file, **file_kwargs)


def get_logger(name: str = "myinject"):
    """
    获取绑定了名称的日志器

    Args:
        name: 日志器名称（通过 bind 绑定到 extra）

    Returns:
        loguru Logger 实例
    """
    return loguru_logger.bind(name=name)
