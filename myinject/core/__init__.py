"""
核心基础设施模块

包含配置、日志、依赖注入容器与应用生命周期
"""

from .config import (
    get_settings,
    get_config,
    get_config_str,
    get_config_int,
    get_config_bool,
    reload_config
)
from .logger import get_logger, logger, setup_logging
from .di import (
    DependencyGraph,
    Inject,
    Injector,
    build_container,
    inject,
    post_construct,
    singleton,
)
from .clock import Clock
from .application import Application

__all__ = [
    "get_settings",
    "get_config",
    "get_config_str",
    "get_config_int",
    "get_config_bool",
    "reload_config",
    "get_logger",
    "logger",  # loguru logger，建议直接使用
    "setup_logging",
    "DependencyGraph",
    "Inject",
    "Injector",
    "build_container",
    "inject",
    "post_construct",
    "singleton",
    "Clock",
    "Application",
]
