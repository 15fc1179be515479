"""
MyInject

基于类型标记的依赖注入容器：
- core/di/: 容器、注入标记、类型描述符、依赖关系图
- core/application.py: 应用生命周期
- cli.py: 命令行工具
"""

from .core import (
    Application,
    Clock,
    DependencyGraph,
    Inject,
    Injector,
    build_container,
    inject,
    post_construct,
    singleton,
)
from .exceptions import (
    CircularDependencyError,
    ConfigurationError,
    ConstructionError,
    InjectionError,
    LifecycleError,
)

__version__ = "0.1.0"

__all__ = [
    "Application",
    "Clock",
    "DependencyGraph",
    "Inject",
    "Injector",
    "build_container",
    "inject",
    "post_construct",
    "singleton",
    "CircularDependencyError",
    "ConfigurationError",
    "ConstructionError",
    "InjectionError",
    "LifecycleError",
]
