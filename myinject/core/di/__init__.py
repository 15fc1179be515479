"""
依赖注入模块

提供基于类型标记的依赖注入容器
"""

from .container import Injector
from .decorators import Inject, inject, post_construct, singleton
from .descriptor import TypeDescriptor, describe
from .registry import DependencyGraph
from .bridge import build_container

__all__ = [
    'Injector',
    'Inject',
    'inject',
    'post_construct',
    'singleton',
    'TypeDescriptor',
    'describe',
    'DependencyGraph',
    'build_container',
]
