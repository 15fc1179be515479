"""
dependency_injector 桥接

把 Injector 管理的类型暴露为 dependency_injector 的 DynamicContainer，
便于在使用 dependency_injector wiring 的代码中复用同一套对象图
"""

from typing import Optional

from dependency_injector import containers, providers
from loguru import logger

from .container import Injector
from .descriptor import describe
from ...utils import camel_to_snake


def provider_for(injector: Injector, cls: type) -> providers.Provider:
    """
    为类型创建通过 Injector 解析的提供者

    单例类型和已绑定的类型通过 get 解析（始终返回同一个实例），
    其他类型通过 create 解析（每次调用创建新实例）。
    """
    if injector.has(cls) or describe(cls).is_singleton:
        return providers.Callable(injector.get, cls)
    return providers.Callable(injector.create, cls)


def build_container(
    injector: Injector,
    *types: type,
    container: Optional[containers.DynamicContainer] = None
) -> containers.DynamicContainer:
    """
    构建 DynamicContainer

    Args:
        injector: 负责解析的容器
        *types: 要暴露的类型，提供者名称为类名的下划线形式（Engine -> engine）
        container: 已有的 DynamicContainer，为 None 时新建

    Returns:
        DynamicContainer
    """
    if container is None:
        container = containers.DynamicContainer()

    for cls in types:
        name = camel_to_snake(cls.__name__)
        setattr(container, name, provider_for(injector, cls))
        logger.debug(f"已注册服务提供者: {name} -> {cls.__name__}")

    return container
