"""
依赖注入容器

负责按需构造对象图：递归解析构造器参数与 Inject 字段、缓存单例、
检测循环依赖，并在注入完成后调用 @post_construct 方法
"""

import threading
from typing import Any, Dict, List, Optional, Type, TypeVar

from loguru import logger

from .descriptor import INIT, TypeDescriptor, describe
from ..config import get_config_bool
from ...exceptions import CircularDependencyError, ConstructionError, InjectionError

T = TypeVar('T')


class Injector:
    """
    依赖注入容器

    单例类型在首次构造后自动缓存，无需注册。
    容器是线程安全的：所有解析在一把可重入锁下串行执行，
    构造栈按线程保存，仅在一次解析过程中存在。

    @post_construct 方法在持有锁时执行：若方法等待另一个线程，
    而该线程又调用同一个容器，两者会互相等待而死锁。
    """

    def __init__(self, early_singleton_cache: Optional[bool] = None):
        """
        初始化容器

        Args:
            early_singleton_cache: 为 True 时单例在字段注入与 @post_construct 之前就写入缓存；
                                   None 时读取配置 injector.early_singleton_cache
        """
        if early_singleton_cache is None:
            early_singleton_cache = get_config_bool('injector.early_singleton_cache', False)
        self.early_singleton_cache = early_singleton_cache
        self._singletons: Dict[type, Any] = {}
        self._lock = threading.RLock()
        self._local = threading.local()

    @property
    def _stack(self) -> List[type]:
        stack = getattr(self._local, 'stack', None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def get(self, cls: Type[T]) -> Optional[T]:
        """
        获取单例

        Args:
            cls: 要获取的类

        Returns:
            已缓存的实例；单例类型尚未缓存时会先构造；
            非单例且未绑定的类型返回 None
        """
        with self._lock:
            if cls in self._singletons:
                return self._singletons[cls]
            if describe(cls).is_singleton:
                return self.create(cls)
            return None

    def bind(self, cls: Type[T], instance: T) -> None:
        """
        手动绑定实例（主要用于测试）

        不校验 cls 自身的标记，之后的 get/create 都直接返回该实例。

        Args:
            cls: 绑定的类
            instance: 实例
        """
        with self._lock:
            self._singletons[cls] = instance
        logger.debug(f"已绑定实例: {cls.__name__} -> {type(instance).__name__}")

    def has(self, cls: type) -> bool:
        """检查类型是否已缓存"""
        with self._lock:
            return cls in self._singletons

    __contains__ = has

    def singletons(self) -> Dict[type, Any]:
        """当前缓存的快照"""
        with self._lock:
            return dict(self._singletons)

    def describe(self, cls: type) -> TypeDescriptor:
        """获取类型的注入描述符"""
        return describe(cls)

    def create(self, cls: Type[T]) -> T:
        """
        创建完整初始化的实例

        单例类型已缓存时直接返回缓存实例。

        Args:
            cls: 要创建的类

        Returns:
            字段已注入、@post_construct 已执行的实例

        Raises:
            CircularDependencyError: 存在循环依赖
            ConfigurationError: 注入元数据有歧义
            ConstructionError: 实例化、字段注入或 @post_construct 失败
        """
        with self._lock:
            if cls in self._singletons:
                return self._singletons[cls]
            return self._resolve(cls)

    def _resolve(self, cls: Type[T]) -> T:
        stack = self._stack
        if cls in stack:
            raise CircularDependencyError(stack + [cls])
        if cls in self._singletons:
            logger.debug(f"命中单例缓存: {cls.__name__}")
            return self._singletons[cls]

        stack.append(cls)
        try:
            return self._construct(cls)
        finally:
            stack.pop()

    def _construct(self, cls: Type[T]) -> T:
        descriptor = describe(cls)
        instance = None
        cached_early = False
        completed = False
        try:
            instance = self._instantiate(descriptor)
            if descriptor.is_singleton and self.early_singleton_cache:
                self._singletons[cls] = instance
                cached_early = True

            for name, field_type in descriptor.fields:
                setattr(instance, name, self._resolve(field_type))

            for name in descriptor.hooks:
                getattr(instance, name)()
            completed = True
        except InjectionError:
            raise
        except Exception as e:
            raise ConstructionError(str(e), target=cls, cause=e) from e
        finally:
            # 任何异常（包括 KeyboardInterrupt 等）都不保留部分初始化的单例
            if not completed:
                self._discard(cls, instance, cached_early)

        if descriptor.is_singleton:
            self._singletons[cls] = instance
        logger.debug(f"已创建实例: {cls.__name__}")
        return instance

    def _instantiate(self, descriptor: TypeDescriptor) -> Any:
        cls = descriptor.type_
        if descriptor.constructor is None:
            return cls()

        args = []
        kwargs = {}
        for param in descriptor.parameters:
            dependency = self._resolve(param.type_)
            if param.positional_only:
                args.append(dependency)
            else:
                kwargs[param.name] = dependency

        if descriptor.constructor == INIT:
            return cls(*args, **kwargs)
        return getattr(cls, descriptor.constructor)(*args, **kwargs)

    def _discard(self, cls: type, instance: Any, cached_early: bool) -> None:
        # 构造失败时不保留部分初始化的单例
        if cached_early and self._singletons.get(cls) is instance:
            del self._singletons[cls]
