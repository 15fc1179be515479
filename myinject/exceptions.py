"""
MyInject 异常模块

提供依赖注入容器相关的异常类
"""

from typing import Any, Dict, Optional, Sequence


CHAIN_SEPARATOR = " → "


def _type_name(cls: Any) -> str:
    return getattr(cls, "__name__", repr(cls))


class InjectionError(Exception):
    """MyInject 异常基类"""

    def __init__(
        self,
        message: str = "依赖注入错误",
        code: str = "INJECTION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class CircularDependencyError(InjectionError):
    """
    循环依赖异常

    chain 按从最外层请求到最内层（重复出现的类型）的顺序保存完整依赖链，
    例如 A → B → A
    """

    def __init__(
        self,
        chain: Sequence[type],
        details: Optional[Dict[str, Any]] = None
    ):
        self.chain = list(chain)
        super().__init__(
            f"检测到循环依赖: {self.chain_str}",
            "CIRCULAR_DEPENDENCY",
            details
        )

    @property
    def chain_str(self) -> str:
        """依赖链的可读形式"""
        return CHAIN_SEPARATOR.join(_type_name(cls) for cls in self.chain)


class ConfigurationError(InjectionError):
    """类型的注入元数据有歧义或不完整（例如多个 @inject 构造器）"""

    def __init__(
        self,
        message: str = "注入配置错误",
        target: Optional[type] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.target = target
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ConstructionError(InjectionError):
    """实例化、字段注入或 @post_construct 调用过程中发生的其他错误"""

    def __init__(
        self,
        message: str = "构造失败",
        target: Optional[type] = None,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.target = target
        self.cause = cause
        super().__init__(message, "CONSTRUCTION_ERROR", details)


class LifecycleError(InjectionError):
    """生命周期错误异常"""

    def __init__(
        self,
        message: str = "生命周期错误",
        phase: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.phase = phase
        super().__init__(message, "LIFECYCLE_ERROR", details)
