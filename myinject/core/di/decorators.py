"""
依赖注入装饰器

提供 @singleton、@inject、@post_construct 标记以及 Inject 字段标记
"""

from typing import Any, Optional

SINGLETON_ATTR = '__myinject_singleton__'
INJECT_ATTR = '__myinject_inject__'
POST_CONSTRUCT_ATTR = '__myinject_post_construct__'
DESCRIPTOR_ATTR = '__myinject_descriptor__'


def singleton(cls):
    """
    单例装饰器

    标记类为单例类型：Injector 只保留一个实例，并在首次构造后自动缓存。
    标记不会被子类继承。

    Example:
        @singleton
        class Window:
            pass
    """
    setattr(cls, SINGLETON_ATTR, True)
    # 已缓存的描述符不再反映新标记
    if DESCRIPTOR_ATTR in cls.__dict__:
        delattr(cls, DESCRIPTOR_ATTR)
    return cls


def is_singleton(cls) -> bool:
    """检查类本身是否带有 @singleton 标记（不查找父类）"""
    return bool(getattr(cls, '__dict__', {}).get(SINGLETON_ATTR, False))


def _mark(func, attr: str):
    # 兼容 @inject 写在 @classmethod 之上的情况
    target = getattr(func, '__func__', func)
    setattr(target, attr, True)
    return func


def inject(func):
    """
    依赖注入装饰器

    标记可注入的构造器：可以是 __init__，也可以是作为替代构造器的 classmethod。
    构造器的每个参数都会按类型注解递归解析。每个类最多只能有一个。

    Example:
        @singleton
        class Engine:
            @inject
            def __init__(self, window: Window):
                self.window = window
    """
    return _mark(func, INJECT_ATTR)


def post_construct(func):
    """
    标记在构造完成后执行的无参方法

    方法在所有 Inject 字段赋值之后、实例返回给调用方之前执行，且每个实例只执行一次。
    """
    return _mark(func, POST_CONSTRUCT_ATTR)


def has_marker(member: Any, attr: str) -> bool:
    """检查类成员（函数、classmethod、staticmethod）是否带有指定标记"""
    target = getattr(member, '__func__', member)
    return bool(getattr(target, attr, False))


class Inject:
    """
    可注入字段标记

    作为类属性的默认值使用，字段类型取自类型注解或显式传入的 type_：

        class Engine:
            window: Window = Inject()
            clock = Inject(Clock)

    字段在注入之前被访问会抛出 AttributeError。
    """

    def __init__(self, type_: Optional[type] = None):
        self.type_ = type_
        self.name: Optional[str] = None

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        raise AttributeError(f"字段 '{owner.__name__}.{self.name}' 尚未注入")

    def __repr__(self) -> str:
        type_name = getattr(self.type_, '__name__', None)
        return f"Inject({type_name})" if type_name else "Inject()"
