"""
类型描述符

通过内省读取类上的注入标记，生成 TypeDescriptor 并按类型缓存
"""

import inspect
import sys
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from .decorators import (
    DESCRIPTOR_ATTR,
    INJECT_ATTR,
    POST_CONSTRUCT_ATTR,
    Inject,
    has_marker,
    is_singleton,
)
from ...exceptions import ConfigurationError

INIT = '__init__'


@dataclass(frozen=True)
class ParameterSpec:
    """可注入构造器的参数"""
    name: str
    type_: type
    positional_only: bool = False


@dataclass(frozen=True)
class TypeDescriptor:
    """
    类型的注入元数据

    Attributes:
        type_: 描述的类型
        is_singleton: 是否带有 @singleton 标记
        constructor: 可注入构造器名称（'__init__' 或 classmethod/staticmethod 名称），
                     None 表示使用无参构造
        parameters: 构造器参数，按声明顺序
        fields: Inject 字段 (名称, 类型)，按 MRO 从基类到子类的声明顺序
        hooks: @post_construct 方法名称，顺序同 fields
    """
    type_: type
    is_singleton: bool = False
    constructor: Optional[str] = None
    parameters: Tuple[ParameterSpec, ...] = ()
    fields: Tuple[Tuple[str, type], ...] = ()
    hooks: Tuple[str, ...] = ()

    @property
    def dependencies(self) -> List[type]:
        """构造器参数与字段依赖的所有类型（按解析顺序）"""
        return [p.type_ for p in self.parameters] + [t for _, t in self.fields]


def _unwrap_annotation(annotation: Any) -> Any:
    """Optional[X] -> X"""
    if typing.get_origin(annotation) is typing.Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _resolve_annotation(
    annotation: Any,
    cls: type,
    what: str,
    globalns: Dict[str, Any],
    localns: Optional[Dict[str, Any]] = None
) -> Any:
    """只解析单个注解（包括其中的字符串前向引用），其他无关注解不参与求值"""
    stub = lambda: None  # noqa: E731
    stub.__annotations__ = {'annotation': annotation}
    try:
        return typing.get_type_hints(stub, globalns=globalns, localns=localns)['annotation']
    except (NameError, TypeError, SyntaxError) as e:
        raise ConfigurationError(
            f"无法解析 {cls.__name__}.{what} 的类型注解: {e}",
            target=cls
        ) from e


def _module_globals(obj: Any) -> Dict[str, Any]:
    module = sys.modules.get(getattr(obj, '__module__', None) or '')
    return vars(module) if module is not None else {}


def _require_type(annotation: Any, cls: type, what: str) -> type:
    annotation = _unwrap_annotation(annotation)
    if not isinstance(annotation, type):
        raise ConfigurationError(
            f"{cls.__name__}.{what} 的类型 {annotation!r} 不是可构造的类",
            target=cls
        )
    return annotation


def _mro(cls: type) -> List[type]:
    """从基类到子类，排除 object"""
    return [klass for klass in reversed(cls.__mro__) if klass is not object]


def _member_names(cls: type, predicate) -> List[str]:
    names: List[str] = []
    for klass in _mro(cls):
        for name, member in vars(klass).items():
            if name not in names and predicate(member):
                names.append(name)
    # 子类覆盖后生效的成员必须仍然满足条件
    return [name for name in names if predicate(inspect.getattr_static(cls, name))]


def _find_constructor(cls: type) -> Optional[str]:
    candidates = []
    if has_marker(cls.__init__, INJECT_ATTR):
        candidates.append(INIT)
    candidates.extend(_member_names(
        cls,
        lambda m: isinstance(m, (classmethod, staticmethod)) and has_marker(m, INJECT_ATTR)
    ))

    if len(candidates) > 1:
        raise ConfigurationError(
            f"{cls.__name__} 存在多个 @inject 构造器: {', '.join(candidates)}",
            target=cls,
            details={'constructors': candidates}
        )
    return candidates[0] if candidates else None


def _constructor_parameters(cls: type, constructor: str) -> Tuple[ParameterSpec, ...]:
    if constructor == INIT:
        func = cls.__init__
        signature = inspect.signature(func)
        params = list(signature.parameters.values())[1:]  # 跳过 self
    else:
        func = getattr(cls, constructor)
        params = list(inspect.signature(func).parameters.values())

    func = getattr(func, '__func__', func)
    globalns = getattr(func, '__globals__', None) or _module_globals(cls)
    specs = []
    for param in params:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        # 有默认值的参数保留默认值，不参与注入
        if param.default is not param.empty:
            continue
        if param.annotation is param.empty:
            raise ConfigurationError(
                f"{cls.__name__}.{constructor} 的参数 '{param.name}' 缺少类型注解",
                target=cls
            )
        what = f"{constructor}({param.name})"
        annotation = _resolve_annotation(param.annotation, cls, what, globalns, dict(vars(cls)))
        specs.append(ParameterSpec(
            name=param.name,
            type_=_require_type(annotation, cls, what),
            positional_only=param.kind is param.POSITIONAL_ONLY
        ))
    return tuple(specs)


def _fields(cls: type) -> Tuple[Tuple[str, type], ...]:
    names = _member_names(cls, lambda m: isinstance(m, Inject))
    if not names:
        return ()

    fields = []
    for name in names:
        marker = inspect.getattr_static(cls, name)
        field_type = marker.type_
        if field_type is None:
            # 使用声明该注解的类所在模块解析，避免求值无关注解
            owner = next(
                (klass for klass in cls.__mro__ if name in inspect.get_annotations(klass)),
                None
            )
            if owner is None:
                raise ConfigurationError(
                    f"{cls.__name__}.{name} 缺少类型注解，请使用 Inject(类型)",
                    target=cls
                )
            field_type = _resolve_annotation(
                inspect.get_annotations(owner)[name],
                cls,
                name,
                _module_globals(owner),
                dict(vars(owner))
            )
        fields.append((name, _require_type(field_type, cls, name)))
    return tuple(fields)


def _hooks(cls: type) -> Tuple[str, ...]:
    names = _member_names(cls, lambda m: has_marker(m, POST_CONSTRUCT_ATTR))
    for name in names:
        func = getattr(cls, name)
        required = [
            p for p in list(inspect.signature(func).parameters.values())[1:]
            if p.default is p.empty and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        ]
        if required:
            raise ConfigurationError(
                f"@post_construct 方法 {cls.__name__}.{name} 不能有必需参数",
                target=cls
            )
    return tuple(names)


def describe(cls: type) -> TypeDescriptor:
    """
    生成并缓存类型的注入描述符

    描述符保存在类自身的 __myinject_descriptor__ 属性上，随类一起回收；
    @singleton 会清除已缓存的描述符，其他标记需在首次 describe 之前完成。
    无法写入属性的类型（内置类型等）每次重新内省。

    Args:
        cls: 要描述的类

    Returns:
        TypeDescriptor

    Raises:
        ConfigurationError: 注入元数据有歧义或不完整
    """
    if not isinstance(cls, type):
        raise ConfigurationError(f"{cls!r} 不是类", details={'target': repr(cls)})

    cached = cls.__dict__.get(DESCRIPTOR_ATTR)
    if cached is not None:
        return cached

    constructor = _find_constructor(cls)
    descriptor = TypeDescriptor(
        type_=cls,
        is_singleton=is_singleton(cls),
        constructor=constructor,
        parameters=_constructor_parameters(cls, constructor) if constructor else (),
        fields=_fields(cls),
        hooks=_hooks(cls),
    )
    logger.debug(
        f"已解析类型描述符: {cls.__name__} "
        f"(singleton={descriptor.is_singleton}, 依赖: {[t.__name__ for t in descriptor.dependencies]})"
    )

    try:
        setattr(cls, DESCRIPTOR_ATTR, descriptor)
    except (TypeError, AttributeError):
        logger.debug(f"{cls.__name__} 不支持写入属性，描述符不缓存")
    return descriptor
