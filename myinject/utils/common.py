"""
公共工具函数
"""

import importlib
import re
from typing import Any


def camel_to_snake(name: str) -> str:
    """
    将驼峰命名转换为下划线分隔的小写形式

    Examples:
        UserService -> user_service
        HTTPClient -> http_client
    """
    # 在大写字母前插入下划线（除了第一个字符）
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    # 处理连续大写字母的情况（如 HTTPClient）
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.lower()


def import_string(path: str) -> Any:
    """
    按 'package.module:attr' 或 'package.module.attr' 导入对象

    Raises:
        ImportError: 模块或属性不存在
    """
    if ':' in path:
        module_name, _, attr_path = path.partition(':')
    else:
        module_name, _, attr_path = path.rpartition('.')
    if not module_name or not attr_path:
        raise ImportError(f"无效的导入路径: {path}")

    obj = importlib.import_module(module_name)
    for attr in attr_path.split('.'):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ImportError(f"{module_name} 中不存在 {attr_path}") from e
    return obj
