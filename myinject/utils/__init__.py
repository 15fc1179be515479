"""
工具函数模块
"""

from .common import camel_to_snake, import_string

__all__ = [
    "camel_to_snake",
    "import_string",
]
