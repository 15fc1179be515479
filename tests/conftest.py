"""Pytest fixtures for MyInject tests."""

import pytest

from myinject import Injector
from myinject.core.config import reload_config

import sample_app


@pytest.fixture(autouse=True)
def fresh_config():
    """每个测试使用重新加载的配置"""
    reload_config()
    yield
    reload_config()


@pytest.fixture(autouse=True)
def clear_events():
    sample_app.events.clear()
    yield
    sample_app.events.clear()


@pytest.fixture
def injector():
    """默认模式：单例在完全初始化后才缓存"""
    return Injector(early_singleton_cache=False)


@pytest.fixture
def early_injector():
    """兼容模式：单例在字段注入之前缓存"""
    return Injector(early_singleton_cache=True)
