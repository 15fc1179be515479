#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MyInject CLI 工具

提供依赖关系分析与实例构造检查功能
"""

import sys
from pathlib import Path

import click

from .core.di import DependencyGraph, Injector, describe
from .exceptions import CircularDependencyError, InjectionError
from .utils import import_string


def _load_type(target: str, path: str) -> type:
    """导入 'module:Class' 形式的目标类型"""
    search_path = str(Path(path).resolve())
    if search_path not in sys.path:
        sys.path.insert(0, search_path)

    try:
        cls = import_string(target)
    except ImportError as e:
        raise click.BadParameter(str(e), param_hint='TARGET') from e
    if not isinstance(cls, type):
        raise click.BadParameter(f"{target} 不是类", param_hint='TARGET')
    return cls


@click.group()
def cli():
    """MyInject 命令行工具 - 依赖注入检查"""
    pass


@cli.command()
@click.argument('target')
@click.option('--path', default='.', help='导入模块时加入 sys.path 的目录（默认为当前目录）')
def graph(target: str, path: str):
    """显示 TARGET（module:Class）的依赖关系与初始化顺序"""
    cls = _load_type(target, path)

    try:
        dependency_graph = DependencyGraph().add(cls)
    except InjectionError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(f"📦 {cls.__name__} 的依赖关系:")
    for node in dependency_graph:
        deps = ', '.join(dep.__name__ for dep in dependency_graph.get_dependencies(node))
        marker = ' [singleton]' if describe(node).is_singleton else ''
        click.echo(f"  • {node.__name__}{marker} -> {deps or '(无)'}")
    click.echo()

    try:
        order = dependency_graph.get_initialization_order()
    except CircularDependencyError as e:
        for cycle in dependency_graph.detect_circular_dependencies():
            click.echo(f"❌ 循环依赖: {' → '.join(node.__name__ for node in cycle)}", err=True)
        click.echo(f"   {e.message}", err=True)
        sys.exit(1)

    click.echo("🔧 初始化顺序:")
    for index, node in enumerate(order, 1):
        click.echo(f"  {index}. {node.__name__}")


@cli.command()
@click.argument('target')
@click.option('--path', default='.', help='导入模块时加入 sys.path 的目录（默认为当前目录）')
@click.option('--early-cache', is_flag=True, help='在字段注入之前缓存单例（兼容旧行为）')
def create(target: str, path: str, early_cache: bool):
    """通过 Injector 构造 TARGET（module:Class）并显示结果"""
    cls = _load_type(target, path)
    injector = Injector(early_singleton_cache=early_cache or None)

    try:
        instance = injector.create(cls)
    except InjectionError as e:
        click.echo(f"❌ 构造 {cls.__name__} 失败 [{e.code}]: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"✅ 已创建 {cls.__name__}: {instance!r}")
    singletons = injector.singletons()
    if singletons:
        click.echo("📚 已缓存的单例:")
        for key in singletons:
            click.echo(f"  • {key.__name__}")


def main():
    cli()


if __name__ == '__main__':
    main()
