#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
依赖注入示例应用

展示 MyInject 的单例、构造器注入、字段注入与 @post_construct
"""

import sys
from pathlib import Path

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from myinject import (  # noqa: E402
    Application,
    CircularDependencyError,
    Inject,
    inject,
    post_construct,
    singleton,
)


# ==================== 基础组件 ====================

@singleton
class Window:
    """窗口（单例）"""

    def __init__(self):
        self.frames = 0
        print("✅ Window 已初始化")

    def render(self):
        self.frames += 1


@singleton
class TextureHandler:
    """纹理管理 - 依赖 Window"""

    @inject
    def __init__(self, window: Window):
        self.window = window
        self.textures = {}
        print("✅ TextureHandler 已初始化（依赖: Window）")


class Card:
    """卡牌 - 每次创建新实例"""

    textures: TextureHandler = Inject()

    @post_construct
    def load(self):
        self.texture = self.textures.textures.setdefault("card", object())


# ==================== 循环依赖示例 ====================

class Shader:
    @inject
    def __init__(self, mesh: 'Mesh'):
        self.mesh = mesh


class Mesh:
    shader: Shader = Inject()


# ==================== 应用 ====================

class Game(Application):
    """运行若干帧后退出"""

    window: Window

    def on_start(self):
        self.window = self.injector.create(Window)
        self.cards = [self.injector.create(Card) for _ in range(3)]
        print(f"🃏 已创建 {len(self.cards)} 张卡牌，共享纹理: "
              f"{len({id(card.texture) for card in self.cards}) == 1}")

        try:
            self.injector.create(Shader)
        except CircularDependencyError as e:
            print(f"⚠️ {e}")

    def on_update(self):
        self.window.render()
        if self.window.frames >= 3:
            self.quit()

    def on_exit(self):
        print(f"🛑 共渲染 {self.window.frames} 帧")


if __name__ == "__main__":
    Game(name="依赖注入示例").run()
