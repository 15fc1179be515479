"""
计时器

提供帧间隔（delta）与累计运行时间，支持暂停与恢复
"""

import time
from typing import Callable


class Clock:
    """可暂停的单调计时器"""

    def __init__(self, time_source: Callable[[], float] = time.monotonic):
        """
        Args:
            time_source: 返回秒数的单调时钟，测试时可替换
        """
        self._now = time_source
        self.anchor_time = 0.0
        self.prev_time = 0.0
        self.paused_time = 0.0
        self.delta = 0.0
        self.is_paused = False
        self.is_running = False

    @property
    def delta_time(self) -> float:
        """最近一次 tick 的间隔（秒）"""
        return self.delta

    @property
    def elapsed(self) -> float:
        """自 start 以来的运行时间（秒），不包含暂停期间"""
        if not self.is_running:
            return 0.0
        current = self.paused_time if self.is_paused else self._now()
        return current - self.anchor_time

    def start(self) -> None:
        self.anchor_time = self._now()
        self.prev_time = self.anchor_time
        self.delta = 0.0
        self.is_paused = False
        self.is_running = True

    def reset(self) -> None:
        self.start()

    def pause(self) -> None:
        if self.is_paused:
            return
        self.paused_time = self._now()
        self.is_paused = True

    def resume(self) -> None:
        if not self.is_paused:
            return
        current = self._now()
        self.anchor_time += current - self.paused_time
        self.prev_time = current
        self.is_paused = False

    def tick(self) -> float:
        """更新 delta，暂停时保持不变"""
        if not self.is_paused:
            current = self._now()
            self.delta = current - self.prev_time
            self.prev_time = current
        return self.delta

    def __repr__(self) -> str:
        return f"Clock(running={self.is_running}, paused={self.is_paused}, elapsed={self.elapsed:.3f})"
