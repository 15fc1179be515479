"""
MyInject 应用程序基类

提供 start → update 循环 → exit 的生命周期，并持有应用范围内的 Injector
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from loguru import logger

from .clock import Clock
from .config import get_settings
from .di import Injector, singleton
from .logger import setup_logging
from ..exceptions import InjectionError, LifecycleError


@singleton
class Application(ABC):
    """
    非图形应用程序基类

    生命周期：
        on_start()  - 开始执行时调用
        on_update() - 运行期间每轮循环调用
        on_exit()   - 退出前调用

    start() 会把应用自身绑定到 injector（Application 与具体子类两个键），
    因此被注入的组件可以通过字段 `app: Application = Inject()` 拿到当前应用。
    """

    def __init__(
            self,
            name: Optional[str] = None,
            config_file: Optional[str] = None,
            injector: Optional[Injector] = None
    ):
        """
        初始化应用程序

        Args:
            name: 应用程序名称，默认读取配置 app.name
            config_file: 配置文件路径
            injector: 使用的容器，为 None 时新建
        """
        self.config = get_settings(config_file)
        self.name = name or self.config.get("app.name", "MyInject App")

        setup_logging(config_file)
        self.logger = logger.bind(name=self.name)

        self.injector = injector or Injector()
        self.clock = Clock()
        self.is_running = False

        self.startup_hooks: List[Callable[[], None]] = []
        self.shutdown_hooks: List[Callable[[], None]] = []

    @abstractmethod
    def on_start(self) -> None:
        """开始执行时调用"""

    @abstractmethod
    def on_update(self) -> None:
        """运行期间每轮循环调用"""

    @abstractmethod
    def on_exit(self) -> None:
        """退出前调用"""

    def add_startup_hook(self, hook: Callable[[], None]) -> None:
        """添加启动钩子（在 on_start 之前执行）"""
        self.startup_hooks.append(hook)
        self.logger.debug(f"已添加启动钩子: {hook.__name__}")

    def add_shutdown_hook(self, hook: Callable[[], None]) -> None:
        """添加关闭钩子（在 on_exit 之后执行）"""
        self.shutdown_hooks.append(hook)
        self.logger.debug(f"已添加关闭钩子: {hook.__name__}")

    def start(self) -> None:
        """绑定自身、执行启动钩子并调用 on_start()"""
        self.injector.bind(Application, self)
        self.injector.bind(type(self), self)

        for hook in self.startup_hooks:
            try:
                hook()
            except InjectionError:
                raise
            except Exception as e:
                raise LifecycleError(f"启动钩子执行失败: {e}", phase="start") from e

        self.logger.info(f"🚀 启动 {self.name}...")
        self.clock.start()
        self.on_start()
        self.is_running = True

    def update(self) -> None:
        self.clock.tick()
        self.on_update()

    def exit(self) -> None:
        """调用 on_exit() 并执行关闭钩子"""
        self.on_exit()

        for hook in self.shutdown_hooks:
            try:
                hook()
            except Exception as e:
                self.logger.error(f"关闭钩子执行失败: {e}")

        self.logger.info(f"🛑 {self.name} 已关闭")

    def run(self) -> None:
        """
        运行应用程序，直到 quit() 被调用

        Raises:
            LifecycleError: 应用已经在运行
        """
        if self.is_running:
            raise LifecycleError(f"{self.name} 已经在运行", phase="run")

        self.start()
        try:
            while self.is_running:
                self.update()
        finally:
            self.is_running = False
            self.exit()

    def quit(self) -> None:
        """退出 update 循环"""
        self.is_running = False
