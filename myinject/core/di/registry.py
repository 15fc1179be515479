"""
依赖关系图

在不构造任何实例的前提下，根据类型描述符分析依赖关系、检测循环依赖、计算初始化顺序
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

from loguru import logger

from .descriptor import describe
from ...exceptions import CircularDependencyError

if TYPE_CHECKING:
    from .container import Injector


class DependencyGraph:
    """依赖关系图"""

    def __init__(self, injector: Optional['Injector'] = None):
        """
        初始化依赖关系图

        Args:
            injector: 可选的容器，已缓存（或已绑定）的类型视为叶子节点，不再展开
        """
        self.injector = injector
        self.types: List[type] = []
        self.dependencies: Dict[type, List[type]] = {}  # type -> 依赖的类型
        self.dependents: Dict[type, List[type]] = {}  # type -> 依赖它的类型

    def add(self, *roots: type) -> 'DependencyGraph':
        """
        从根类型开始递归加入所有依赖

        Args:
            *roots: 根类型

        Returns:
            self，便于链式调用

        Raises:
            ConfigurationError: 某个类型的注入元数据有歧义
        """
        pending = deque(roots)
        while pending:
            cls = pending.popleft()
            if cls in self.dependencies:
                continue

            self.types.append(cls)
            self.dependencies[cls] = []
            self.dependents.setdefault(cls, [])

            if self.injector is not None and self.injector.has(cls):
                continue

            for dep in describe(cls).dependencies:
                if dep not in self.dependencies[cls]:
                    self.dependencies[cls].append(dep)
                dependents = self.dependents.setdefault(dep, [])
                if cls not in dependents:
                    dependents.append(cls)
                pending.append(dep)

        return self

    def get_dependencies(self, cls: type) -> List[type]:
        """获取类型直接依赖的类型列表"""
        return list(self.dependencies.get(cls, []))

    def get_dependents(self, cls: type) -> List[type]:
        """获取直接依赖此类型的类型列表"""
        return list(self.dependents.get(cls, []))

    def detect_circular_dependencies(self) -> List[List[type]]:
        """
        检测循环依赖

        Returns:
            循环依赖列表，每个元素是一个首尾相同的依赖链，例如 [A, B, A]
        """
        cycles = []
        visited = set()
        rec_stack = set()
        path: List[type] = []

        def dfs(node: type) -> None:
            if node in rec_stack:
                cycle_start = path.index(node)
                cycles.append(path[cycle_start:] + [node])
                return

            if node in visited:
                return

            visited.add(node)
            rec_stack.add(node)
            path.append(node)

            for neighbor in self.dependencies.get(node, []):
                dfs(neighbor)

            rec_stack.remove(node)
            path.pop()

        for cls in self.types:
            if cls not in visited:
                dfs(cls)

        return cycles

    def get_initialization_order(self) -> List[type]:
        """
        获取初始化顺序（拓扑排序，依赖在前）

        Returns:
            类型列表

        Raises:
            CircularDependencyError: 存在循环依赖
        """
        cycles = self.detect_circular_dependencies()
        if cycles:
            logger.error(f"无法计算初始化顺序，检测到 {len(cycles)} 个循环依赖")
            raise CircularDependencyError(cycles[0], details={'cycles': len(cycles)})

        in_degree = {cls: len(self.dependencies[cls]) for cls in self.types}
        queue = deque(cls for cls in self.types if in_degree[cls] == 0)
        result = []

        while queue:
            cls = queue.popleft()
            result.append(cls)
            for dependent in self.dependents.get(cls, []):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        return result

    def __contains__(self, cls: type) -> bool:
        return cls in self.dependencies

    def __iter__(self) -> Iterator[type]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)
