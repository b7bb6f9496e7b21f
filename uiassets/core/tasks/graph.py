from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from ..errors import CircularTaskError, UnknownTaskError


@dataclass
class TaskNode:
    name: str
    description: str = ""
    depends_on: List[str] = field(default_factory=list)
    action: Optional[Callable[..., object]] = None


class TaskGraph:
    def __init__(self):
        self.nodes: Dict[str, TaskNode] = {}

    def add_node(self, node: TaskNode):
        self.nodes[node.name] = node

    def get(self, name: str) -> TaskNode:
        node = self.nodes.get(name)
        if node is None:
            raise UnknownTaskError(f"Don't know how to build task '{name}'")
        return node

    def execution_order(self, targets: List[str]) -> List[str]:
        """
        Prerequisites first, depth-first in declared order; every task
        appears once even when several targets share it.
        """
        order: List[str] = []
        done: Set[str] = set()
        visiting: List[str] = []

        def visit(name: str):
            if name in done:
                return
            if name in visiting:
                cycle = " => ".join(visiting[visiting.index(name):] + [name])
                raise CircularTaskError(f"Circular task dependency detected: {cycle}")
            node = self.get(name)
            visiting.append(name)
            for dep in node.depends_on:
                visit(dep)
            visiting.pop()
            done.add(name)
            order.append(name)

        for t in targets:
            visit(t)
        return order

    def described(self) -> List[TaskNode]:
        return sorted((n for n in self.nodes.values() if n.description), key=lambda n: n.name)
