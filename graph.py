from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


logger = logging.getLogger(__name__)


class SPFError(Exception):
    """Base class for every error raised by the SPF calculator."""


class NodeNotFound(SPFError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Router {name!r} does not exist.")
        self.name = name


class DuplicateNode(SPFError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Router {name!r} is already registered.")
        self.name = name


@dataclass(frozen=True)
class Edge:
    origin: str
    target: str
    weight: int


class Graph:
    """Undirected weighted router graph (the link-state database).

    Routers are registered by name and addressed internally by a dense
    index assigned in insertion order. Each adjacency record keeps its
    (neighbour index, weight) pairs in the order the links were added.
    """

    def __init__(
        self,
        nodes: Iterable[str] = (),
        edges: Iterable[Tuple[str, str, int]] = (),
    ) -> None:
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        self._adjacency: List[List[Tuple[int, int]]] = []
        self._edges: List[Tuple[int, int, int]] = []

        for name in nodes:
            self.add_node(name)
        for origin, target, weight in edges:
            self.add_edge(origin, target, weight)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def nodes(self) -> List[str]:
        return list(self._names)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def add_node(self, name: str) -> int:
        if name in self._index:
            raise DuplicateNode(name)
        index = len(self._names)
        self._names.append(name)
        self._index[name] = index
        self._adjacency.append([])
        logger.debug("Registered router %s as #%d", name, index)
        return index

    def add_edge(self, origin: str, target: str, weight: int) -> None:
        # bool is an int subclass; True is not a latency.
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise TypeError(f"Link {origin}-{target}: latency {weight!r} is not an integer.")
        # Both endpoints are resolved before anything is appended so a
        # failed insertion never leaves a one-way link behind.
        origin_index = self.resolve_index(origin)
        if origin_index is None:
            raise NodeNotFound(origin)
        target_index = self.resolve_index(target)
        if target_index is None:
            raise NodeNotFound(target)

        self._adjacency[origin_index].append((target_index, weight))
        self._adjacency[target_index].append((origin_index, weight))
        self._edges.append((origin_index, target_index, weight))
        logger.debug("Linked %s <-> %s (%d ms)", origin, target, weight)

    def resolve_index(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def name_of(self, index: int) -> str:
        return self._names[index]

    def neighbors(self, index: int) -> Tuple[Tuple[int, int], ...]:
        return tuple(self._adjacency[index])

    def edges(self) -> Iterator[Edge]:
        """Yield every undirected link once, in insertion order."""
        for origin, target, weight in self._edges:
            yield Edge(self._names[origin], self._names[target], weight)

    def path_cost(self, path: Sequence[str]) -> int:
        """Return the total latency of walking along the given router sequence."""
        if len(path) < 2:
            return 0

        total_cost = 0
        for u, v in zip(path[:-1], path[1:]):
            u_index = self.resolve_index(u)
            v_index = self.resolve_index(v)
            if u_index is None or v_index is None:
                raise ValueError(f"Edge {u}-{v} not present in graph.")
            weight = min(
                (cost for neighbor, cost in self.neighbors(u_index) if neighbor == v_index),
                default=None,
            )
            if weight is None:
                raise ValueError(f"Edge {u}-{v} not present in graph.")
            total_cost += weight
        return total_cost
