from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from heapq import heappop, heappush
from typing import List, Optional, Tuple, Union

from graph import Graph, SPFError


logger = logging.getLogger(__name__)

UNREACHABLE = math.inf


class InvalidEndpoint(SPFError, LookupError):
    def __init__(self, source: str, target: str, missing: List[str]) -> None:
        super().__init__(
            "Invalid source or target router: " + ", ".join(repr(name) for name in missing)
        )
        self.source = source
        self.target = target
        self.missing = missing


@dataclass(frozen=True)
class ShortestPath:
    source: str
    target: str
    total_cost: int
    path: List[str] = field(default_factory=list)

    @property
    def hops(self) -> int:
        return len(self.path) - 1

    def format(self) -> str:
        return " -> ".join(self.path)


@dataclass(frozen=True)
class NoPathExists:
    source: str
    target: str


SPFResult = Union[ShortestPath, NoPathExists]


def run_dijkstra(
    graph: Graph, source: int, target: Optional[int] = None
) -> Tuple[List[float], List[Optional[int]]]:
    """Relax edges outward from ``source`` in order of tentative distance.

    distances[v] holds the best-known latency from the source to v and
    predecessors[v] the previous router on that path. When ``target`` is
    given the loop stops as soon as the target is settled, so distances of
    routers that were not settled yet may still be tentative.
    """
    distances: List[float] = [UNREACHABLE] * len(graph)
    predecessors: List[Optional[int]] = [None] * len(graph)
    distances[source] = 0

    queue: List[Tuple[float, int]] = [(0, source)]

    while queue:
        distance_u, u = heappop(queue)
        # Stale entry: u was already settled through a cheaper push.
        if distance_u > distances[u]:
            continue
        if u == target:
            break

        for v, weight in graph.neighbors(u):
            candidate = distance_u + weight
            if candidate < distances[v]:
                distances[v] = candidate
                predecessors[v] = u
                heappush(queue, (candidate, v))

    return distances, predecessors


def shortest_path(graph: Graph, source: str, target: str) -> SPFResult:
    """Compute the minimum-latency route between two named routers.

    Raises InvalidEndpoint when either name is not registered. An
    unreachable target is a regular outcome and yields NoPathExists.
    """
    source_index = graph.resolve_index(source)
    target_index = graph.resolve_index(target)
    missing = [
        name
        for name, index in ((source, source_index), (target, target_index))
        if index is None
    ]
    if missing:
        raise InvalidEndpoint(source, target, missing)

    logger.debug("Starting SPF calculation from %s to %s", source, target)
    distances, predecessors = run_dijkstra(graph, source_index, target_index)

    cost = distances[target_index]
    if cost == UNREACHABLE:
        logger.debug("No route between %s and %s", source, target)
        return NoPathExists(source, target)

    path: List[str] = []
    at: Optional[int] = target_index
    while at is not None:
        path.append(graph.name_of(at))
        at = predecessors[at]
    path.reverse()

    return ShortestPath(source=source, target=target, total_cost=int(cost), path=path)


def format_result(result: SPFResult) -> str:
    if isinstance(result, NoPathExists):
        return f"No route available between {result.source} and {result.target}"
    return "\n".join(
        [
            "Shortest path found!",
            f"Total cost (latency): {result.total_cost} ms",
            f"Route: {result.format()}",
        ]
    )
