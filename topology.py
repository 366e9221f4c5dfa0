from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, TextIO

import yaml

from graph import DuplicateNode, Graph, NodeNotFound, SPFError


logger = logging.getLogger(__name__)


class ConfigError(SPFError, ValueError):
    """The topology configuration is malformed."""


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        try:
            config = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level.")
    return config


def _validate_edge(entry) -> tuple:
    if not isinstance(entry, (list, tuple)) or len(entry) != 3:
        raise ConfigError(f"Edge entry {entry!r} must be [origin, target, latency].")
    origin, target, weight = entry
    # bool is an int subclass; a YAML `true` is not a latency.
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ConfigError(f"Edge {origin}-{target}: latency {weight!r} is not an integer.")
    if weight < 0:
        raise ConfigError(f"Edge {origin}-{target}: latency {weight} is negative.")
    return str(origin), str(target), weight


def build_graph(graph_config: Dict, report: TextIO | None = None) -> Graph:
    """Populate a Graph from the ``graph`` section of a topology config.

    Routers are inserted first, then links. A router that is already
    registered or a link naming an unknown router is reported and skipped;
    structural problems with the section itself raise ConfigError.
    """
    if report is None:
        report = sys.stderr
    if not isinstance(graph_config, dict):
        raise ConfigError("The 'graph' section must be a mapping.")
    for key in ("nodes", "edges"):
        if not isinstance(graph_config.get(key), list):
            raise ConfigError(f"The 'graph' section needs a '{key}' list.")

    edges = [_validate_edge(entry) for entry in graph_config["edges"]]

    graph = Graph()
    for name in graph_config["nodes"]:
        try:
            graph.add_node(str(name))
        except DuplicateNode as exc:
            print(f"Warning: {exc} Skipping.", file=report)

    for origin, target, weight in edges:
        try:
            graph.add_edge(origin, target, weight)
        except NodeNotFound as exc:
            print(f"Warning: {exc} Link {origin}-{target} skipped.", file=report)

    logger.debug("Loaded %d routers and %d links", len(graph), graph.edge_count)
    return graph


def format_topology(graph: Graph) -> str:
    lines: List[str] = ["--- Network topology (LSDB) ---"]
    for index, name in enumerate(graph.nodes):
        links = " ".join(
            f"[{graph.name_of(neighbor)} | {weight}ms]"
            for neighbor, weight in graph.neighbors(index)
        )
        lines.append(f"Router {name:>4} connects to: {links}".rstrip())
    return "\n".join(lines)


def print_topology(graph: Graph) -> None:
    print()
    print(format_topology(graph))
