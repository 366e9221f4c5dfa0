from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from spf import InvalidEndpoint, format_result, shortest_path
from topology import ConfigError, build_graph, load_config, print_topology


DEFAULT_CONFIG = Path(__file__).resolve().parent / "ospf_topology.yaml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute the OSPF shortest path (SPF) between two routers."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the YAML topology configuration.",
    )
    parser.add_argument("--source", help="Source router (defaults to routing.source).")
    parser.add_argument("--target", help="Target router (defaults to routing.target).")
    parser.add_argument(
        "--no-topology",
        action="store_true",
        help="Skip printing the link-state database before the SPF run.",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Draw the topology with the computed path highlighted.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the topology and path.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save an animation (GIF/MP4) of the packet walk.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log graph construction and SPF progress.",
    )
    return parser


def resolve_endpoints(config: Dict, args: argparse.Namespace) -> tuple:
    """Pick the SPF endpoints: command-line flags first, then ``routing``."""
    routing = config.get("routing")
    if routing is None:
        routing = {}
    if not isinstance(routing, dict):
        raise ConfigError("The 'routing' section must be a mapping.")

    endpoints = []
    for key, flag, default in (("source", args.source, "A"), ("target", args.target, "B")):
        value = routing.get(key, default)
        if value is None or isinstance(value, (bool, list, dict)):
            raise ConfigError(f"routing.{key} must name a router, got {value!r}.")
        endpoints.append(flag or str(value))
    return tuple(endpoints)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if "graph" not in config:
            raise ConfigError(f"{args.config}: missing 'graph' section.")
        graph = build_graph(config["graph"])
        source, target = resolve_endpoints(config, args)
    except (OSError, ConfigError) as exc:
        parser.error(str(exc))

    if not args.no_topology:
        print_topology(graph)

    print(f"\n--- Starting SPF (Dijkstra) calculation from {source} ---")
    try:
        result = shortest_path(graph, source, target)
    except InvalidEndpoint as exc:
        print(exc)
        return 0

    print(format_result(result))

    if args.visualize or args.static_out or args.animation_out:
        from visualize import visualize

        visualize(
            graph,
            result,
            static_out=args.static_out,
            animation_out=args.animation_out,
            show=args.visualize and not args.no_show,
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
