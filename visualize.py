from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from graph import Graph
from spf import NoPathExists, SPFResult


def build_networkx_graph(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(graph.nodes)
    for edge in graph.edges():
        # Parallel links collapse to the cheapest one, which is the one SPF uses.
        if g.has_edge(edge.origin, edge.target):
            if g[edge.origin][edge.target]["latency"] <= edge.weight:
                continue
        g.add_edge(edge.origin, edge.target, latency=edge.weight)
    return g


def compute_layout(graph: nx.Graph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def route_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def result_summary(result: SPFResult) -> List[str]:
    if isinstance(result, NoPathExists):
        return [
            f"Source: {result.source}",
            f"Target: {result.target}",
            "No route available",
        ]
    return [
        f"Source: {result.source}",
        f"Target: {result.target}",
        f"Total latency: {result.total_cost} ms",
        f"Hops: {result.hops}",
    ]


def _route(result: SPFResult) -> List[str]:
    return [] if isinstance(result, NoPathExists) else result.path


def draw_static_figure(
    graph_nx: nx.Graph,
    layout: Dict[str, Tuple[float, float]],
    result: SPFResult,
    output: Path | None,
    show: bool,
) -> None:
    fig, ax = plt.subplots(figsize=(10, 8))

    route = _route(result)
    endpoints = {result.source, result.target}
    node_colors = [
        "#d62728" if node in endpoints else "#2ca02c" if node in route else "#c7c7c7"
        for node in graph_nx.nodes
    ]

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    path_edges = route_edges(route)
    if path_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_edges,
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )

    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=600, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    edge_labels = {(u, v): f"{data['latency']}ms" for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    ax.text(
        1.02,
        0.5,
        "\n".join(result_summary(result)),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("OSPF SPF – Shortest Path Overview")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def animate_path(
    graph_nx: nx.Graph,
    layout: Dict[str, Tuple[float, float]],
    result: SPFResult,
    output: Path | None,
    show: bool,
) -> None:
    route = _route(result)
    if not route:
        return

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)
    nx.draw_networkx_nodes(graph_nx, layout, node_color="#c7c7c7", node_size=500, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    path_line, = ax.plot([], [], color="#d62728", linewidth=2.0, zorder=2)
    current_edge_line, = ax.plot([], [], color="#ff7f0e", linewidth=3.0, zorder=3)
    packet_marker = ax.scatter([], [], s=160, c="#1f77b4", zorder=4)
    status_text = ax.text(
        0.02,
        0.98,
        "",
        transform=ax.transAxes,
        va="top",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("OSPF SPF – Packet Walk")

    def init():
        path_line.set_data([], [])
        current_edge_line.set_data([], [])
        packet_marker.set_offsets([[float("nan"), float("nan")]])
        status_text.set_text("")
        return path_line, current_edge_line, packet_marker, status_text

    def update(frame: int):
        node = route[frame]
        x, y = layout[node]
        prefix = route[: frame + 1]
        path_line.set_data([layout[n][0] for n in prefix], [layout[n][1] for n in prefix])
        packet_marker.set_offsets([[x, y]])

        elapsed = 0
        if frame > 0:
            prev = route[frame - 1]
            x_prev, y_prev = layout[prev]
            current_edge_line.set_data([x_prev, x], [y_prev, y])
            elapsed = sum(graph_nx[u][v]["latency"] for u, v in route_edges(prefix))
        else:
            current_edge_line.set_data([], [])

        status_text.set_text(
            "\n".join(
                [
                    f"Hop {frame}/{len(route) - 1}",
                    f"At router: {node}",
                    f"Latency so far: {elapsed} ms",
                ]
            )
        )
        return path_line, current_edge_line, packet_marker, status_text

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=len(route),
        init_func=init,
        interval=800,
        blit=False,
    )

    if output:
        output_path = Path(output)
        suffix = output_path.suffix.lower()
        if suffix == ".gif":
            anim.save(output_path, writer=animation.PillowWriter(fps=1))
        elif suffix in {".mp4", ".m4v"}:
            anim.save(output_path, writer=animation.FFMpegWriter(fps=1))
        else:
            anim.save(output_path)

    if show:
        plt.show()
    else:
        plt.close(fig)


def visualize(
    graph: Graph,
    result: SPFResult,
    static_out: Path | None = None,
    animation_out: Path | None = None,
    show: bool = True,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)
    draw_static_figure(graph_nx, layout, result, output=static_out, show=show)
    animate_path(graph_nx, layout, result, output=animation_out, show=show)
