"""Visualization utilities for LAN simulation.

This module provides functions for drawing the topology of a network
and the traffic each link carried.
"""

import os
from typing import Any, Dict, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np

from lan_sim.core.network import Network
from lan_sim.core.node import Hub


def _save_or_show(fig, filename: Optional[str], block: bool) -> None:
    if filename:
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(filename)
        plt.close(fig)
    else:
        plt.show(block=block)
        if not block:
            plt.pause(0.001)


def save_network_visualization(
    network: Network,
    filename: Optional[str] = None,
    figsize: Tuple[int, int] = (10, 8),
    block: bool = True,
    seed: int = 42,
) -> None:
    """Save network topology visualization to a file.

    Hubs are drawn in orange, every other node in light blue.

    Args:
        network: The network to draw.
        filename: Output filename, or None to show it immediately.
        figsize: Figure size as (width, height) in inches.
        block: Whether showing the figure blocks until it is closed.
        seed: Seed for the layout.
    """
    fig = plt.figure(figsize=figsize)

    graph = network.graph.to_undirected()
    pos = nx.spring_layout(graph, seed=seed)

    colors = [
        "orange" if isinstance(network.node_at(address), Hub) else "lightblue"
        for address in graph.nodes()
    ]
    nx.draw_networkx_nodes(graph, pos, node_size=800, node_color=colors)
    nx.draw_networkx_edges(graph, pos, edge_color="gray")
    nx.draw_networkx_labels(graph, pos, font_size=12)

    plt.axis("off")
    plt.tight_layout()

    _save_or_show(fig, filename, block)


def plot_link_transmissions(
    metrics: Dict[str, Any],
    filename: Optional[str] = None,
    block: bool = True,
) -> None:
    """Plot the number of packets each link transmitted.

    Args:
        metrics: Metrics returned by NetworkSimulator.run().
        filename: Output filename, or None to show it immediately.
        block: Whether showing the figure blocks until it is closed.
    """
    link_transmissions = metrics["link_transmissions"]
    labels = list(link_transmissions.keys())
    counts = list(link_transmissions.values())

    fig, ax = plt.subplots(figsize=(max(6, len(labels)), 5))
    x = np.arange(len(labels))

    ax.bar(x, counts, width=0.5)
    ax.set_ylabel("Packets transmitted")
    ax.set_title("Link Transmissions")
    ax.set_xlabel("Link")
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")

    plt.tight_layout()

    _save_or_show(fig, filename, block)
