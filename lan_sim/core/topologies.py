"""Topology builders for LAN simulation.

This module provides functions that build small networks out of
addresses: stars around a hub, chains and rings.
"""

from typing import Hashable, Sequence

from lan_sim.core.network import Network
from lan_sim.core.node import Hub, Node


def star_network(hub_address: Hashable, leaves: Sequence[Node]) -> Network:
    """Connect every leaf to a single hub.

    Args:
        hub_address: Address of the hub to create.
        leaves: Nodes around the hub.

    Returns:
        The star network.
    """
    network = Network()
    hub = network.add(Hub(hub_address))
    for leaf in leaves:
        network.connect(leaf, hub)
    return network


def chain_network(nodes: Sequence[Node]) -> Network:
    """Connect nodes one after the other.

    Args:
        nodes: Nodes in chain order.

    Returns:
        The chain network.
    """
    network = Network()
    for node in nodes:
        network.add(node)
    for a, b in zip(nodes, nodes[1:]):
        network.connect(a, b)
    return network


def ring_network(nodes: Sequence[Node]) -> Network:
    """Connect nodes in a ring.

    Flooded packets never settle in a ring of hubs.

    Args:
        nodes: Nodes in ring order; at least three.

    Returns:
        The ring network.
    """
    if len(nodes) < 3:
        raise ValueError(f"A ring needs at least 3 nodes, got {len(nodes)}")
    network = chain_network(nodes)
    network.connect(nodes[-1], nodes[0])
    return network
