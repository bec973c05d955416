"""Network class for LAN simulation.

This module defines the Network class, a registry of the nodes and links
of a simulated LAN with address based lookups.
"""

import logging
from typing import Any, Callable, Hashable, List, Optional, Tuple

import networkx as nx

from lan_sim.core.errors import NotFound
from lan_sim.core.link import Link
from lan_sim.core.node import Node

logger = logging.getLogger(__name__)


class Network:
    """Registry of nodes and the links between them.

    Attributes:
        nodes: Registered nodes, unique by address.
        links: Links created by connect().
        graph: NetworkX directed graph mirroring the links, keyed by address.
    """

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self.links: List[Link] = []
        self.graph = nx.DiGraph()

    def add(self, node: Node) -> Node:
        """Register a node without connecting it.

        Registering the same node again has no effect.

        Args:
            node: The node to register.

        Returns:
            The registered node.

        Raises:
            ValueError: If another node already uses the same address.
        """
        existing = self.node_at(node.address, lambda: None)
        if existing is node:
            return node
        if existing is not None:
            raise ValueError(f"Address {node.address!r} is already used by {existing!r}")
        self.nodes.append(node)
        self.graph.add_node(node.address, kind=type(node).__name__)
        return node

    def connect(self, node_a: Node, node_b: Node) -> Tuple[Link, Link]:
        """Add a BIDIRECTIONAL connection between two nodes.

        Both nodes are registered if needed, and one attached link is
        created in each direction. Connecting an already connected pair,
        in either order, returns the existing links.

        Args:
            node_a: First node.
            node_b: Second node.

        Returns:
            The link from node_a to node_b and the link back.

        Raises:
            ValueError: If either address is used by another node. Nothing
                is registered in that case.
        """
        if node_a is not node_b and node_a.address == node_b.address:
            raise ValueError(f"{node_a!r} and {node_b!r} share an address")
        for node in (node_a, node_b):
            existing = self.node_at(node.address, lambda: None)
            if existing is not None and existing is not node:
                raise ValueError(f"Address {node.address!r} is already used by {existing!r}")

        self.add(node_a)
        self.add(node_b)

        link_to = self._find_link(node_a, node_b)
        link_from = self._find_link(node_b, node_a)
        if link_to is not None and link_from is not None:
            return link_to, link_from

        had_cycle = self.has_cycle()
        if link_to is None:
            link_to = self._create_link(node_a, node_b)
        if link_from is None:
            link_from = self._create_link(node_b, node_a)

        if not had_cycle and self.has_cycle():
            logger.warning(
                "Connecting %r and %r closes a cycle; flooded packets will not settle",
                node_a,
                node_b,
            )
        return link_to, link_from

    def _find_link(self, source: Node, destination: Node) -> Optional[Link]:
        for link in self.links:
            if link.source is source and link.destination is destination:
                return link
        return None

    def _create_link(self, source: Node, destination: Node) -> Link:
        link = Link(source, destination)
        link.attach()
        self.links.append(link)
        self.graph.add_edge(source.address, destination.address)
        return link

    def node_at(self, address: Hashable, on_missing: Optional[Callable[[], Any]] = None) -> Any:
        """Find the node with an address.

        Args:
            address: Address to look up.
            on_missing: Called, and its result returned, when no node matches.

        Returns:
            The matching node, or the fallback value.

        Raises:
            NotFound: If no node matches and no fallback was given.
        """
        for node in self.nodes:
            if node.address == address:
                return node
        if on_missing is None:
            raise NotFound(address, self.nodes)
        return on_missing()

    def link_from(self, source_address: Hashable, destination_address: Hashable) -> Link:
        """Find the link between two addresses.

        Args:
            source_address: Address of the source node.
            destination_address: Address of the destination node.

        Returns:
            The matching link.

        Raises:
            NotFound: If no such link exists.
        """
        for link in self.links:
            if (
                link.source.address == source_address
                and link.destination.address == destination_address
            ):
                return link
        raise NotFound((source_address, destination_address), self.links)

    def links_from(self, address: Hashable) -> List[Link]:
        """Get the links leaving the node with an address."""
        return [link for link in self.links if link.source.address == address]

    def does_record_node(self, node: Node) -> bool:
        """Check whether this exact node object is registered."""
        return any(recorded is node for recorded in self.nodes)

    def has_cycle(self) -> bool:
        """Check whether the connections form a cycle.

        A link and its reverse do not count as a cycle.

        Returns:
            True if the undirected topology is not a forest.
        """
        if self.graph.number_of_nodes() == 0:
            return False
        return not nx.is_forest(self.graph.to_undirected(as_view=True))

    def pending_links(self) -> List[Link]:
        """Get the links with staged packets, loopbacks included.

        Returns:
            Links with pending packets, loopbacks first in node order,
            then network links in creation order.
        """
        loopbacks = [node.loopback for node in self.nodes]
        return [link for link in loopbacks + self.links if link.has_pending()]

    def is_quiescent(self) -> bool:
        """Check whether no link, loopbacks included, has staged packets."""
        return not self.pending_links()

    def __repr__(self) -> str:
        return f"Network({len(self.nodes)} nodes, {len(self.links)} links)"
