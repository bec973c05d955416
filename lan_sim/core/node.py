"""Node classes for LAN simulation.

This module defines the Node class, which represents an addressable
endpoint in the simulated LAN, and the Hub, which forwards packets that
are not addressed to it.
"""

import logging
from typing import Hashable, List, Optional

from lan_sim.core.link import Link
from lan_sim.core.packet import Packet

logger = logging.getLogger(__name__)


class Node:
    """Represents an addressable endpoint.

    Subclasses change behaviour by overriding consume() and forward().
    A plain node consumes nothing and forwards nothing.

    Attributes:
        address: Identifier of the node, unique within a network.
        outgoing_links: Attached links leaving this node.
        loopback: Link from this node to itself, used for self-addressed packets.
        received_packets: Packets addressed to this node that it received.
    """

    def __init__(self, address: Hashable) -> None:
        """Initialize a node.

        Args:
            address: Identifier of the node.
        """
        self.address = address
        self.outgoing_links: List[Link] = []
        self.loopback = Link(self, self)
        self.received_packets: List[Packet] = []

    def attach(self, link: Link) -> None:
        """Add an outgoing link to this node.

        Called by Link.attach(); adding the same link twice has no effect.

        Args:
            link: The link to add.
        """
        if link.source is not self:
            raise ValueError(f"{link!r} does not leave {self!r}")
        if link not in self.outgoing_links:
            self.outgoing_links.append(link)

    def has_link_to(self, other: "Node") -> bool:
        """Check whether an outgoing link arrives at another node.

        Args:
            other: The node to look for.

        Returns:
            True if some outgoing link has other as destination.
        """
        return any(link.destination is other for link in self.outgoing_links)

    def links_towards(self, address: Hashable) -> List[Link]:
        """Choose the links a packet for an address should take.

        Self-addressed packets take the loopback. Everything else is
        flooded on every outgoing link, since a node has no topology
        knowledge.

        Args:
            address: Destination address.

        Returns:
            The links to stage the packet on.
        """
        if address == self.address:
            return [self.loopback]
        return list(self.outgoing_links)

    def send(self, packet: Packet, via_link: Optional[Link] = None) -> None:
        """Stage a packet for sending.

        Args:
            packet: The packet to send.
            via_link: Link to use. When omitted, the packet is staged on
                every link returned by links_towards().
        """
        if via_link is not None:
            via_link.emit(packet)
            return
        for link in self.links_towards(packet.destination_address):
            self.send(packet, link)

    def receive(self, packet: Packet, from_link: Link) -> None:
        """Handle a packet delivered by a link.

        Args:
            packet: The packet that arrived.
            from_link: The link that delivered it.
        """
        if packet.destination_address == self.address:
            self.consume(packet)
            self.received_packets.append(packet)
            logger.debug("%r received %r", self, packet)
        else:
            self.forward(packet, from_link)

    def consume(self, packet: Packet) -> None:
        """Do something with a packet addressed to this node."""

    def forward(self, packet: Packet, from_link: Link) -> None:
        """Pass on a packet addressed to another node."""

    def has_received(self, packet: Packet) -> bool:
        """Check whether a packet addressed to this node was received."""
        return packet in self.received_packets

    def __repr__(self) -> str:
        """Return string representation of the node.

        Returns:
            String representation of the node.
        """
        return f"{type(self).__name__}({self.address})"


class Hub(Node):
    """Node that forwards packets to all neighbours but the sender.

    Only the immediate sender is excluded, so flooding still never
    terminates in a topology with cycles.
    """

    def forward(self, packet: Packet, from_link: Link) -> None:
        """Stage a packet on every link except the one back to its sender.

        Args:
            packet: The packet to forward.
            from_link: The link the packet arrived on.
        """
        sender = from_link.source
        for link in self.links_towards(packet.destination_address):
            if link.destination is sender:
                continue
            logger.debug("%r forwarding %r on %r", self, packet, link)
            self.send(packet, link)
