"""Link class for LAN simulation.

This module defines the Link class, which represents a one-way
connection from one node to another in the simulated LAN.
"""

import logging
from collections import deque
from typing import Deque, TYPE_CHECKING

from lan_sim.core.errors import PacketNotPending
from lan_sim.core.packet import Packet

if TYPE_CHECKING:
    from lan_sim.core.node import Node

logger = logging.getLogger(__name__)


class Link:
    """Represents a directed link between two nodes.

    Emitting a packet only stages it; nothing reaches the destination
    until someone calls transmit for that packet.

    Attributes:
        source: Node the link leaves from.
        destination: Node the link arrives at.
        pending_packets: Packets staged for transmission, oldest first.
        packets_transmitted: Number of packets delivered through this link.
    """

    def __init__(self, source: "Node", destination: "Node") -> None:
        """Initialize a link.

        The link is not known to its source until attach() is called.

        Args:
            source: Node the link leaves from.
            destination: Node the link arrives at.
        """
        self.source = source
        self.destination = destination
        self.pending_packets: Deque[Packet] = deque()
        self.packets_transmitted = 0

    def attach(self) -> None:
        """Register this link as an outgoing link of its source node."""
        self.source.attach(self)

    def emit(self, packet: Packet) -> None:
        """Stage a packet for transmission.

        Args:
            packet: The packet to stage.
        """
        self.pending_packets.append(packet)
        logger.debug("%r staged %r", self, packet)

    def is_transmitting(self, packet: Packet) -> bool:
        """Check whether a packet is staged on this link.

        Args:
            packet: The packet to look for.

        Returns:
            True if the packet is pending, False otherwise.
        """
        return packet in self.pending_packets

    def has_pending(self) -> bool:
        """Check whether any packet is staged on this link."""
        return bool(self.pending_packets)

    def pending_count(self) -> int:
        """Get the number of packets staged on this link."""
        return len(self.pending_packets)

    def transmit(self, packet: Packet) -> None:
        """Deliver a staged packet to the destination node.

        Args:
            packet: The packet to deliver.

        Raises:
            PacketNotPending: If the packet is not staged on this link.
        """
        try:
            self.pending_packets.remove(packet)
        except ValueError:
            raise PacketNotPending(self, packet) from None
        self.packets_transmitted += 1
        logger.debug("%r transmitting %r", self, packet)
        self.destination.receive(packet, self)

    def transmit_next(self) -> Packet:
        """Deliver the oldest staged packet.

        Returns:
            The packet that was delivered.

        Raises:
            PacketNotPending: If nothing is staged on this link.
        """
        if not self.pending_packets:
            raise PacketNotPending(self, None)
        packet = self.pending_packets[0]
        self.transmit(packet)
        return packet

    def __repr__(self) -> str:
        """Return string representation of the link.

        Returns:
            String representation of the link.
        """
        return f"Link({self.source.address}->{self.destination.address})"
