"""Packet class for LAN simulation.

This module defines the Packet class, which represents a message
travelling through the simulated LAN.
"""

from dataclasses import dataclass
from typing import Any, Hashable, TYPE_CHECKING

if TYPE_CHECKING:
    from lan_sim.core.node import Node


@dataclass(frozen=True)
class Packet:
    """Represents an immutable network packet.

    Nodes know their peers only by address, so a packet carries addresses
    and never references to nodes.

    Attributes:
        source_address: Address of the node that created the packet.
        destination_address: Address of the node the packet is meant for.
        payload: Opaque content carried by the packet.
    """

    source_address: Hashable
    destination_address: Hashable
    payload: Any = None

    def is_addressed_to(self, node: "Node") -> bool:
        """Check whether the packet is meant for a node.

        Only intended for tests and debugging.

        Args:
            node: The node to check against.

        Returns:
            True if the destination address is the node's address.
        """
        return self.destination_address == node.address

    def is_originating_from(self, node: "Node") -> bool:
        """Check whether a node created the packet.

        Only intended for tests and debugging.

        Args:
            node: The node to check against.

        Returns:
            True if the source address is the node's address.
        """
        return self.source_address == node.address

    def __repr__(self) -> str:
        return f"Packet({self.source_address}->{self.destination_address}, {self.payload!r})"
