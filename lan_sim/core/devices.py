"""Device nodes for LAN simulation.

This module defines the nodes that do something with the packets they
receive: workstations, printers and echo servers. Each overrides
Node.consume() only.
"""

import logging
from typing import Any, Hashable, List, Type, Union

from lan_sim.core.enums import NodeKind
from lan_sim.core.node import Hub, Node
from lan_sim.core.packet import Packet

logger = logging.getLogger(__name__)


class Workstation(Node):
    """Node that counts the packets addressed to it."""

    def __init__(self, address: Hashable) -> None:
        super().__init__(address)
        self.received_count = 0

    def consume(self, packet: Packet) -> None:
        """Count the packet."""
        self.received_count += 1


class Printer(Node):
    """Node that prints payloads while it has paper.

    Once paper runs out, payloads are dropped without error. The packet
    still counts as received.

    Attributes:
        paper: Sheets left.
        tray: Printed payloads, in arrival order.
        dropped_count: Payloads dropped for lack of paper.
    """

    DEFAULT_PAPER = 10

    def __init__(self, address: Hashable, paper: int = DEFAULT_PAPER) -> None:
        """Initialize a printer.

        Args:
            address: Identifier of the printer.
            paper: Number of sheets loaded.
        """
        super().__init__(address)
        if isinstance(paper, bool) or not isinstance(paper, int) or paper < 0:
            raise ValueError(f"paper must be a non-negative integer, got {paper!r}")
        self.paper = paper
        self.tray: List[Any] = []
        self.dropped_count = 0

    def consume(self, packet: Packet) -> None:
        """Print the payload, or drop it when out of paper."""
        if self.paper <= 0:
            self.dropped_count += 1
            logger.debug("%r out of paper, dropped %r", self, packet)
            return
        self.paper -= 1
        self.tray.append(packet.payload)

    def is_out_of_paper(self) -> bool:
        """Check whether the printer has no sheets left."""
        return self.paper <= 0


class EchoServer(Node):
    """Node that answers each packet with its payload uppercased."""

    def __init__(self, address: Hashable) -> None:
        super().__init__(address)
        self.echoed_count = 0

    def consume(self, packet: Packet) -> None:
        """Send the payload back to the packet's source.

        String payloads are uppercased; anything else is echoed unchanged.

        Args:
            packet: The packet to answer.
        """
        payload = packet.payload
        if isinstance(payload, str):
            payload = payload.upper()
        self.echoed_count += 1
        self.send(Packet(self.address, packet.source_address, payload))


NODE_CLASSES = {
    NodeKind.NODE: Node,
    NodeKind.HUB: Hub,
    NodeKind.WORKSTATION: Workstation,
    NodeKind.PRINTER: Printer,
    NodeKind.ECHO_SERVER: EchoServer,
}


def node_factory(kind: Union[NodeKind, str], address: Hashable, **kwargs: Any) -> Node:
    """
    Factory function to create the appropriate node.

    Args:
        kind: Kind of the node, as a NodeKind or its value ("hub", "printer", ...).
        address: Address of the new node.
        **kwargs: Additional arguments for specific node kinds.

    Returns:
        An instance of the selected node class.

    Raises:
        ValueError: If the kind is unknown.
    """
    try:
        node_kind = NodeKind(kind)
    except ValueError:
        raise ValueError(f"Unknown node kind: {kind}") from None
    node_class: Type[Node] = NODE_CLASSES[node_kind]
    return node_class(address, **kwargs)
