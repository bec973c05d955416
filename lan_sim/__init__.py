"""Teaching LAN simulator.

Nodes, directed links and immutable packets, with flood routing, a loopback
shortcut for self-addressed packets and hubs that never echo a packet back
to its sender.
"""

from lan_sim.core.errors import NotFound, PacketNotPending
from lan_sim.core.packet import Packet
from lan_sim.core.link import Link
from lan_sim.core.node import Node, Hub
from lan_sim.core.devices import Workstation, Printer, EchoServer, node_factory
from lan_sim.core.network import Network

__all__ = [
    "NotFound",
    "PacketNotPending",
    "Packet",
    "Link",
    "Node",
    "Hub",
    "Workstation",
    "Printer",
    "EchoServer",
    "node_factory",
    "Network",
]
