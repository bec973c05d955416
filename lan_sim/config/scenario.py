"""YAML scenario parser.

Reads a LAN topology, the packets to send and the simulation parameters
from a YAML file. Validation is minimal and fails fast with a ValueError
naming the offending entry.

Example YAML:
    simulation:
      link_delay: 0.001
      max_transmissions: 1000
      seed: 42

    nodes:
      - address: hub
        kind: hub
      - address: mac
        kind: workstation
      - address: printer
        kind: printer
        paper: 2

    links:
      - [mac, hub]
      - [hub, printer]

    packets:
      - source: mac
        destination: printer
        payload: "Hello!"
"""

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional, Tuple

import numpy as np
import simpy
import yaml

from lan_sim.core.devices import node_factory
from lan_sim.core.enums import NodeKind
from lan_sim.core.network import Network
from lan_sim.core.packet import Packet
from lan_sim.core.simulator import NetworkSimulator


@dataclass
class SimulationConfig:
    """Simulation parameters.

    Attributes:
        link_delay: Simulated seconds between delivery steps.
        max_transmissions: Transmission cap for a run.
        until: Simulated time to stop at, or None to run until quiet.
        seed: Random seed for traffic generators.
    """
    link_delay: float = 0.001
    max_transmissions: int = NetworkSimulator.DEFAULT_MAX_TRANSMISSIONS
    until: Optional[float] = None
    seed: int = 42

    def __post_init__(self):
        if self.link_delay <= 0:
            raise ValueError(f"simulation.link_delay must be positive, got {self.link_delay}")
        if self.max_transmissions <= 0:
            raise ValueError(
                f"simulation.max_transmissions must be positive, got {self.max_transmissions}"
            )


@dataclass
class NodeConfig:
    """Configuration of one node."""
    address: Hashable
    kind: NodeKind = NodeKind.NODE
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PacketConfig:
    """A packet to send when the simulation starts."""
    source: Hashable
    destination: Hashable
    payload: Any = None


@dataclass
class Scenario:
    """
    LAN scenario configuration.

    Attributes:
        simulation: Simulation parameters.
        nodes: Node configurations.
        links: Address pairs to connect.
        packets: Packets to send at start.
    """
    simulation: SimulationConfig
    nodes: List[NodeConfig]
    links: List[Tuple[Hashable, Hashable]] = field(default_factory=list)
    packets: List[PacketConfig] = field(default_factory=list)

    def __post_init__(self):
        """Validate scenario after initialization."""
        if not self.nodes:
            raise ValueError("No nodes defined in scenario")

        addresses = [node.address for node in self.nodes]
        duplicates = sorted({str(a) for a in addresses if addresses.count(a) > 1})
        if duplicates:
            raise ValueError(f"Duplicate node addresses: {', '.join(duplicates)}")

        for a, b in self.links:
            for address in (a, b):
                if address not in addresses:
                    raise ValueError(f"Link {a}-{b}: unknown node '{address}'")

        for packet in self.packets:
            if packet.source not in addresses:
                raise ValueError(f"Packet from unknown node '{packet.source}'")

    def build_network(self) -> Network:
        """Create the nodes and connect them.

        Returns:
            The network described by the scenario.
        """
        network = Network()
        for node_config in self.nodes:
            network.add(node_factory(node_config.kind, node_config.address, **node_config.options))
        for a, b in self.links:
            network.connect(network.node_at(a), network.node_at(b))
        return network

    def build_simulator(self, env: Optional[simpy.Environment] = None) -> NetworkSimulator:
        """Create a simulator over a fresh network and send the scenario's packets.

        Args:
            env: SimPy environment, or None to create one.

        Returns:
            The simulator, ready to run.
        """
        random.seed(self.simulation.seed)
        np.random.seed(self.simulation.seed)

        simulator = NetworkSimulator(
            env or simpy.Environment(),
            self.build_network(),
            link_delay=self.simulation.link_delay,
            max_transmissions=self.simulation.max_transmissions,
        )
        for packet in self.packets:
            simulator.send(packet.source, Packet(packet.source, packet.destination, packet.payload))
        return simulator


def _parse_node(i: int, node: Any) -> NodeConfig:
    if not isinstance(node, dict):
        raise ValueError(f"Node {i} must be a dict, got {type(node)}")
    if "address" not in node:
        raise ValueError(f"Node {i}: Missing required field 'address'")

    options = {k: v for k, v in node.items() if k not in ("address", "kind")}
    kind = node.get("kind", NodeKind.NODE.value)
    try:
        node_kind = NodeKind(kind)
    except ValueError:
        raise ValueError(f"Node {i} (address={node['address']}): unknown kind '{kind}'") from None
    if options and node_kind is not NodeKind.PRINTER:
        raise ValueError(
            f"Node {i} (address={node['address']}): unexpected fields {sorted(options)}"
        )
    if node_kind is NodeKind.PRINTER and "paper" in options:
        paper = options["paper"]
        if isinstance(paper, bool) or not isinstance(paper, int) or paper < 0:
            raise ValueError(
                f"Node {i} (address={node['address']}): "
                f"paper must be a non-negative integer, got {paper!r}"
            )
    unknown = set(options) - {"paper"}
    if unknown:
        raise ValueError(
            f"Node {i} (address={node['address']}): unexpected fields {sorted(unknown)}"
        )
    return NodeConfig(address=node["address"], kind=node_kind, options=options)


def _parse_link(i: int, link: Any) -> Tuple[Hashable, Hashable]:
    if not isinstance(link, (list, tuple)) or len(link) != 2:
        raise ValueError(f"Link {i} must be a pair of addresses, got {link!r}")
    return link[0], link[1]


def _parse_packet(i: int, packet: Any) -> PacketConfig:
    if not isinstance(packet, dict):
        raise ValueError(f"Packet {i} must be a dict, got {type(packet)}")
    for key in ("source", "destination"):
        if key not in packet:
            raise ValueError(f"Packet {i}: Missing required field '{key}'")
    return PacketConfig(
        source=packet["source"],
        destination=packet["destination"],
        payload=packet.get("payload"),
    )


def parse_scenario(data: Any) -> Scenario:
    """
    Build a scenario from already loaded YAML data.

    Args:
        data: Parsed YAML document.

    Returns:
        Scenario object with parsed configuration

    Raises:
        ValueError: If required fields are missing or invalid
    """
    if not isinstance(data, dict):
        raise ValueError(f"Scenario must be a YAML dict, got {type(data)}")

    sim = data.get("simulation") or {}
    if not isinstance(sim, dict):
        raise ValueError("'simulation' section must be a dict")

    if "nodes" not in data:
        raise ValueError("Missing required section: 'nodes'")
    nodes = data["nodes"]
    if not isinstance(nodes, list):
        raise ValueError("'nodes' section must be a list")

    links = data.get("links") or []
    if not isinstance(links, list):
        raise ValueError("'links' section must be a list")

    packets = data.get("packets") or []
    if not isinstance(packets, list):
        raise ValueError("'packets' section must be a list")

    until = sim.get("until")
    simulation = SimulationConfig(
        link_delay=float(sim.get("link_delay", 0.001)),
        max_transmissions=int(
            sim.get("max_transmissions", NetworkSimulator.DEFAULT_MAX_TRANSMISSIONS)
        ),
        until=None if until is None else float(until),
        seed=int(sim.get("seed", 42)),
    )

    return Scenario(
        simulation=simulation,
        nodes=[_parse_node(i, node) for i, node in enumerate(nodes)],
        links=[_parse_link(i, link) for i, link in enumerate(links)],
        packets=[_parse_packet(i, packet) for i, packet in enumerate(packets)],
    )


def load_scenario(yaml_path: str) -> Scenario:
    """
    Load scenario from YAML file.

    Args:
        yaml_path: Path to YAML scenario file

    Returns:
        Scenario object with parsed configuration

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If required fields are missing or invalid
        yaml.YAMLError: If YAML syntax is invalid
    """
    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {yaml_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    return parse_scenario(data)
