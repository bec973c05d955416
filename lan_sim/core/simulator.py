"""Network simulator class for LAN simulation.

This module defines the NetworkSimulator class, which drives packet
delivery over a Network. Nodes and links only stage packets; the
simulator decides when staged packets are transmitted.
"""

import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

import simpy

from lan_sim.core.link import Link
from lan_sim.core.network import Network
from lan_sim.core.packet import Packet

logger = logging.getLogger(__name__)


class NetworkSimulator:
    """Network simulation environment.

    Every link_delay seconds of simulated time, the head packet of every
    link with pending packets is transmitted. Flooding in a cyclic
    topology never settles, so the total number of transmissions is
    capped.

    Attributes:
        env: SimPy environment.
        network: The network whose links are drained.
        link_delay: Simulated seconds between delivery steps.
        max_transmissions: Transmission cap for a simulation.
        generators: (source, destination) address pairs of packet generators.
        packets_sent: Number of packets injected through the simulator.
        transmissions: Number of packets transmitted so far.
        settled: False once the transmission cap was hit.
        metrics: Performance metrics for the simulation.
    """

    DEFAULT_MAX_TRANSMISSIONS = 10_000

    def __init__(
        self,
        env: simpy.Environment,
        network: Network,
        link_delay: float = 0.001,
        max_transmissions: int = DEFAULT_MAX_TRANSMISSIONS,
    ):
        """Initialize the network simulator.

        Args:
            env: SimPy environment.
            network: The network to simulate.
            link_delay: Simulated seconds between delivery steps.
            max_transmissions: Transmission cap, to stop unbounded floods.
        """
        if link_delay <= 0:
            raise ValueError(f"link_delay must be positive, got {link_delay}")
        if max_transmissions <= 0:
            raise ValueError(f"max_transmissions must be positive, got {max_transmissions}")
        self.env = env
        self.network = network
        self.link_delay = link_delay
        self.max_transmissions = max_transmissions
        self.generators: List[Tuple[Hashable, Hashable]] = []
        self.packets_sent = 0
        self.transmissions = 0
        self.settled = True
        self.metrics: Dict[str, Any] = {}
        self._active_generators = 0
        self._unbounded_generators = 0

        self.hooks: Dict[str, List[Callable[..., Any]]] = {
            "packet_transmitted": [],  # a link delivered a packet
            "flood_unsettled": [],  # the transmission cap was hit
            "sim_end": [],  # the simulation ends
        }

    def send(self, source_address: Hashable, packet: Packet) -> None:
        """Let a node send a packet with automatic routing.

        Args:
            source_address: Address of the sending node.
            packet: The packet to send.

        Raises:
            NotFound: If no node has the source address.
        """
        node = self.network.node_at(source_address)
        node.send(packet)
        self.packets_sent += 1

    def step(self) -> int:
        """Transmit the head packet of every link that has pending packets.

        Links are taken as they stand when the step starts; packets staged
        by this step's deliveries wait for the next step.

        Returns:
            Number of packets transmitted.
        """
        heads: List[Tuple[Link, Packet]] = [
            (link, link.pending_packets[0]) for link in self.network.pending_links()
        ]
        count = 0
        for link, packet in heads:
            if self.transmissions >= self.max_transmissions:
                self._unsettle()
                break
            link.transmit(packet)
            self.transmissions += 1
            count += 1
            self.call_hooks("packet_transmitted", link, packet, self.env.now)
        return count

    def _unsettle(self) -> None:
        if not self.settled:
            return
        self.settled = False
        logger.warning(
            "Flood did not settle after %d transmissions; stopping delivery",
            self.transmissions,
        )
        self.call_hooks("flood_unsettled", self.transmissions, self.env.now)

    def packet_generator(
        self,
        source: Hashable,
        destination: Hashable,
        payload: Callable[[], Any],
        interval: Callable[[], float],
        count: Optional[int] = None,
    ) -> simpy.events.Process:
        """Generate packets according to specified pattern.

        Args:
            source: Source node address.
            destination: Destination node address.
            payload: Function returning the payload of the next packet.
            interval: Function returning the time until the next packet.
            count: Number of packets to generate, or None for no limit.

        Returns:
            SimPy process for the packet generator.
        """
        self.network.node_at(source)
        self.generators.append((source, destination))
        self._active_generators += 1
        if count is None:
            self._unbounded_generators += 1

        def generator_process():
            sent = 0
            try:
                while count is None or sent < count:
                    self.send(source, Packet(source, destination, payload()))
                    sent += 1
                    yield self.env.timeout(interval())
            finally:
                self._active_generators -= 1

        return self.env.process(generator_process())

    def _delivery_process(self):
        while True:
            yield self.env.timeout(self.link_delay)
            if self.network.is_quiescent():
                if self._active_generators == 0:
                    return
                continue
            self.step()
            if not self.settled:
                return

    def calculate_metrics(self) -> Dict[str, Any]:
        """Calculate delivery metrics.

        transmissions counts the packets delivered by step(). When every
        delivery went through step(), it equals the sum of
        link_transmissions (network links, keyed "a->b") and
        loopback_transmissions (keyed by node address). packets_sent only
        counts packets injected through send() and generators, while
        packets_delivered counts every packet any node received, including
        replies sent by nodes such as EchoServer.

        Returns:
            Dictionary of calculated metrics.
        """
        deliveries_by_node = {
            node.address: len(node.received_packets) for node in self.network.nodes
        }
        link_transmissions = {
            f"{link.source.address}->{link.destination.address}": link.packets_transmitted
            for link in self.network.links
        }
        loopback_transmissions = {
            node.address: node.loopback.packets_transmitted for node in self.network.nodes
        }
        pending = sum(link.pending_count() for link in self.network.pending_links())

        self.metrics["duration"] = self.env.now
        self.metrics["transmissions"] = self.transmissions
        self.metrics["packets_sent"] = self.packets_sent
        self.metrics["packets_delivered"] = sum(deliveries_by_node.values())
        self.metrics["deliveries_by_node"] = deliveries_by_node
        self.metrics["link_transmissions"] = link_transmissions
        self.metrics["loopback_transmissions"] = loopback_transmissions
        self.metrics["pending_packets"] = pending
        self.metrics["settled"] = self.settled

        return self.metrics

    def register_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        """Register a callback function for a specific event type.

        Args:
            event_type: The type of event to register for.
            callback: The function to call when the event occurs.
        """
        if event_type not in self.hooks:
            raise ValueError(f"Unknown hook type: {event_type}")
        self.hooks[event_type].append(callback)

    def call_hooks(self, event_type: str, *args: Any, **kwargs: Any) -> None:
        """Call all registered callbacks for the given event type.

        Args:
            event_type: The type of event that occurred.
            *args, **kwargs: Arguments to pass to the callback functions.
        """
        if event_type in self.hooks:
            for callback in self.hooks[event_type]:
                callback(*args, **kwargs)

    def run(self, until: Optional[float] = None) -> Dict[str, Any]:
        """Run the simulation.

        Args:
            until: Simulated time to stop at. When None, runs until no
                packet is pending and every generator has finished.

        Returns:
            Dictionary of calculated metrics.

        Raises:
            ValueError: If until is None while a generator has no packet limit.
        """
        if until is None and self._unbounded_generators:
            raise ValueError("An unbounded packet generator needs a finite 'until'")

        logger.info("Starting simulation of %r", self.network)
        delivery = self.env.process(self._delivery_process())
        self.env.run(until=delivery if until is None else until)

        self.calculate_metrics()
        logger.info(
            "Simulation ended at t=%.4f after %d transmissions",
            self.env.now,
            self.transmissions,
        )

        self.call_hooks("sim_end", self.metrics)

        return self.metrics
