#!/usr/bin/env python3
"""Example LAN simulation using the lan_sim package.

This script demonstrates how to build small LANs, send packets through
them and drive their delivery with the NetworkSimulator.
"""

import argparse
import logging
import os
from pprint import pprint
from typing import Any, Dict

import simpy

from lan_sim.config.scenario import load_scenario
from lan_sim.core.devices import EchoServer, Printer, Workstation
from lan_sim.core.node import Hub, Node
from lan_sim.core.packet import Packet
from lan_sim.core.simulator import NetworkSimulator
from lan_sim.core.topologies import ring_network, star_network
from lan_sim.traffic.generators import constant_traffic, counter_payload
from lan_sim.utils.metrics import save_metrics_to_csv, save_metrics_to_json
from lan_sim.utils.visualization import (
    plot_link_transmissions,
    save_network_visualization,
)


def hub_demo() -> NetworkSimulator:
    """Send one packet from mac to pc1 through a hub."""
    mac, pc1 = Node("mac"), Node("pc1")
    network = star_network("hub", [mac, pc1])

    simulator = NetworkSimulator(simpy.Environment(), network)
    simulator.send("mac", Packet("mac", "pc1", "Hello!"))
    return simulator


def office_demo() -> NetworkSimulator:
    """Workstations, a printer and an echo server around one hub."""
    mac = Workstation("mac")
    pc1 = Workstation("pc1")
    printer = Printer("printer", paper=3)
    echo = EchoServer("echo")
    network = star_network("hub", [mac, pc1, printer, echo])

    simulator = NetworkSimulator(simpy.Environment(), network)
    simulator.packet_generator(
        source="pc1",
        destination="printer",
        payload=counter_payload("page"),
        interval=constant_traffic(100),
        count=5,
    )
    simulator.send("mac", Packet("mac", "echo", "ping"))
    simulator.send("mac", Packet("mac", "mac", "note to self"))
    return simulator


def ring_demo() -> NetworkSimulator:
    """A ring of hubs, where a flooded packet never settles."""
    hubs = [Hub(f"hub{i}") for i in range(1, 4)]
    pc = Node("pc")
    network = ring_network(hubs)
    network.connect(pc, hubs[0])

    simulator = NetworkSimulator(simpy.Environment(), network, max_transmissions=200)
    simulator.send("pc", Packet("pc", "nowhere", "lost"))
    return simulator


DEMOS = {
    "hub": hub_demo,
    "office": office_demo,
    "ring": ring_demo,
}


def print_metrics(name: str, metrics: Dict[str, Any]) -> None:
    print(f"Results of '{name}':")
    print(f"  Packets sent:      {metrics['packets_sent']}")
    print(f"  Packets delivered: {metrics['packets_delivered']}")
    print(f"  Transmissions:     {metrics['transmissions']}")
    print(f"  Settled:           {metrics['settled']}")
    print("  Deliveries by node:")
    pprint(metrics["deliveries_by_node"])


def main() -> None:
    """Run the selected demos or scenario and report their metrics."""
    parser = argparse.ArgumentParser(description="LAN Simulation Environment")
    parser.add_argument(
        "--demo",
        choices=sorted(DEMOS),
        action="append",
        help="Demo to run (may be repeated)",
    )
    parser.add_argument("--scenario", help="YAML scenario file to run")
    parser.add_argument(
        "--output-dir", default=None, help="Directory to save metrics and plots"
    )
    parser.add_argument("--plot", action="store_true", help="Draw topology and link traffic")
    parser.add_argument("--verbose", action="store_true", help="Log simulation events")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    runs = []
    for name in args.demo or []:
        runs.append((name, DEMOS[name](), None))
    if args.scenario:
        scenario = load_scenario(args.scenario)
        runs.append(
            (
                os.path.splitext(os.path.basename(args.scenario))[0],
                scenario.build_simulator(),
                scenario.simulation.until,
            )
        )

    if not runs:
        parser.print_help()
        return

    names = []
    metrics_list = []
    for name, simulator, until in runs:
        print(f"Running '{name}'...")
        metrics = simulator.run(until=until)
        print_metrics(name, metrics)
        names.append(name)
        metrics_list.append(metrics)

        if args.output_dir:
            save_metrics_to_json(metrics, os.path.join(args.output_dir, f"{name}_metrics.json"))
        if args.plot:
            output = args.output_dir
            save_network_visualization(
                simulator.network,
                os.path.join(output, f"{name}_topology.png") if output else None,
            )
            plot_link_transmissions(
                metrics,
                os.path.join(output, f"{name}_links.png") if output else None,
            )

    if args.output_dir:
        save_metrics_to_csv(
            metrics_list, names, os.path.join(args.output_dir, "metrics_comparison.csv")
        )
        print(f"\nSimulation complete. Results saved to '{args.output_dir}' directory.")


if __name__ == "__main__":
    main()
