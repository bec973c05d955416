"""Metrics utilities for LAN simulation.

This module provides functions for summarizing and saving simulation
metrics, including deliveries per node and transmissions per link.
"""

import csv
import json
import os
from typing import Any, Dict, Hashable, List

from lan_sim.core.network import Network


def summarize_deliveries(network: Network) -> Dict[Hashable, int]:
    """Count the packets each node received.

    Args:
        network: The network to summarize.

    Returns:
        Dictionary mapping node addresses to received packet counts.
    """
    return {node.address: len(node.received_packets) for node in network.nodes}


def save_metrics_to_json(
    metrics: Dict[str, Any], filename: str = "results/metrics.json"
) -> None:
    """Save metrics to a JSON file.

    Args:
        metrics: Dictionary of metrics to save.
        filename: Output filename.
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # Addresses need not be strings
    serializable_metrics = {}
    for key, value in metrics.items():
        if isinstance(value, dict):
            serializable_metrics[key] = {str(k): v for k, v in value.items()}
        else:
            serializable_metrics[key] = value

    with open(filename, "w") as f:
        json.dump(serializable_metrics, f, indent=2)


def save_metrics_to_csv(
    metrics_list: List[Dict[str, Any]],
    scenario_names: List[str],
    filename: str = "results/metrics_comparison.csv",
) -> None:
    """Save a comparison of metrics from several runs to a CSV file.

    Args:
        metrics_list: List of metrics dictionaries from different simulations.
        scenario_names: Names corresponding to metrics_list.
        filename: Output filename.
    """
    if len(metrics_list) != len(scenario_names):
        raise ValueError("metrics_list and scenario_names differ in length")

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)

        writer.writerow(
            ["Scenario", "Packets Sent", "Packets Delivered", "Transmissions", "Settled"]
        )

        for name, metrics in zip(scenario_names, metrics_list):
            writer.writerow(
                [
                    name,
                    metrics["packets_sent"],
                    metrics["packets_delivered"],
                    metrics["transmissions"],
                    metrics["settled"],
                ]
            )
