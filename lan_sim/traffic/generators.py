"""Traffic generators for LAN simulation.

This module provides functions for generating the send intervals and
payloads used by NetworkSimulator.packet_generator().
"""

import itertools
import random
from typing import Any, Callable

import numpy as np


def constant_traffic(rate: float) -> Callable[[], float]:
    """Generate constant rate traffic.

    Args:
        rate: Rate of packet generation in packets per second.

    Returns:
        Function that returns constant interval between packets.
    """
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")
    return lambda: 1 / rate


def variable_traffic(min_rate: float, max_rate: float) -> Callable[[], float]:
    """Generate variable rate traffic.

    Args:
        min_rate: Minimum rate of packet generation in packets per second.
        max_rate: Maximum rate of packet generation in packets per second.

    Returns:
        Function that returns variable interval between packets.
    """
    if not 0 < min_rate <= max_rate:
        raise ValueError(f"Invalid rate range: {min_rate}..{max_rate}")
    return lambda: 1 / random.uniform(min_rate, max_rate)


def poisson_traffic(rate: float) -> Callable[[], float]:
    """Generate Poisson traffic.

    Args:
        rate: Average rate of packet generation in packets per second.

    Returns:
        Function that returns exponentially distributed interval between packets.
    """
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")
    return lambda: float(np.random.exponential(1 / rate))


def constant_payload(value: Any) -> Callable[[], Any]:
    """Generate the same payload for every packet.

    Args:
        value: The payload.

    Returns:
        Function that returns the payload.
    """
    return lambda: value


def counter_payload(prefix: str = "packet") -> Callable[[], str]:
    """Generate numbered payloads such as "packet 1", "packet 2", ...

    Args:
        prefix: Text before the number.

    Returns:
        Function that returns the next numbered payload.
    """
    counter = itertools.count(1)
    return lambda: f"{prefix} {next(counter)}"
