"""Scenario configuration for LAN simulation."""

from lan_sim.config.scenario import (
    NodeConfig,
    PacketConfig,
    Scenario,
    SimulationConfig,
    load_scenario,
    parse_scenario,
)

__all__ = [
    "NodeConfig",
    "PacketConfig",
    "Scenario",
    "SimulationConfig",
    "load_scenario",
    "parse_scenario",
]
