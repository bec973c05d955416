"""Enumerations for LAN simulation.

This module defines enumerations used throughout the LAN simulator.
"""

from enum import Enum


class NodeKind(Enum):
    """Enum for the kinds of node a network can hold.

    Attributes:
        NODE: Plain endpoint that consumes its own packets and forwards nothing.
        HUB: Forwards packets it does not own to every other neighbour.
        WORKSTATION: Counts the packets it receives.
        PRINTER: Prints payloads onto a tray while paper lasts.
        ECHO_SERVER: Answers every packet with its payload uppercased.
    """

    NODE = "node"
    HUB = "hub"
    WORKSTATION = "workstation"
    PRINTER = "printer"
    ECHO_SERVER = "echo_server"
