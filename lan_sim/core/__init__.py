"""Core components for LAN simulation.

This module contains the fundamental classes for LAN simulation,
including Packet, Link, Node, Hub, Network and NetworkSimulator classes.
"""
