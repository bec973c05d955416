"""Traffic generation for LAN simulation.

This module provides functions for generating packet traffic,
including constant, variable and Poisson send intervals and payloads.
"""
