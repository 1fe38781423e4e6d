"""Live status board for a fixed commuter rail booking and transfer chain."""

__version__ = "0.1.0"
