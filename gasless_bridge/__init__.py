"""Sponsored, gasless cross-chain bridging through Relay's /execute endpoint."""

__version__ = "0.1.0"
