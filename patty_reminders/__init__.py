"""Adaptive reminder scheduling for the Patty health tracker."""

__version__ = "0.9.6"
