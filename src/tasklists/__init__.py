"""Collaborative task lists: authorization-aware data access and aggregation."""

__version__ = "0.3.0"
