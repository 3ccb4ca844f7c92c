"""Graphite CI Optimizer GitHub Action."""

__version__ = "1.0.0"
