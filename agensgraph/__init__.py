"""Readers for AgensGraph graph ids, vertices, edges, paths and arrays."""

__version__ = "0.1.0"