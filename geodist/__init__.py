"""Approximate and precise distances between geographic points, line strings and polygons."""

__version__ = "0.1.0"
