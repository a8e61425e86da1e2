"""Isometric Diamond-Square terrain generator."""

__version__ = "0.1.0"
