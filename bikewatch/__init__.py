"""Bike-share station traffic map."""

__version__ = "0.1.0"
