"""Savings goal tracker backend: projection engine plus a thin Flask API."""

__version__ = "0.1.0"
