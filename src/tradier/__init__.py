"""Tradier - asynchronous client for the Tradier brokerage API."""

__version__ = "0.1.0"
