"""Configuration models."""

from tradier.models.config import TradierConfig

__all__ = ["TradierConfig"]
