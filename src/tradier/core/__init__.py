"""Core utilities and configuration loading."""

from tradier.core.config import get_settings, load_app_config

__all__ = ["get_settings", "load_app_config"]
