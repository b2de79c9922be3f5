"""Configuration loading utilities."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

# tomllib is available in Python 3.11+, use tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from tradier.models.config import TradierConfig


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If file doesn't exist
        tomllib.TOMLDecodeError: If file is invalid TOML
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_app_config(path: Optional[Path] = None, **overrides: Any) -> TradierConfig:
    """Load client configuration.

    Values come from, in increasing priority: TRADIER_* environment
    variables, the ``[tradier]`` table of the TOML file at ``path``, and
    keyword overrides whose value is not ``None``.

    Example TOML format:
        [tradier]
        endpoint = "prod"
        token_file = "~/.tradier/token"
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(load_toml(path).get("tradier", {}))
    values.update({k: v for k, v in overrides.items() if v is not None})
    if "token_file" in values:
        values["token_file"] = Path(values["token_file"]).expanduser()
    return TradierConfig(**values)


# Singleton settings instance
_settings: TradierConfig | None = None


def get_settings() -> TradierConfig:
    """Get or create the settings singleton.

    This ensures we only load settings once and reuse them.
    """
    global _settings
    if _settings is None:
        from dotenv import load_dotenv
        load_dotenv()  # Ensure .env is loaded
        _settings = TradierConfig()
    return _settings
