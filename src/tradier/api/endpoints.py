"""Endpoint registry: named API deployments and their base URLs."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from tradier.api.models import ConfigurationError


class Endpoint(str, Enum):
    """Named Tradier deployments."""

    PROD = "prod"
    BETA = "beta"
    SANDBOX = "sandbox"
    STREAM = "stream"


ENDPOINT_URLS: Mapping[Endpoint, str] = MappingProxyType(
    {
        Endpoint.PROD: "https://api.tradier.com/v1/",
        Endpoint.BETA: "https://api.tradier.com/beta/",
        Endpoint.SANDBOX: "https://sandbox.tradier.com/v1/",
        Endpoint.STREAM: "https://stream.tradier.com/v1",
    }
)


def to_endpoint(name: Union[str, Endpoint]) -> Endpoint:
    """Coerce an endpoint name to an ``Endpoint`` member.

    Raises:
        ConfigurationError: If ``name`` is not a recognized endpoint.
    """
    try:
        return Endpoint(name)
    except ValueError:
        valid = ", ".join(e.value for e in Endpoint)
        raise ConfigurationError(
            f"Unknown endpoint '{name}' (expected one of: {valid})"
        ) from None


def resolve(name: Union[str, Endpoint]) -> str:
    """Return the base URL for an endpoint name."""
    return ENDPOINT_URLS[to_endpoint(name)]
