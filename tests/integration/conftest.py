"""Fixtures for integration tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture
def sandbox_token() -> str:
    """Get the Tradier sandbox access token from environment.

    Skips test if the token is not available.
    """
    token = os.environ.get("TRADIER_SANDBOX_TOKEN")
    if not token:
        pytest.skip("TRADIER_SANDBOX_TOKEN required for integration tests")
    return token
