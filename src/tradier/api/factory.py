"""Client factory.

Creates a ``TradierClient`` from application configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from tradier.api.client import TradierClient
from tradier.api.transport import HttpxTransport

if TYPE_CHECKING:
    from tradier.models.config import TradierConfig

logger = logging.getLogger(__name__)


def create_client(config: Optional[TradierConfig] = None) -> TradierClient:
    """Create a TradierClient from config.

    Uses the settings singleton when no config is given. A missing token
    is only logged; requests are still sent and the API rejects them.
    """
    if config is None:
        from tradier.core.config import get_settings

        config = get_settings()

    token = config.get_access_token()
    if not token:
        logger.warning("No Tradier access token set, requests will be unauthorized")
    transport = HttpxTransport(timeout=config.timeout)
    return TradierClient(token, config.endpoint, transport=transport)
