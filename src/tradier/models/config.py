"""Configuration models for Tradier."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EndpointName = Literal["prod", "beta", "sandbox", "stream"]


class TradierConfig(BaseSettings):
    """Client configuration.

    Loads configuration from environment variables with TRADIER_ prefix.

    Attributes:
        access_token: API access token (overrides token_file)
        endpoint: Named deployment to talk to
        token_file: File holding the access token, read when no token is set
        timeout: HTTP timeout in seconds
    """

    access_token: Optional[str] = Field(default=None, description="API access token")
    endpoint: EndpointName = Field(default="sandbox", description="API endpoint name")
    token_file: Path = Field(default=Path("token"), description="Access token file")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="TRADIER_",
        extra="ignore",
    )

    def get_access_token(self) -> Optional[str]:
        """Get the access token, falling back to the token file."""
        if self.access_token:
            return self.access_token
        if self.token_file.is_file():
            token = self.token_file.read_text(encoding="utf-8").rstrip("\n")
            return token or None
        return None
