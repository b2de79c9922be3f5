"""Authenticated request construction.

The builder only describes a request; sending it is the transport's job,
so everything here can be checked without a network.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tradier.api.encoding import Params, encode, with_query
from tradier.api.endpoints import Endpoint, resolve, to_endpoint
from tradier.api.models import ConfigurationError

Method = Literal["GET", "POST", "PUT", "DELETE"]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestDescriptor(BaseModel):
    """A fully resolved HTTP request, ready for a transport.

    Attributes:
        method: HTTP verb.
        url: Absolute URL including any query string.
        headers: Request headers (authorization, accept, content type).
        body: Form-encoded body for POST/PUT, otherwise ``None``.
    """

    model_config = ConfigDict(frozen=True)

    method: Method
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a path with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class RequestBuilder:
    """Builds ``RequestDescriptor`` objects for one token/endpoint pair.

    The token is not checked: an empty one still produces a request and
    the API answers with its own authorization error.
    """

    def __init__(self, access_token: Optional[str], endpoint: Union[str, Endpoint]) -> None:
        self._access_token = access_token or ""
        self._endpoint = to_endpoint(endpoint)

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def base_url(self) -> str:
        return resolve(self._endpoint)

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }

    def build(
        self,
        method: str,
        path: str,
        params: Union[Params, str, None] = None,
        base_url: Optional[str] = None,
    ) -> RequestDescriptor:
        """Describe a request against ``path``.

        Args:
            method: ``GET``, ``POST``, ``PUT`` or ``DELETE`` (any case).
            path: Resource path relative to the base URL.
            params: Query parameters for GET, body data for POST/PUT.
                Ignored for DELETE.
            base_url: Per-call base URL overriding the configured endpoint.

        Raises:
            ConfigurationError: If ``method`` is not a supported verb.
        """
        verb = method.upper()
        url = join_url(base_url or self.base_url, path)
        headers = self.headers()

        if verb == "GET":
            return RequestDescriptor(method="GET", url=with_query(url, params), headers=headers)
        if verb in ("POST", "PUT"):
            headers["Content-Type"] = FORM_CONTENT_TYPE
            return RequestDescriptor(method=verb, url=url, headers=headers, body=encode(params))
        if verb == "DELETE":
            return RequestDescriptor(method="DELETE", url=url, headers=headers)
        raise ConfigurationError(f"Unsupported HTTP method '{method}'")
