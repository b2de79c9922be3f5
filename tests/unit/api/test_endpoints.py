"""Tests for the endpoint registry."""

import pytest

from tradier.api.endpoints import ENDPOINT_URLS, Endpoint, resolve, to_endpoint
from tradier.api.models import ConfigurationError


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.parametrize("name", ["prod", "beta", "sandbox", "stream"])
    def test_known_names_resolve_to_non_empty_url(self, name: str) -> None:
        """Each recognized endpoint resolves to an https URL."""
        url = resolve(name)
        assert url
        assert url.startswith("https://")

    def test_urls_are_distinct(self) -> None:
        """No two endpoints share a base URL."""
        urls = [resolve(name) for name in ("prod", "beta", "sandbox", "stream")]
        assert len(set(urls)) == 4

    def test_known_urls(self) -> None:
        """Base URLs match the published API roots."""
        assert resolve("prod") == "https://api.tradier.com/v1/"
        assert resolve("beta") == "https://api.tradier.com/beta/"
        assert resolve("sandbox") == "https://sandbox.tradier.com/v1/"
        assert resolve("stream") == "https://stream.tradier.com/v1"

    def test_accepts_enum_member(self) -> None:
        """Endpoint members resolve the same as their names."""
        assert resolve(Endpoint.SANDBOX) == resolve("sandbox")

    @pytest.mark.parametrize("name", ["production", "PROD", "", "live"])
    def test_unknown_name_raises(self, name: str) -> None:
        """Anything outside the four names is a configuration error."""
        with pytest.raises(ConfigurationError, match="Unknown endpoint"):
            resolve(name)


class TestEndpointTable:
    """Tests for the ENDPOINT_URLS table."""

    def test_covers_every_endpoint(self) -> None:
        """Every Endpoint member has a URL."""
        assert set(ENDPOINT_URLS) == set(Endpoint)

    def test_is_read_only(self) -> None:
        """The table cannot be modified at runtime."""
        with pytest.raises(TypeError):
            ENDPOINT_URLS[Endpoint.PROD] = "https://example.com/"  # type: ignore[index]

    def test_to_endpoint_returns_member(self) -> None:
        """String names are coerced to Endpoint members."""
        assert to_endpoint("stream") is Endpoint.STREAM
