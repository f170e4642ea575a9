"""
Unit tests for environment configuration, secret redaction in logs and the
public configuration endpoints.
"""

import logging

import pytest

from conftest import MAPS_API_KEY, SEARCH_ENDPOINT, SECRET_TOKEN
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import REDACTED, SecretRedactionFilter
from shared.models.config import SearchConfig

SEARCH_ENV_VARS = [
    "SEARCH_ENDPOINT",
    "SEARCH_ACCESS_TOKEN",
    "SEARCH_TIMEOUT",
    "GOOGLE_MAPS_API_KEY",
    "API_CORS_ORIGINS",
]


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove every variable the proxy reads."""
    for var in SEARCH_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def helper_config(test_logger):
    return HelperConfig(logger=test_logger)


class TestHelperConfig:
    """Test reading settings from environment variables."""

    def test_full_search_config(self, clean_environment, helper_config):
        """Test every search setting is read."""
        clean_environment.setenv("SEARCH_ENDPOINT", SEARCH_ENDPOINT)
        clean_environment.setenv("SEARCH_ACCESS_TOKEN", f"  {SECRET_TOKEN}  ")
        clean_environment.setenv("SEARCH_TIMEOUT", "12.5")
        clean_environment.setenv("GOOGLE_MAPS_API_KEY", MAPS_API_KEY)

        config = helper_config.get_search_config()

        assert config.endpoint == SEARCH_ENDPOINT
        assert config.access_token.get_secret_value() == SECRET_TOKEN
        assert config.timeout == 12.5
        assert config.maps_api_key == MAPS_API_KEY
        assert config.is_configured

    def test_missing_search_config_warns(self, clean_environment, helper_config, caplog):
        """Test missing endpoint and token are a warning, not a crash."""
        caplog.set_level(logging.WARNING)

        config = helper_config.get_search_config()

        assert not config.is_configured
        assert config.timeout is None
        assert "not configured" in caplog.text

    def test_blank_value_counts_as_missing(self, clean_environment, helper_config):
        clean_environment.setenv("SEARCH_ENDPOINT", "   ")
        assert helper_config.get_optional_string_val("search_endpoint") is None

    def test_invalid_number(self, clean_environment, helper_config):
        clean_environment.setenv("SEARCH_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="not a valid number"):
            helper_config.get_number_val("SEARCH_TIMEOUT")

    def test_integer_number(self, clean_environment, helper_config):
        clean_environment.setenv("SEARCH_TIMEOUT", "10")
        assert helper_config.get_number_val("SEARCH_TIMEOUT") == 10

    def test_cors_origins(self, clean_environment, helper_config):
        """Test the bracketed list format and its default."""
        assert helper_config.get_cors_origins() == ["*"]

        clean_environment.setenv("API_CORS_ORIGINS", "[https://maps.example.test, http://localhost:3000,]")
        assert helper_config.get_cors_origins() == ["https://maps.example.test", "http://localhost:3000"]

    def test_list_without_brackets(self, clean_environment, helper_config):
        clean_environment.setenv("API_CORS_ORIGINS", "https://maps.example.test")
        with pytest.raises(ValueError, match="must be in the format"):
            helper_config.get_cors_origins()


class TestSearchConfig:
    """Test the injected configuration value."""

    def test_token_hidden_in_repr(self):
        config = SearchConfig(endpoint=SEARCH_ENDPOINT, access_token=SECRET_TOKEN)
        assert SECRET_TOKEN not in repr(config)
        assert SECRET_TOKEN not in str(config)

    def test_secrets(self):
        assert SearchConfig(access_token=SECRET_TOKEN).get_secrets() == [SECRET_TOKEN]
        assert SearchConfig().get_secrets() == []


class TestSecretRedactionFilter:
    """Test secrets are scrubbed from log records."""

    def _record(self, msg, *args):
        return logging.LogRecord("test", logging.ERROR, __file__, 1, msg, args, None)

    def test_redacts_literal_and_args(self):
        secret_filter = SecretRedactionFilter([SECRET_TOKEN])

        literal = self._record(f"Authorization: Bearer {SECRET_TOKEN}")
        formatted = self._record("token=%s status=%d", SECRET_TOKEN, 401)

        assert secret_filter.filter(literal) is True
        assert secret_filter.filter(formatted) is True
        assert literal.getMessage() == f"Authorization: Bearer {REDACTED}"
        assert formatted.getMessage() == f"token={REDACTED} status=401"

    def test_leaves_other_records_alone(self):
        secret_filter = SecretRedactionFilter([SECRET_TOKEN, ""])
        record = self._record("status=%d", 200)

        secret_filter.filter(record)

        assert record.args == (200,)
        assert record.getMessage() == "status=200"


class TestPublicEndpoints:
    """Test the endpoints the browser may call besides the search."""

    def test_public_config(self, make_client):
        client, _ = make_client()

        response = client.get("/api/config/public")

        assert response.status_code == 200
        assert response.json() == {"googleMapsApiKey": MAPS_API_KEY}

    def test_healthz(self, make_client):
        client, _ = make_client()
        assert client.get("/healthz").json() == {"status": "ok", "configured": True}

    def test_healthz_unconfigured(self, make_client):
        client, backend = make_client(config=SearchConfig())
        assert client.get("/healthz").json() == {"status": "ok", "configured": False}
        assert backend.call_count == 0

    def test_startup_logged_in_green(self, make_client, caplog):
        """Test the ready message reaches the handlers with its console color."""
        caplog.set_level(logging.INFO)
        make_client()

        ready = [r for r in caplog.records if r.getMessage() == "Geo search proxy ready."]
        assert len(ready) == 1
        assert ready[0].color == "green"
