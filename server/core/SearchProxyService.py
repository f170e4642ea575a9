"""Search proxy service — relays GraphQL search requests to Smart Search.

The browser never sees the access token: it posts ``{query, variables}`` here,
the service adds the bearer credential and forwards a single request to the
configured endpoint. No retries, no caching.
"""

from logging import Logger
from typing import Any

import httpx
from pydantic import ValidationError

from server.core.errors import (
    ConfigurationError,
    InvalidSearchRequestError,
    TransportError,
    UpstreamApplicationError,
)
from shared.clients.search.SearchClientGraphQL import SearchClientGraphQL
from shared.logging.logging_setup import REDACTED
from shared.models.config import SearchConfig
from shared.models.search import SearchRequest, SearchResponse


class SearchProxyService:
    """Validates, forwards and normalises a single search request."""

    def __init__(
        self,
        search_config: SearchConfig,
        search_client: SearchClientGraphQL,
        logger: Logger,
    ) -> None:
        self.logging = logger
        self._config = search_config
        self._client = search_client
        self._secrets = search_config.get_secrets()

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_search(self, raw_body: bytes | str) -> dict:
        """Relay a raw GraphQL request body to the remote search service.

        Args:
            raw_body (bytes | str): The request body as received from the caller.

        Returns:
            dict: The remote response body, unchanged.

        Raises:
            ConfigurationError: If endpoint or access token is missing (checked before the body),
                or the endpoint is not a usable URL.
            InvalidSearchRequestError: If the body carries no usable query.
            UpstreamApplicationError: If the remote body has a top-level ``errors`` field.
            TransportError: On network failure or a response without a GraphQL envelope.
        """
        self._check_configuration()
        request = self._parse_request(raw_body)

        self.logging.info(
            "Search request received — query=%r variables=%d",
            request.query[:80],
            len(request.variables),
        )

        try:
            response = await self._client.do_graphql(request.query, request.variables)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            self.logging.error(
                "Search request rejected: SEARCH_ENDPOINT is not a valid URL (%s).",
                self._redact(str(e) or e.__class__.__name__),
            )
            raise ConfigurationError()
        except httpx.RequestError as e:
            raise self._transport_failure(
                status=None,
                status_text=None,
                message=str(e) or e.__class__.__name__,
                data=None,
            )

        payload = self._parse_response_body(response)

        if isinstance(payload, dict) and SearchResponse.model_validate(payload).has_errors:
            self.logging.warning(
                "Smart Search returned GraphQL errors (status %d): %s",
                response.status_code,
                self._redact(payload.get("errors")),
            )
            raise UpstreamApplicationError(self._redact(payload))

        if response.is_success and isinstance(payload, dict):
            return self._redact(payload)

        raise self._transport_failure(
            status=response.status_code if response.is_error else None,
            status_text=response.reason_phrase,
            message=(
                f"HTTP {response.status_code}"
                if not response.is_success
                else "response is not a GraphQL JSON object"
            ),
            data=payload,
        )

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _check_configuration(self) -> None:
        if not self._config.is_configured:
            self.logging.error("Search request rejected: SEARCH_ENDPOINT or SEARCH_ACCESS_TOKEN is not set.")
            raise ConfigurationError()

    def _parse_request(self, raw_body: bytes | str) -> SearchRequest:
        try:
            return SearchRequest.model_validate_json(raw_body or b"null")
        except ValidationError as e:
            self.logging.info("Search request rejected: %d validation error(s).", e.error_count())
            raise InvalidSearchRequestError()

    def _parse_response_body(self, response: httpx.Response) -> Any:
        """Return the JSON body, the raw text if it is not JSON, or None if empty."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _transport_failure(
        self,
        status: int | None,
        status_text: str | None,
        message: str,
        data: Any,
    ) -> TransportError:
        """Log a failed relay and build the error returned to the caller.

        The upstream message is only logged; the caller gets the generic message.
        """
        data = self._redact(data)
        self.logging.error(
            "Smart Search API error — status=%s statusText=%s message=%s data=%s",
            status,
            status_text,
            self._redact(message),
            data,
        )
        return TransportError(status_code=status or 502, data=data)

    def _redact(self, value: Any) -> Any:
        """Replace the access token wherever it occurs in a JSON-like value."""
        if not self._secrets:
            return value
        if isinstance(value, str):
            for secret in self._secrets:
                value = value.replace(secret, REDACTED)
            return value
        if isinstance(value, dict):
            return {self._redact(k): self._redact(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._redact(v) for v in value]
        return value
