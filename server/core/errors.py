"""Errors raised while relaying a search request.

Each error knows the HTTP status it is answered with and the JSON body the
caller receives. All of them are terminal for the request; nothing is retried.
"""

from typing import Any


class SearchProxyError(Exception):
    """Base class for every failure of the search proxy."""

    status_code: int = 500
    message: str = "search request failed"

    def __init__(self, message: str | None = None, status_code: int | None = None, data: Any = None) -> None:
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.data = data

    def to_content(self) -> Any:
        """Return the JSON body sent to the caller."""
        return {"statusCode": self.status_code, "statusMessage": self.message, "data": self.data}


class ConfigurationError(SearchProxyError):
    """Search endpoint or access token is not configured on the server."""

    status_code = 500
    message = "search not configured"


class InvalidSearchRequestError(SearchProxyError):
    """The request body does not carry a usable GraphQL query."""

    status_code = 400
    message = "missing GraphQL query"


class UpstreamApplicationError(SearchProxyError):
    """The remote service answered with a GraphQL ``errors`` envelope.

    The envelope, including any partial ``data``, is relayed verbatim.
    """

    status_code = 502
    message = "search returned errors"

    def __init__(self, body: dict) -> None:
        super().__init__(data=body)

    def to_content(self) -> Any:
        return self.data


class TransportError(SearchProxyError):
    """Network failure, timeout, non-JSON body or error status without a GraphQL envelope."""

    status_code = 502
    message = "search request failed"
