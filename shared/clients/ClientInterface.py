from abc import ABC, abstractmethod
from logging import Logger

import httpx
from httpx._types import QueryParamTypes


class ClientInterface(ABC):
    def __init__(self, logger: Logger, timeout: float | None = None):
        self.logging = logger
        # None keeps the httpx default timeout
        self.timeout = timeout

        self._client: httpx.AsyncClient | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "smartsearch"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "SmartSearch"
        """
        pass

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the client backend server.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the client backend server.

        Returns:
            str: The base URL of the client backend server (e.g. "https://search.example.com/graphql")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional transport replacing the network, e.g. ``httpx.MockTransport``.
        """
        kwargs: dict = {"transport": transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        json: dict | None = None,
        params: QueryParamTypes | None = None,
        endpoint: str = "",
        additional_headers: dict | None = None,
    ) -> httpx.Response:
        """Send an HTTP request to the client backend.

        Args:
            method: HTTP method (GET, POST, …).
            json: JSON-serialisable body.
            params: URL query parameters.
            endpoint: Path to append to the base URL (leading slash optional).
            additional_headers: Extra headers that override the defaults.

        Returns:
            The raw httpx.Response, whatever its status.

        Raises:
            Exception: If the client is not initialised.
            httpx.RequestError: If the request could not be sent or no response arrived.
        """
        if self._client is None:
            raise Exception("HTTP client not initialised. Call boot() before making requests.")

        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        headers: dict = {}
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)

        kwargs: dict = {
            "url": f"{self._get_base_url().rstrip('/')}{endpoint}",
            "headers": headers,
            "params": params,
        }
        if json is not None:
            kwargs["json"] = json

        return await self._client.request(method, **kwargs)
