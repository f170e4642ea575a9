from logging import Logger

import httpx

from shared.clients.ClientInterface import ClientInterface
from shared.models.config import SearchConfig


class SearchClientGraphQL(ClientInterface):
    """Outbound client for the remote Smart Search GraphQL endpoint."""

    def __init__(self, search_config: SearchConfig, logger: Logger):
        super().__init__(logger=logger, timeout=search_config.timeout)
        self._endpoint = search_config.endpoint or ""
        self._access_token = search_config.access_token

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "SmartSearch"

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._access_token is None:
            return {}
        return {"Authorization": f"Bearer {self._access_token.get_secret_value()}"}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._endpoint

    ################ PAYLOAD BUILDER ##################
    def get_graphql_payload(self, query: str, variables: dict | None) -> dict:
        """Build the GraphQL request body.

        Args:
            query (str): The GraphQL document.
            variables (dict | None): The operation variables.

        Returns:
            dict: {"query": "...", "variables": {...}}, variables never null.
        """
        return {"query": query, "variables": variables if variables is not None else {}}

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_graphql(self, query: str, variables: dict | None = None) -> httpx.Response:
        """POST a GraphQL operation to the remote endpoint.

        Args:
            query (str): The GraphQL document.
            variables (dict | None): The operation variables.

        Returns:
            httpx.Response: The raw response, whatever its status.

        Raises:
            httpx.RequestError: On network failure or timeout.
        """
        self.logging.debug("Sending GraphQL request to %s (%d variable(s)).", self.get_engine_name(), len(variables or {}))
        return await self.do_request(
            method="POST",
            json=self.get_graphql_payload(query, variables),
            additional_headers={"Content-Type": "application/json"},
        )
