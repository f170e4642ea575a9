from pydantic import BaseModel, SecretStr


class SearchConfig(BaseModel):
    """
    Server-side settings injected into the search proxy at construction time.

    Attributes:
        endpoint (str | None): URL of the remote GraphQL search endpoint.
        access_token (SecretStr | None): Bearer credential for the remote endpoint. Never sent to the browser.
        timeout (float | None): Outbound request timeout in seconds. None keeps the httpx default.
        maps_api_key (str | None): Client-visible map provider key, served to the frontend as-is.
    """

    endpoint: str | None = None
    access_token: SecretStr | None = None
    timeout: float | None = None
    maps_api_key: str | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint) and bool(self.access_token and self.access_token.get_secret_value())

    def get_secrets(self) -> list[str]:
        """
        Returns all values that must never appear in logs or responses.
        """
        if self.access_token and self.access_token.get_secret_value():
            return [self.access_token.get_secret_value()]
        return []
