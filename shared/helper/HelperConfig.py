"""Central configuration helper for the geo search proxy."""

import logging
import os

from shared.models.config import SearchConfig


class HelperConfig:
    """Central configuration helper. Reads all settings from environment variables."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    ##########################################
    ################ READERS #################
    ##########################################

    def get_optional_string_val(self, key: str) -> str | None:
        """Read a string environment variable that may be absent.

        Args:
            key (str): Environment variable name (case-insensitive).

        Returns:
            str | None: The stripped value, or None if unset or blank.
        """
        val = os.getenv(key.upper()) or None  # empty string → None
        if val is None or not val.strip():
            return None
        return val.strip()

    def get_number_val(self, key: str, default: float | int | None = None, required: bool = True) -> float | int | None:
        """Read a numeric environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (float | int | None): Fallback value if the variable is not set.
            required (bool): Whether a missing variable without default is an error.

        Returns:
            float | int | None: The resolved numeric value. None only if not required.

        Raises:
            ValueError: If the variable is required, not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        raw = self.get_optional_string_val(key)
        if raw is None:
            if default is None and required:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid number: '{raw}'.")

    def get_list_val(self, key: str, default: list[str] | None = None, separator: str = ",") -> list[str]:
        """Read a list environment variable written as "[elem1,elem2,...]".

        Args:
            key (str): Environment variable name (case-insensitive).
            default (list[str] | None): Fallback value if the variable is not set.
            separator (str): The delimiter between elements.

        Returns:
            list[str]: The resolved elements, whitespace-only elements removed.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value is not wrapped in square brackets.
        """
        raw_val = self.get_optional_string_val(key)
        if raw_val is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        if not raw_val.startswith("[") or not raw_val.endswith("]"):
            raise ValueError(
                f"Environment variable '{key.upper()}' must be in the format "
                f"'[elem1{separator}elem2{separator}...]'. Got: '{raw_val}'"
            )
        return [v.strip() for v in raw_val[1:-1].split(separator) if v.strip()]

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_search_config(self) -> SearchConfig:
        """Assemble the settings of the search proxy from the environment.

        Missing endpoint or token is not fatal here; the proxy answers every
        request with a configuration error until both are set.

        Returns:
            SearchConfig: The configuration value injected into the proxy.
        """
        config = SearchConfig(
            endpoint=self.get_optional_string_val("SEARCH_ENDPOINT"),
            access_token=self.get_optional_string_val("SEARCH_ACCESS_TOKEN"),
            timeout=self.get_number_val("SEARCH_TIMEOUT", required=False),
            maps_api_key=self.get_optional_string_val("GOOGLE_MAPS_API_KEY"),
        )
        if not config.is_configured:
            self._logger.warning(
                "Smart Search is not configured (SEARCH_ENDPOINT set: %s, SEARCH_ACCESS_TOKEN set: %s). "
                "Search requests will fail with status 500.",
                bool(config.endpoint),
                config.access_token is not None,
            )
        return config

    def get_cors_origins(self) -> list[str]:
        return self.get_list_val("API_CORS_ORIGINS", default=["*"])
