"""Pydantic models for search requests, responses and geo query variables."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator


class SearchRequest(BaseModel):
    """GraphQL query and variables sent by the frontend to the proxy."""

    query: StrictStr = Field(min_length=1)
    variables: dict[str, Any] = Field(default_factory=dict)

    @field_validator("variables", mode="before")
    @classmethod
    def _default_variables(cls, value: Any) -> Any:
        # null must reach the remote service as {}
        return {} if value is None else value


class SearchResponse(BaseModel):
    """GraphQL envelope returned by the remote search service.

    Only ``data`` and ``errors`` are known; everything else (e.g. ``extensions``)
    is kept as-is so the body can be relayed unchanged.
    """

    model_config = ConfigDict(extra="allow")

    data: Any = None
    errors: Any = None

    @property
    def has_errors(self) -> bool:
        # present and non-null, even if empty
        return self.errors is not None


class SemanticOptions(BaseModel):
    """Semantic weighting applied by the remote service.

    Attributes:
        bias:   Blend factor between lexical and semantic relevance, conventionally 0..10.
        fields: Document fields the semantic scoring is applied to.
    """

    model_config = ConfigDict(frozen=True)

    bias: int = 0
    fields: tuple[str, ...] = ()

    @classmethod
    def neutral(cls) -> "SemanticOptions":
        return cls()

    @property
    def is_active(self) -> bool:
        return self.bias > 0 and len(self.fields) > 0


class GeoQueryVariables(BaseModel):
    """Fields shared by the circle and bounding-box searches."""

    model_config = ConfigDict(populate_by_name=True)

    query: StrictStr = Field(min_length=1)
    limit: int = 20
    search_after: list[str] | None = Field(default=None, alias="searchAfter")
    filter: str | None = None
    include_fields: list[str] | None = Field(default=None, alias="includeFields")
    semantic: SemanticOptions | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_semantic_keys(cls, data: Any) -> Any:
        """Accept the flat ``semanticBias`` / ``semanticFields`` keys of the GraphQL variables."""
        if not isinstance(data, dict):
            return data
        bias = data.get("semanticBias", data.get("semantic_bias"))
        fields = data.get("semanticFields", data.get("semantic_fields"))
        if bias is None and fields is None:
            return data
        if data.get("semantic") is not None:
            raise ValueError("Pass either 'semantic' or 'semanticBias'/'semanticFields', not both.")
        data = {
            key: val
            for key, val in data.items()
            if key not in ("semanticBias", "semantic_bias", "semanticFields", "semantic_fields")
        }
        data["semantic"] = {"bias": bias or 0, "fields": fields or ()}
        return data


class CircleQueryVariables(GeoQueryVariables):
    """Variables of a search restricted to a radius around a centre point.

    ``max_distance`` is the remote ``Distance`` scalar, a number with a unit
    suffix such as "5mi" or "2km".
    """

    center_lat: float = Field(alias="centerLat")
    center_lon: float = Field(alias="centerLon")
    max_distance: StrictStr = Field(alias="maxDistance", min_length=1)


class BoundingBoxQueryVariables(GeoQueryVariables):
    """Variables of a search restricted to a rectangle given by its southwest and northeast corners."""

    sw_lat: float = Field(alias="swLat")
    sw_lon: float = Field(alias="swLon")
    ne_lat: float = Field(alias="neLat")
    ne_lon: float = Field(alias="neLon")


class QueryDocument(BaseModel):
    """A ready-to-send GraphQL document together with its variables."""

    operation_name: str
    query: str
    variables: dict[str, Any]

    def to_request(self) -> SearchRequest:
        """Return the proxy request body for this document."""
        return SearchRequest(query=self.query, variables=self.variables)


class Point(BaseModel):
    lat: float
    lon: float
