"""GraphQL documents for the Smart Search ``find`` query.

Two shapes are built: a circle search (centre + max distance) and a
bounding-box search (southwest + northeast corners). Both share the same
ordering, default result fields and semantic block; only the geo constraint
differs. Building is pure and never touches the network.
"""

from collections.abc import Mapping
from typing import Any

from shared.models.search import (
    BoundingBoxQueryVariables,
    CircleQueryVariables,
    QueryDocument,
    SemanticOptions,
    GeoQueryVariables,
)

# Fields returned for every document when the caller asks for none.
DEFAULT_INCLUDE_FIELDS: tuple[str, ...] = (
    "post_title",
    "address",
    "coordinates",
    "post_url",
)

# Relevance first, then newest first. Fixed so that searchAfter cursors stay valid.
ORDER_BY: tuple[tuple[str, str], ...] = (
    ("_score", "desc"),
    ("post_date_gmt", "desc"),
)

# Weighting a site can pass when it wants semantic search on titles and content.
PRESET_SEMANTIC = SemanticOptions(bias=7, fields=("post_title", "post_content"))

DEFAULT_LIMIT = 20

CIRCLE_OPERATION = "FindNearCircle"
BOUNDING_BOX_OPERATION = "FindInBoundingBox"

# (name, GraphQL type, default literal or None)
_COMMON_HEAD: tuple[tuple[str, str, Any], ...] = (("query", "String!", None),)
_COMMON_TAIL: tuple[tuple[str, str, Any], ...] = (
    ("limit", "Int", DEFAULT_LIMIT),
    ("searchAfter", "[String!]", None),
    ("filter", "String", None),
    ("includeFields", "[String!]", []),
    ("semanticBias", "Int", 0),
    ("semanticFields", "[String!]", []),
)
_CIRCLE_GEO_VARIABLES = (
    ("centerLat", "Float!", None),
    ("centerLon", "Float!", None),
    ("maxDistance", "Distance!", None),
)
_BOUNDING_BOX_GEO_VARIABLES = (
    ("swLat", "Float!", None),
    ("swLon", "Float!", None),
    ("neLat", "Float!", None),
    ("neLon", "Float!", None),
)

_CIRCLE_CONSTRAINT = (
    "circles: [\n"
    "  { center: { lat: $centerLat, lon: $centerLon }, maxDistance: $maxDistance }\n"
    "]"
)
_BOUNDING_BOX_CONSTRAINT = (
    "boundingBoxes: [\n"
    "  { southwest: { lat: $swLat, lon: $swLon }, northeast: { lat: $neLat, lon: $neLon } }\n"
    "]"
)

_RESULT_SELECTION = """{
    total
    documents {
      id
      score
      sort
      data
    }
  }"""


##########################################
############### RENDERING ################
##########################################


def graphql_literal(value: Any) -> str:
    """Render a Python value as a GraphQL input literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(graphql_literal(v) for v in value) + "]"
    if isinstance(value, Mapping):
        return "{ " + ", ".join(f"{k}: {graphql_literal(v)}" for k, v in value.items()) + " }"
    raise TypeError(f"Cannot render {type(value).__name__} as a GraphQL literal.")


def _render_variable_definitions(definitions) -> str:
    lines = []
    for name, gql_type, default in definitions:
        line = f"    ${name}: {gql_type}"
        if default is not None:
            line += f" = {graphql_literal(default)}"
        lines.append(line)
    return "\n".join(lines)


def _render_order_by() -> str:
    return "\n".join(f'        {{ field: "{field}", direction: {direction} }}' for field, direction in ORDER_BY)


def _indent(text: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in text.splitlines())


def _render_document(operation_name: str, geo_variables, geo_constraint: str) -> str:
    definitions = (*_COMMON_HEAD, *geo_variables, *_COMMON_TAIL)
    return (
        f"query {operation_name}(\n"
        f"{_render_variable_definitions(definitions)}\n"
        f"  ) {{\n"
        f"    find(\n"
        f"      query: $query\n"
        f"      semanticSearch: {{ searchBias: $semanticBias, fields: $semanticFields }}\n"
        f"      filter: $filter\n"
        f"      geoConstraints: {{\n"
        f"{_indent(geo_constraint, 8)}\n"
        f"      }}\n"
        f"      orderBy: [\n"
        f"{_render_order_by()}\n"
        f"      ]\n"
        f"      limit: $limit\n"
        f"      searchAfter: $searchAfter\n"
        f"      options: {{ includeFields: $includeFields }}\n"
        f"    ) {_RESULT_SELECTION}\n"
        f"}}\n"
    )


# Rendered once; the text never depends on the variables.
FIND_NEAR_CIRCLE = _render_document(CIRCLE_OPERATION, _CIRCLE_GEO_VARIABLES, _CIRCLE_CONSTRAINT)
FIND_IN_BBOX = _render_document(BOUNDING_BOX_OPERATION, _BOUNDING_BOX_GEO_VARIABLES, _BOUNDING_BOX_CONSTRAINT)


##########################################
############### VARIABLES ################
##########################################


def resolve_semantic(semantic: SemanticOptions | None) -> SemanticOptions:
    """Return the caller's semantic options, or the neutral ones when absent."""
    return semantic if semantic is not None else SemanticOptions.neutral()


def resolve_include_fields(include_fields: list[str] | None) -> list[str]:
    """Return the requested result fields, or the default set when none were requested."""
    return list(include_fields) if include_fields else list(DEFAULT_INCLUDE_FIELDS)


def _common_variables(variables: GeoQueryVariables) -> dict[str, Any]:
    semantic = resolve_semantic(variables.semantic)
    result: dict[str, Any] = {
        "query": variables.query,
        "limit": variables.limit,
        "includeFields": resolve_include_fields(variables.include_fields),
        "semanticBias": semantic.bias,
        "semanticFields": list(semantic.fields),
    }
    if variables.search_after is not None:
        result["searchAfter"] = list(variables.search_after)
    if variables.filter is not None:
        result["filter"] = variables.filter
    return result


##########################################
################ BUILDERS ################
##########################################


def build_circle_query(variables: CircleQueryVariables | Mapping[str, Any]) -> QueryDocument:
    """Build the circle (nearby) search document.

    Args:
        variables: The search variables, as model or mapping (camelCase or snake_case keys).

    Returns:
        QueryDocument: The document text and the variables object to send with it.

    Raises:
        pydantic.ValidationError: If query, centerLat, centerLon or maxDistance is missing or invalid.
    """
    if not isinstance(variables, CircleQueryVariables):
        variables = CircleQueryVariables.model_validate(dict(variables))

    resolved = _common_variables(variables)
    resolved.update(
        {
            "centerLat": variables.center_lat,
            "centerLon": variables.center_lon,
            "maxDistance": variables.max_distance,
        }
    )
    return QueryDocument(operation_name=CIRCLE_OPERATION, query=FIND_NEAR_CIRCLE, variables=resolved)


def build_bounding_box_query(variables: BoundingBoxQueryVariables | Mapping[str, Any]) -> QueryDocument:
    """Build the bounding-box search document.

    The corners are passed through as given; a southwest corner lying north or
    east of the northeast corner is not corrected.

    Args:
        variables: The search variables, as model or mapping (camelCase or snake_case keys).

    Returns:
        QueryDocument: The document text and the variables object to send with it.

    Raises:
        pydantic.ValidationError: If query or any corner coordinate is missing or invalid.
    """
    if not isinstance(variables, BoundingBoxQueryVariables):
        variables = BoundingBoxQueryVariables.model_validate(dict(variables))

    resolved = _common_variables(variables)
    resolved.update(
        {
            "swLat": variables.sw_lat,
            "swLon": variables.sw_lon,
            "neLat": variables.ne_lat,
            "neLon": variables.ne_lon,
        }
    )
    return QueryDocument(operation_name=BOUNDING_BOX_OPERATION, query=FIND_IN_BBOX, variables=resolved)
