"""Helpers for the ``coordinates`` field of Smart Search documents."""

from typing import Any

from shared.models.search import Point


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_point(raw: Any) -> Point | None:
    if isinstance(raw, dict) and _is_number(raw.get("lat")) and _is_number(raw.get("lon")):
        return Point(lat=raw["lat"], lon=raw["lon"])
    return None


def normalize_coordinates(raw: Any) -> list[Point]:
    """Normalise a document's ``coordinates`` value to a list of points for mapping.

    The index may store a single ``{"lat", "lon"}`` object or a list of them.
    Entries without numeric lat/lon are dropped.

    Args:
        raw: The raw ``coordinates`` value from a result document.

    Returns:
        list[Point]: The valid points, possibly empty.
    """
    if not raw:
        return []
    if isinstance(raw, list):
        return [point for point in (_as_point(item) for item in raw) if point is not None]
    point = _as_point(raw)
    return [point] if point is not None else []
