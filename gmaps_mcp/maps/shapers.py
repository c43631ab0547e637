"""
Result shapers: narrow raw Google Maps payloads to the fields each tool returns.

Every shaper is a pure function ``payload -> dict`` registered under its tool
name. Fields missing upstream are left out of the result instead of being
filled with placeholders.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from gmaps_mcp.errors import NoResultsError


ResultShaper = Callable[[Mapping[str, Any]], dict[str, Any]]

_SHAPERS: dict[str, ResultShaper] = {}


def register_shaper(tool_name: str) -> Callable[[ResultShaper], ResultShaper]:
    def decorator(func: ResultShaper) -> ResultShaper:
        _SHAPERS[tool_name] = func
        return func

    return decorator


def get_shaper(tool_name: str) -> ResultShaper:
    try:
        return _SHAPERS[tool_name]
    except KeyError:
        raise KeyError(f"No result shaper registered for {tool_name}") from None


def shape(tool_name: str, payload: Mapping[str, Any]) -> dict[str, Any]:
    return get_shaper(tool_name)(payload)


def _pick(source: Mapping[str, Any] | None, fields: Mapping[str, str]) -> dict[str, Any]:
    """Copy ``source[upstream_key]`` to ``result[result_key]`` for keys that exist."""
    if not isinstance(source, Mapping):
        return {}
    return {out: source[key] for out, key in fields.items() if key in source}


def _items(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = payload.get(key)
    return value if isinstance(value, list) else []


def _first(payload: Mapping[str, Any], key: str, operation: str) -> Mapping[str, Any]:
    items = _items(payload, key)
    if not items or not isinstance(items[0], Mapping):
        raise NoResultsError(operation)
    return items[0]


def _location(item: Mapping[str, Any] | None) -> dict[str, Any]:
    if not isinstance(item, Mapping):
        return {}
    geometry = item.get("geometry")
    if isinstance(geometry, Mapping) and "location" in geometry:
        return {"location": geometry["location"]}
    return {}


# region 各工具的字段白名单
@register_shaper("maps_geocode")
def shape_geocode(payload: Mapping[str, Any]) -> dict[str, Any]:
    first = _first(payload, "results", "Geocoding")
    return {
        **_location(first),
        **_pick(first, {"formatted_address": "formatted_address", "place_id": "place_id"}),
    }


@register_shaper("maps_reverse_geocode")
def shape_reverse_geocode(payload: Mapping[str, Any]) -> dict[str, Any]:
    first = _first(payload, "results", "Reverse geocoding")
    return _pick(
        first,
        {
            "formatted_address": "formatted_address",
            "place_id": "place_id",
            "address_components": "address_components",
        },
    )


@register_shaper("maps_search_places")
def shape_search_places(payload: Mapping[str, Any]) -> dict[str, Any]:
    places = []
    for place in _items(payload, "results"):
        if not isinstance(place, Mapping):
            continue
        places.append({
            **_pick(place, {"name": "name", "formatted_address": "formatted_address"}),
            **_location(place),
            **_pick(place, {"place_id": "place_id", "rating": "rating", "types": "types"}),
        })
    return {"places": places}


@register_shaper("maps_place_details")
def shape_place_details(payload: Mapping[str, Any]) -> dict[str, Any]:
    result = payload.get("result")
    if not isinstance(result, Mapping):
        raise NoResultsError("Place details request")
    return {
        **_pick(result, {"name": "name", "formatted_address": "formatted_address"}),
        **_location(result),
        **_pick(
            result,
            {
                "formatted_phone_number": "formatted_phone_number",
                "website": "website",
                "rating": "rating",
                "reviews": "reviews",
                "opening_hours": "opening_hours",
            },
        ),
    }


@register_shaper("maps_distance_matrix")
def shape_distance_matrix(payload: Mapping[str, Any]) -> dict[str, Any]:
    element_fields = {"status": "status", "duration": "duration", "distance": "distance"}
    results = [
        {"elements": [_pick(element, element_fields) for element in _items(row, "elements")]}
        for row in _items(payload, "rows")
        if isinstance(row, Mapping)
    ]
    return {
        **_pick(
            payload,
            {
                "origin_addresses": "origin_addresses",
                "destination_addresses": "destination_addresses",
            },
        ),
        "results": results,
    }


@register_shaper("maps_elevation")
def shape_elevation(payload: Mapping[str, Any]) -> dict[str, Any]:
    fields = {"elevation": "elevation", "location": "location", "resolution": "resolution"}
    return {"results": [_pick(item, fields) for item in _items(payload, "results")]}


@register_shaper("maps_directions")
def shape_directions(payload: Mapping[str, Any]) -> dict[str, Any]:
    step_fields = {
        "instructions": "html_instructions",
        "distance": "distance",
        "duration": "duration",
        "travel_mode": "travel_mode",
    }
    routes = []
    for route in _items(payload, "routes"):
        if not isinstance(route, Mapping):
            continue
        # Only the first leg is reported; waypoints are not supported.
        legs = _items(route, "legs")
        leg = legs[0] if legs and isinstance(legs[0], Mapping) else {}
        shaped = {
            **_pick(route, {"summary": "summary"}),
            **_pick(leg, {"distance": "distance", "duration": "duration"}),
        }
        if "steps" in leg:
            shaped["steps"] = [_pick(step, step_fields) for step in _items(leg, "steps")]
        routes.append(shaped)
    return {"routes": routes}
# endregion
