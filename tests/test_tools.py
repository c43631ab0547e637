from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

import gmaps_mcp.tools  # noqa: F401
from gmaps_mcp.config import Settings
from gmaps_mcp.errors import MapsAPIError, MethodNotFoundError, ToolNotFoundError, ToolValidationError
from gmaps_mcp.tools.base import ToolContext
from gmaps_mcp.tools.registry import ToolRegistry


TOOL_NAMES = [
    "maps_geocode",
    "maps_reverse_geocode",
    "maps_search_places",
    "maps_place_details",
    "maps_distance_matrix",
    "maps_elevation",
    "maps_directions",
]


class FakeClient:
    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._responses = responses or {}

    def _respond(self, name: str, *args: Any) -> dict[str, Any]:
        self.calls.append((name, args))
        response = self._responses.get(name, {"status": "OK"})
        if isinstance(response, Exception):
            raise response
        return response

    async def geocode(self, address: str) -> dict[str, Any]:
        return self._respond("geocode", address)

    async def reverse_geocode(self, latitude: float, longitude: float) -> dict[str, Any]:
        return self._respond("reverse_geocode", latitude, longitude)

    async def search_places(self, query: str, location: Any = None, radius: Any = None) -> dict[str, Any]:
        return self._respond("search_places", query, location, radius)

    async def place_details(self, place_id: str) -> dict[str, Any]:
        return self._respond("place_details", place_id)

    async def distance_matrix(self, origins: Any, destinations: Any, mode: str = "driving") -> dict[str, Any]:
        return self._respond("distance_matrix", list(origins), list(destinations), mode)

    async def elevation(self, locations: Any) -> dict[str, Any]:
        return self._respond("elevation", list(locations))

    async def directions(self, origin: str, destination: str, mode: str = "driving") -> dict[str, Any]:
        return self._respond("directions", origin, destination, mode)


def _registry(client: FakeClient) -> ToolRegistry:
    context = ToolContext(settings=Settings(), client=client)  # type: ignore[arg-type]
    return ToolRegistry(context)


def test_list_tools_has_seven_tools_in_stable_order() -> None:
    tools = _registry(FakeClient()).list_tools()
    assert [tool["name"] for tool in tools] == TOOL_NAMES
    for tool in tools:
        assert tool["description"]
        assert tool["inputSchema"]["type"] == "object"


def test_input_schemas_declare_required_arguments() -> None:
    schemas = {tool["name"]: tool["inputSchema"] for tool in _registry(FakeClient()).list_tools()}
    assert schemas["maps_geocode"]["required"] == ["address"]
    assert set(schemas["maps_reverse_geocode"]["required"]) == {"latitude", "longitude"}
    assert schemas["maps_search_places"]["required"] == ["query"]
    assert set(schemas["maps_distance_matrix"]["required"]) == {"origins", "destinations"}
    assert schemas["maps_distance_matrix"]["properties"]["mode"]["enum"] == [
        "driving",
        "walking",
        "bicycling",
        "transit",
    ]
    assert schemas["maps_elevation"]["required"] == ["locations"]
    assert set(schemas["maps_directions"]["required"]) == {"origin", "destination"}


def test_geocode_example() -> None:
    async def run() -> None:
        client = FakeClient({
            "geocode": {
                "status": "OK",
                "results": [
                    {
                        "geometry": {"location": {"lat": 37.4, "lng": -122.1}},
                        "formatted_address": "...",
                        "place_id": "abc",
                    }
                ],
            }
        })
        result = await _registry(client).invoke("maps_geocode", {"address": "1600 Amphitheatre Parkway"})
        assert result == {"location": {"lat": 37.4, "lng": -122.1}, "formatted_address": "...", "place_id": "abc"}
        assert client.calls == [("geocode", ("1600 Amphitheatre Parkway",))]

    asyncio.run(run())


def test_distance_matrix_defaults_mode_and_shapes_rows() -> None:
    async def run() -> None:
        element = {"status": "OK", "distance": {"value": 1}, "duration": {"value": 2}}
        client = FakeClient({
            "distance_matrix": {
                "status": "OK",
                "origin_addresses": ["A", "B"],
                "destination_addresses": ["C", "D"],
                "rows": [{"elements": [element, element]}, {"elements": [element, element]}],
            }
        })
        result = await _registry(client).invoke(
            "maps_distance_matrix",
            {"origins": ["A", "B"], "destinations": ["C", "D"]},
        )
        assert len(result["results"]) == 2
        assert [len(row["elements"]) for row in result["results"]] == [2, 2]
        assert client.calls[0] == ("distance_matrix", (["A", "B"], ["C", "D"], "driving"))

    asyncio.run(run())


def test_coordinates_use_published_schema_names() -> None:
    async def run() -> None:
        client = FakeClient({"elevation": {"status": "OK", "results": []}})
        registry = _registry(client)
        await registry.invoke(
            "maps_elevation",
            {"locations": [{"latitude": 39.7, "longitude": -104.9}, {"latitude": 36.4, "longitude": -117.1}]},
        )
        await registry.invoke(
            "maps_search_places",
            {"query": "coffee", "location": {"latitude": 1.5, "longitude": 2.5}, "radius": 500},
        )
        assert client.calls[0] == ("elevation", ([(39.7, -104.9), (36.4, -117.1)],))
        assert client.calls[1] == ("search_places", ("coffee", (1.5, 2.5), 500.0))

        schema = next(tool["inputSchema"] for tool in registry.list_tools() if tool["name"] == "maps_elevation")
        location_schema = schema["$defs"]["LatLng"]
        assert sorted(location_schema["required"]) == ["latitude", "longitude"]

        with pytest.raises(ToolValidationError):
            await registry.invoke("maps_elevation", {"locations": [{"lat": 36.4, "lng": -117.1}]})
        assert len(client.calls) == 2

    asyncio.run(run())


@pytest.mark.parametrize(
    ("name", "arguments"),
    [
        ("maps_geocode", {}),
        ("maps_reverse_geocode", {"latitude": "north", "longitude": 1}),
        ("maps_reverse_geocode", {"latitude": 91, "longitude": 0}),
        ("maps_search_places", {"query": "x", "radius": 60000}),
        ("maps_distance_matrix", {"origins": ["A"], "destinations": ["B"], "mode": "flying"}),
        ("maps_distance_matrix", {"origins": [], "destinations": ["B"]}),
        ("maps_elevation", {"locations": [{"latitude": 1}]}),
        ("maps_directions", {"origin": "A"}),
    ],
)
def test_invalid_arguments_never_reach_upstream(name: str, arguments: dict[str, Any]) -> None:
    async def run() -> None:
        client = FakeClient()
        with pytest.raises(ToolValidationError) as exc_info:
            await _registry(client).invoke(name, arguments)
        assert exc_info.value.tool_name == name
        assert client.calls == []

    asyncio.run(run())


def test_unknown_tool_raises() -> None:
    async def run() -> None:
        with pytest.raises(ToolNotFoundError):
            await _registry(FakeClient()).invoke("maps_teleport", {})

    asyncio.run(run())


def test_upstream_error_propagates_from_invoke_and_becomes_is_error_in_call() -> None:
    async def run() -> None:
        error = MapsAPIError(status="REQUEST_DENIED", message="Key invalid", operation="Directions request")
        registry = _registry(FakeClient({"directions": error}))

        with pytest.raises(MapsAPIError) as exc_info:
            await registry.invoke("maps_directions", {"origin": "A", "destination": "B"})
        assert exc_info.value.message == "Key invalid"

        result = await registry.call("maps_directions", {"origin": "A", "destination": "B"})
        assert result["isError"] is True
        assert result["content"][0]["text"] == "Directions request failed: Key invalid"

    asyncio.run(run())


def test_call_wraps_result_as_text_content() -> None:
    async def run() -> None:
        client = FakeClient({"elevation": {"status": "OK", "results": [{"elevation": 10, "extra": 1}]}})
        result = await _registry(client).call("maps_elevation", {"locations": [{"latitude": 0, "longitude": 0}]})
        assert "isError" not in result
        assert result["content"][0]["type"] == "text"
        assert json.loads(result["content"][0]["text"]) == {"results": [{"elevation": 10}]}

    asyncio.run(run())


def test_handle_dispatches_generic_methods() -> None:
    async def run() -> None:
        registry = _registry(FakeClient())
        listed = await registry.handle("tools/list")
        assert len(listed["tools"]) == 7
        assert await registry.handle("ping") == {}
        with pytest.raises(MethodNotFoundError):
            await registry.handle("resources/list")
        with pytest.raises(ToolValidationError):
            await registry.handle("tools/call", {"arguments": {}})

    asyncio.run(run())
