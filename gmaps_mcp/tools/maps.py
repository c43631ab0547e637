"""
Google Maps tools.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from gmaps_mcp.maps.client import DEFAULT_TRAVEL_MODE
from gmaps_mcp.tools.base import BaseTool
from gmaps_mcp.tools.registry import ToolRegistry


TravelMode = Literal["driving", "walking", "bicycling", "transit"]


# region 参数模型
class LatLng(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def as_tuple(self) -> tuple[float, float]:
        return self.latitude, self.longitude


class GeocodeArgs(BaseModel):
    address: str = Field(min_length=1, description="The address to geocode")


class ReverseGeocodeArgs(BaseModel):
    latitude: float = Field(ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(ge=-180, le=180, description="Longitude coordinate")


class SearchPlacesArgs(BaseModel):
    query: str = Field(min_length=1, description="Search query")
    location: LatLng | None = Field(default=None, description="Optional center point for the search")
    radius: float | None = Field(default=None, gt=0, le=50000, description="Search radius in meters (max 50000)")


class PlaceDetailsArgs(BaseModel):
    place_id: str = Field(min_length=1, description="The place ID to get details for")


class DistanceMatrixArgs(BaseModel):
    origins: list[str] = Field(min_length=1, description="Array of origin addresses or coordinates")
    destinations: list[str] = Field(min_length=1, description="Array of destination addresses or coordinates")
    mode: TravelMode = Field(default=DEFAULT_TRAVEL_MODE, description="Travel mode")


class ElevationArgs(BaseModel):
    locations: list[LatLng] = Field(min_length=1, description="Array of locations to get elevation for")


class DirectionsArgs(BaseModel):
    origin: str = Field(min_length=1, description="Starting point address or coordinates")
    destination: str = Field(min_length=1, description="Ending point address or coordinates")
    mode: TravelMode = Field(default=DEFAULT_TRAVEL_MODE, description="Travel mode")
# endregion


# region 工具定义
@ToolRegistry.register
class GeocodeTool(BaseTool):
    name = "maps_geocode"
    description = "Convert an address into geographic coordinates"
    arguments = GeocodeArgs

    async def fetch(self, args: GeocodeArgs) -> dict[str, Any]:
        return await self.context.client.geocode(args.address)


@ToolRegistry.register
class ReverseGeocodeTool(BaseTool):
    name = "maps_reverse_geocode"
    description = "Convert coordinates into an address"
    arguments = ReverseGeocodeArgs

    async def fetch(self, args: ReverseGeocodeArgs) -> dict[str, Any]:
        return await self.context.client.reverse_geocode(args.latitude, args.longitude)


@ToolRegistry.register
class SearchPlacesTool(BaseTool):
    name = "maps_search_places"
    description = "Search for places using Google Places API"
    arguments = SearchPlacesArgs

    async def fetch(self, args: SearchPlacesArgs) -> dict[str, Any]:
        location = args.location.as_tuple() if args.location else None
        return await self.context.client.search_places(args.query, location, args.radius)


@ToolRegistry.register
class PlaceDetailsTool(BaseTool):
    name = "maps_place_details"
    description = "Get detailed information about a specific place"
    arguments = PlaceDetailsArgs

    async def fetch(self, args: PlaceDetailsArgs) -> dict[str, Any]:
        return await self.context.client.place_details(args.place_id)


@ToolRegistry.register
class DistanceMatrixTool(BaseTool):
    name = "maps_distance_matrix"
    description = "Calculate travel distance and time for multiple origins and destinations"
    arguments = DistanceMatrixArgs

    async def fetch(self, args: DistanceMatrixArgs) -> dict[str, Any]:
        return await self.context.client.distance_matrix(args.origins, args.destinations, args.mode)


@ToolRegistry.register
class ElevationTool(BaseTool):
    name = "maps_elevation"
    description = "Get elevation data for locations on the earth"
    arguments = ElevationArgs

    async def fetch(self, args: ElevationArgs) -> dict[str, Any]:
        return await self.context.client.elevation([location.as_tuple() for location in args.locations])


@ToolRegistry.register
class DirectionsTool(BaseTool):
    name = "maps_directions"
    description = "Get directions between two points"
    arguments = DirectionsArgs

    async def fetch(self, args: DirectionsArgs) -> dict[str, Any]:
        return await self.context.client.directions(args.origin, args.destination, args.mode)
# endregion
