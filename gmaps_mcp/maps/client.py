"""
描述: Google Maps Web Service API 客户端
主要功能:
    - 封装 GET 请求与 API Key 注入
    - 统一 status 校验 (非 OK 即失败, 不重试)
    - 七个业务接口: 地理编码 / 逆地理编码 / 地点搜索 / 地点详情 / 距离矩阵 / 海拔 / 路线
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from gmaps_mcp.config import Settings
from gmaps_mcp.errors import MapsAPIError, UpstreamTransportError


GEOCODE_PATH = "/geocode/json"
PLACE_TEXT_SEARCH_PATH = "/place/textsearch/json"
PLACE_DETAILS_PATH = "/place/details/json"
DISTANCE_MATRIX_PATH = "/distancematrix/json"
ELEVATION_PATH = "/elevation/json"
DIRECTIONS_PATH = "/directions/json"

DEFAULT_TRAVEL_MODE = "driving"

logger = logging.getLogger(__name__)


def format_latlng(latitude: float, longitude: float) -> str:
    return f"{latitude},{longitude}"


def format_number(value: float) -> str:
    """整数值不带小数点, 其余保留完整精度"""
    number = float(value)
    return str(int(number)) if number.is_integer() else repr(number)


def _redact(params: list[tuple[str, str]]) -> dict[str, str]:
    return {key: ("***" if key == "key" else value) for key, value in params}


# region Google Maps 客户端
class GoogleMapsClient:
    """
    Google Maps API 客户端

    功能:
        - 每个实例绑定一个 API Key
        - 每次调用构造新的请求, 不缓存
    """
    def __init__(
        self,
        api_key: str,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        初始化客户端

        参数:
            api_key: 已解析的 Google Maps API Key
            settings: 全局配置对象
            transport: 可选的 httpx transport (测试注入)
        """
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key
        self._settings = settings
        self._transport = transport

    async def request(
        self,
        path: str,
        params: Sequence[tuple[str, str]],
        operation: str,
    ) -> dict[str, Any]:
        """
        执行 GET 请求并校验 status

        参数:
            path: API 路径 (不含 Base URL)
            params: 有序查询参数, API Key 会追加在最后
            operation: 用于错误信息的操作名称

        返回:
            status 为 OK 的响应 JSON

        抛出:
            MapsAPIError: status 非 OK
            UpstreamTransportError: 网络异常或响应无法解析
        """
        url = f"{self._settings.maps.api_base.rstrip('/')}{path}"
        query = [*params, ("key", self._api_key)]
        logger.debug("Maps request", extra={"path": path, "params": _redact(query)})

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.maps.timeout,
                trust_env=False,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=query)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(f"{operation} request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamTransportError(
                f"{operation} returned a non-JSON response (HTTP {response.status_code})"
            ) from exc
        if not isinstance(payload, dict):
            raise UpstreamTransportError(f"{operation} returned an unexpected payload")

        status = payload.get("status")
        if status != "OK":
            if status is None and response.status_code >= 400:
                status = f"HTTP {response.status_code}"
            status = str(status)
            raise MapsAPIError(
                status=status,
                message=payload.get("error_message") or status,
                operation=operation,
            )
        return payload

    async def geocode(self, address: str) -> dict[str, Any]:
        return await self.request(GEOCODE_PATH, [("address", address)], "Geocoding")

    async def reverse_geocode(self, latitude: float, longitude: float) -> dict[str, Any]:
        return await self.request(
            GEOCODE_PATH,
            [("latlng", format_latlng(latitude, longitude))],
            "Reverse geocoding",
        )

    async def search_places(
        self,
        query: str,
        location: tuple[float, float] | None = None,
        radius: float | None = None,
    ) -> dict[str, Any]:
        params = [("query", query)]
        if location is not None:
            params.append(("location", format_latlng(*location)))
        if radius:
            params.append(("radius", format_number(radius)))
        return await self.request(PLACE_TEXT_SEARCH_PATH, params, "Place search")

    async def place_details(self, place_id: str) -> dict[str, Any]:
        return await self.request(PLACE_DETAILS_PATH, [("place_id", place_id)], "Place details request")

    async def distance_matrix(
        self,
        origins: Sequence[str],
        destinations: Sequence[str],
        mode: str = DEFAULT_TRAVEL_MODE,
    ) -> dict[str, Any]:
        params = [
            ("origins", "|".join(origins)),
            ("destinations", "|".join(destinations)),
            ("mode", mode),
        ]
        return await self.request(DISTANCE_MATRIX_PATH, params, "Distance matrix request")

    async def elevation(self, locations: Sequence[tuple[float, float]]) -> dict[str, Any]:
        joined = "|".join(format_latlng(lat, lng) for lat, lng in locations)
        return await self.request(ELEVATION_PATH, [("locations", joined)], "Elevation request")

    async def directions(
        self,
        origin: str,
        destination: str,
        mode: str = DEFAULT_TRAVEL_MODE,
    ) -> dict[str, Any]:
        params = [("origin", origin), ("destination", destination), ("mode", mode)]
        return await self.request(DIRECTIONS_PATH, params, "Directions request")
# endregion
