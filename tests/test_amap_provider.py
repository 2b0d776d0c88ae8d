import asyncio

import httpx
import pytest

from fleetops.exceptions import GeocodeError, InvalidCredentialsError
from fleetops.geocoding.providers.amap import AMapGeocodeProvider
from fleetops.geocoding.schemas import Coordinate


def _provider(handler) -> AMapGeocodeProvider:
    return AMapGeocodeProvider("test-key", transport=httpx.MockTransport(handler))


def test_complete_response_returns_locations_in_order() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(
            200,
            json={
                "status": "1",
                "info": "OK",
                "geocodes": [{"location": "116.480881,39.989410"}, {"location": "116.3,39.9"}],
            },
        )

    result = asyncio.run(_provider(handler).geocode("北京市朝阳区阜通东大街6号", "全国"))

    assert result == [
        Coordinate(longitude=116.480881, latitude=39.98941),
        Coordinate(longitude=116.3, latitude=39.9),
    ]
    assert seen["path"] == "/v3/geocode/geo"
    assert seen["key"] == "test-key"
    assert seen["address"] == "北京市朝阳区阜通东大街6号"
    assert seen["city"] == "全国"


def test_complete_response_without_geocodes_is_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "1", "info": "OK", "count": "0", "geocodes": []})

    assert asyncio.run(_provider(handler).geocode("不存在的地方", "全国")) == []


def test_malformed_locations_are_skipped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"status": "1", "geocodes": [{"location": []}, {"location": "x,y"}, {"location": "1,2"}]},
        )

    assert asyncio.run(_provider(handler).geocode("某地", "全国")) == [
        Coordinate(longitude=1.0, latitude=2.0)
    ]


@pytest.mark.parametrize("info", ["INVALID_USER_KEY", "INVALID_USER_SCODE"])
def test_invalid_credentials(info: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "0", "info": info, "infocode": "10001"})

    with pytest.raises(InvalidCredentialsError):
        asyncio.run(_provider(handler).geocode("北京", "全国"))


def test_other_failures_raise_geocode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "0", "info": "DAILY_QUERY_OVER_LIMIT"})

    with pytest.raises(GeocodeError, match="DAILY_QUERY_OVER_LIMIT"):
        asyncio.run(_provider(handler).geocode("北京", "全国"))


def test_transport_failure_raises_geocode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GeocodeError):
        asyncio.run(_provider(handler).geocode("北京", "全国"))


@pytest.mark.parametrize("body", [["unexpected"], "OK", 1])
def test_non_object_body_raises_geocode_error(body: object) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(GeocodeError):
        asyncio.run(_provider(handler).geocode("北京", "全国"))


def test_non_object_geocode_entries_are_skipped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"status": "1", "geocodes": ["116.3,39.9", None, {"location": "1,2"}]}
        )

    assert asyncio.run(_provider(handler).geocode("某地", "全国")) == [
        Coordinate(longitude=1.0, latitude=2.0)
    ]


def test_non_list_geocodes_is_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "1", "geocodes": {"location": "1,2"}})

    assert asyncio.run(_provider(handler).geocode("某地", "全国")) == []
