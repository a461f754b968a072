"""
Address resolver tests: primary/secondary tolerance, datum routing and concurrency
"""

import asyncio
import time

import pytest

from geocollect.domains.common.errors import ErrorKind
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.geocoding.interfaces.geocoding_provider_interface import (
    ReverseGeocodingProviderInterface,
)
from geocollect.domains.geocoding.models.address_model import (
    AddressResult,
    ProviderId,
)
from geocollect.domains.geocoding.services.address_service import (
    AddressResolverService,
)

GCJ = GeoCoordinate(system=CoordinateSystem.GCJ02, latitude=39.910103, longitude=116.403744)


class FakeProvider(ReverseGeocodingProviderInterface):
    def __init__(self, provider_id, datum=CoordinateSystem.GCJ02, result=None, delay=0.0, error=None):
        self.provider_id = provider_id
        self.datum = datum
        self.timeout = 5.0
        self.result = result
        self.delay = delay
        self.error = error
        self.received = []

    async def reverse_geocode(self, coordinate):
        self.received.append(coordinate)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


def address(name):
    return AddressResult(formatted_address=name, province="北京市", city="北京市")


def make_resolver(primary_result=None, baidu_result=None, tencent_result=None, delay=0.0):
    primary = FakeProvider(ProviderId.AMAP, result=primary_result, delay=delay)
    baidu = FakeProvider(ProviderId.BAIDU, CoordinateSystem.BD09, result=baidu_result, delay=delay)
    tencent = FakeProvider(ProviderId.TENCENT, result=tencent_result, delay=delay)
    resolver = AddressResolverService(primary=primary, secondaries=[baidu, tencent])
    return resolver, primary, baidu, tencent


def test_primary_failure_is_address_not_found_even_if_secondaries_succeed():
    resolver, _, _, _ = make_resolver(
        primary_result=None, baidu_result=address("百度"), tencent_result=address("腾讯")
    )

    result = asyncio.run(resolver.resolve(GCJ))

    assert result.is_failure()
    assert result.error_code == ErrorKind.ADDRESS_NOT_FOUND.value


def test_secondary_failures_are_tolerated():
    resolver, _, _, _ = make_resolver(primary_result=address("高德"))

    result = asyncio.run(resolver.resolve(GCJ))

    assert result.is_success()
    outcome = result.data
    assert outcome.primary.formatted_address == "高德"
    assert outcome.secondary == {ProviderId.BAIDU: None, ProviderId.TENCENT: None}


def test_unexpected_secondary_exception_is_absent():
    resolver, _, baidu, _ = make_resolver(
        primary_result=address("高德"), tencent_result=address("腾讯")
    )
    baidu.error = RuntimeError("boom")

    outcome = asyncio.run(resolver.resolve(GCJ)).data

    assert outcome.secondary[ProviderId.BAIDU] is None
    assert outcome.secondary[ProviderId.TENCENT].formatted_address == "腾讯"


def test_baidu_receives_bd09_and_others_receive_gcj02():
    resolver, amap, baidu, tencent = make_resolver(primary_result=address("高德"))

    asyncio.run(resolver.resolve(GCJ))

    assert amap.received == [GCJ]
    assert tencent.received == [GCJ]
    assert baidu.received[0].system == CoordinateSystem.BD09
    assert baidu.received[0].latitude == pytest.approx(39.916443, abs=1e-5)


def test_wgs84_input_is_converted_first():
    resolver, amap, _, _ = make_resolver(primary_result=address("高德"))
    wgs = GeoCoordinate(system=CoordinateSystem.WGS84, latitude=39.9087, longitude=116.3975)

    asyncio.run(resolver.resolve(wgs))

    assert amap.received[0].system == CoordinateSystem.GCJ02
    assert amap.received[0].latitude == pytest.approx(39.910103, abs=1e-5)


def test_outside_region_skips_bd09_provider():
    resolver, amap, baidu, _ = make_resolver(primary_result=address("London"))
    london = GeoCoordinate(system=CoordinateSystem.WGS84, latitude=51.5074, longitude=-0.1278)

    result = asyncio.run(resolver.resolve(london))

    assert result.is_success()
    assert amap.received == [london]
    assert baidu.received == []


def test_bd09_input_is_rejected():
    resolver, _, _, _ = make_resolver(primary_result=address("高德"))
    bd = GeoCoordinate(system=CoordinateSystem.BD09, latitude=39.9, longitude=116.4)

    with pytest.raises(ValueError):
        asyncio.run(resolver.resolve(bd))


def test_include_secondary_false_queries_primary_only():
    resolver, _, baidu, tencent = make_resolver(primary_result=address("高德"))

    outcome = asyncio.run(resolver.resolve(GCJ, include_secondary=False)).data

    assert outcome.secondary == {}
    assert baidu.received == [] and tencent.received == []


def test_provider_calls_run_concurrently():
    delay = 0.4
    resolver, _, _, _ = make_resolver(
        primary_result=address("高德"),
        baidu_result=address("百度"),
        tencent_result=address("腾讯"),
        delay=delay,
    )

    started = time.perf_counter()
    result = asyncio.run(resolver.resolve(GCJ))
    elapsed = time.perf_counter() - started

    assert result.is_success()
    # 並行時約為單次延遲，循序執行則為三倍
    assert elapsed < delay * 2


def test_resolve_secondary_returns_provider_keyed_results():
    resolver, amap, _, _ = make_resolver(
        primary_result=address("高德"), tencent_result=address("腾讯")
    )

    secondary = asyncio.run(resolver.resolve_secondary(GCJ))

    assert amap.received == []
    assert secondary[ProviderId.BAIDU] is None
    assert secondary[ProviderId.TENCENT].formatted_address == "腾讯"
