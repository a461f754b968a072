"""
Device data service tests: flat record shape and secondary address back-fill
"""

import asyncio

from geocollect.domains.device_data.models.dto import DeviceDataPayload
from geocollect.domains.device_data.services.device_data_service import (
    DeviceDataService,
)
from geocollect.domains.geocoding.models.address_model import (
    AddressResult,
    ProviderId,
)


class RecordingRepository:
    def __init__(self):
        self.records = []

    async def create(self, record):
        self.records.append(record)
        return record


class RecordingResolver:
    def __init__(self, results):
        self.results = results
        self.calls = []

    async def resolve_secondary(self, coordinate):
        self.calls.append(coordinate)
        return self.results


def payload(**overrides):
    data = {
        "timestamp": 1700000000000,
        "location": {
            "wgs84": {"lat": 39.9087, "lon": 116.3975, "accuracy": 35},
            "gcj02": {"lat": 39.910103, "lon": 116.403744, "applicable": True},
        },
        "browser": {"ua": "Mozilla/5.0"},
        "address": {
            "formatted_address": "天安门",
            "province": "北京市",
            "city": "北京市",
            "admin_code": "110101",
            "city_code": "010",
        },
    }
    data.update(overrides)
    return DeviceDataPayload.model_validate(data)


def test_build_record_flattens_provider_addresses():
    tencent = AddressResult(
        formatted_address="天安门城楼",
        admin_code="110101",
        provider_specific={"street_number": "东长安街1号", "town": "", "landmark_l1": "天安门广场"},
    )
    baidu = AddressResult(formatted_address="故宫", city_code="131")

    record = DeviceDataService.build_record(
        payload(), "198.51.100.2", {ProviderId.BAIDU: baidu, ProviderId.TENCENT: tencent}
    )

    assert record.ip == "198.51.100.2"
    assert record.address == "天安门"
    assert record.adcode == "110101"
    assert record.citycode == "010"
    assert record.country is None
    assert record.baidu_address == "故宫"
    assert record.baidu_citycode == "131"
    assert record.tencent_address == "天安门城楼"
    assert record.tencent_adcode == "110101"
    assert record.tencent_street_number == "东长安街1号"
    # 空字串一律存為 None
    assert record.tencent_town is None
    assert record.tencent_landmark_l2 is None


def test_build_record_without_location_or_addresses():
    empty = DeviceDataPayload.model_validate({"error": "定位超时"})

    record = DeviceDataService.build_record(empty, None)

    assert record.timestamp > 0
    assert record.wgs84_lat is None
    assert record.gcj02_applicable is False
    assert record.address is None
    assert record.baidu_address is None
    assert record.error == "定位超时"


def test_client_supplied_secondary_addresses_are_not_refetched():
    repository = RecordingRepository()
    resolver = RecordingResolver({})
    service = DeviceDataService(repository, resolver)
    data = payload(
        baidu_address={"formatted_address": "百度"},
        tencent_address={"formatted_address": "腾讯"},
    )

    asyncio.run(service.save(data, "127.0.0.1"))

    assert resolver.calls == []
    assert repository.records[0].baidu_address == "百度"
    assert repository.records[0].tencent_address == "腾讯"


def test_missing_secondary_addresses_are_fetched():
    repository = RecordingRepository()
    resolver = RecordingResolver(
        {
            ProviderId.BAIDU: AddressResult(formatted_address="百度补查"),
            ProviderId.TENCENT: AddressResult(formatted_address="腾讯补查"),
        }
    )
    service = DeviceDataService(repository, resolver)

    asyncio.run(service.save(payload(tencent_address={"formatted_address": "腾讯"}), None))

    assert len(resolver.calls) == 1
    assert resolver.calls[0].latitude == 39.910103
    record = repository.records[0]
    assert record.baidu_address == "百度补查"
    assert record.tencent_address == "腾讯"


def test_inapplicable_location_skips_fetch():
    repository = RecordingRepository()
    resolver = RecordingResolver({})
    service = DeviceDataService(repository, resolver)
    data = payload(
        location={
            "wgs84": {"lat": 51.5074, "lon": -0.1278, "accuracy": 20},
            "gcj02": {"lat": 51.5074, "lon": -0.1278, "applicable": False},
        }
    )

    asyncio.run(service.save(data, None))

    assert resolver.calls == []
    assert repository.records[0].gcj02_applicable is False
