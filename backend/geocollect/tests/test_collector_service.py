"""
Collector tests: acquire, convert, fetch address, save; failure statuses and hints
"""

import asyncio

import pytest

from geocollect.domains.acquisition.models.position_model import (
    PositionFix,
    RuntimeEnvironment,
)
from geocollect.domains.collection.interfaces.backend_client_interface import (
    BackendClientInterface,
)
from geocollect.domains.collection.models.collection_model import DeviceInfo
from geocollect.domains.collection.services.collector_service import (
    HINT_INTERACTION_REQUIRED,
    CollectorService,
)
from geocollect.domains.common.errors import ErrorKind, TransportError
from geocollect.domains.common.utils.result import Result
from geocollect.domains.coordinates.models.coordinate_model import CoordinateSystem
from geocollect.domains.device_data.models.dto import DeviceDataResponse, ScreenInfo
from geocollect.domains.geocoding.models.address_model import (
    AddressResponse,
    AddressResult,
)

NOW_MS = 1_700_000_000_000
IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1_2 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Mobile/15E148"
)
ANDROID_UA = (
    "Mozilla/5.0 (Linux; Android 13; Redmi K60 Build/TKQ1.220905.001) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/116.0 Mobile Safari/537.36"
)


class FakeAcquirer:
    def __init__(self, result, environment=RuntimeEnvironment.STANDALONE_BROWSER):
        self.result = result
        self.environment = environment
        self.calls = []

    async def acquire(self, last_interaction_ms=None):
        self.calls.append(last_interaction_ms)
        return self.result


class FakeBackend(BackendClientInterface):
    def __init__(self, address=None, address_error=None, save_ok=True, save_error=None):
        self.address = address
        self.address_error = address_error
        self.save_ok = save_ok
        self.save_error = save_error
        self.address_requests = []
        self.saved = []

    async def fetch_address(self, coordinate):
        self.address_requests.append(coordinate)
        if self.address_error is not None:
            raise self.address_error
        return self.address

    async def save_device_data(self, payload):
        self.saved.append(payload)
        if self.save_error is not None:
            raise self.save_error
        return DeviceDataResponse(ok=self.save_ok, id=1 if self.save_ok else None)


def beijing_fix(accuracy=35.0):
    return PositionFix.from_platform(39.9087, 116.3975, accuracy, NOW_MS)


def make_collector(result, backend, environment=RuntimeEnvironment.STANDALONE_BROWSER):
    statuses = []
    collector = CollectorService(
        acquirer=FakeAcquirer(result, environment),
        backend=backend,
        device_info=DeviceInfo.from_user_agent(IPHONE_UA),
        on_status=statuses.append,
        clock=lambda: NOW_MS,
    )
    return collector, statuses


def test_device_info_from_ios_user_agent():
    info = DeviceInfo.from_user_agent(IPHONE_UA, screen=ScreenInfo(width=390, height=844, dpr=3))

    assert info.os == "iOS"
    assert info.model == "iPhone"
    assert info.os_version == "17.1.2"
    assert info.to_payload().screen.width == 390


def test_device_info_from_android_user_agent():
    info = DeviceInfo.from_user_agent(ANDROID_UA)

    assert info.os == "Android"
    assert info.model == "Redmi K60 Build/TKQ1.220905.001"
    assert info.os_version == "13"


def test_device_info_unknown_user_agent():
    info = DeviceInfo.from_user_agent(None)

    assert info.os == "未知"
    assert info.model == "未知"
    assert info.os_version == "未知"


def test_collect_success_saves_payload_with_addresses():
    backend = FakeBackend(
        address=AddressResponse(
            ok=True,
            address=AddressResult(formatted_address="天安门"),
            tencent=AddressResult(formatted_address="天安门城楼"),
        )
    )
    collector, statuses = make_collector(Result.success(beijing_fix()), backend)

    report = asyncio.run(collector.collect(last_interaction_ms=NOW_MS))

    assert report.saved is True
    assert report.error_kind is None
    assert report.status == "采集完成！"
    assert statuses == report.statuses
    assert statuses == [
        "准备采集",
        "正在获取定位（可能需要几秒钟）...",
        "正在获取地址信息...",
        "地址获取成功",
        "正在保存数据...",
        "采集完成！",
    ]

    requested = backend.address_requests[0]
    assert requested.system == CoordinateSystem.GCJ02
    assert requested.latitude == pytest.approx(39.910103, abs=1e-5)

    payload = backend.saved[0]
    assert payload.timestamp == NOW_MS
    assert payload.location.wgs84.accuracy == 35.0
    assert payload.location.gcj02.applicable is True
    assert payload.address.formatted_address == "天安门"
    assert payload.baidu_address is None
    assert payload.tencent_address.formatted_address == "天安门城楼"
    assert payload.device.os_version == "17.1.2"
    assert payload.browser.ua == IPHONE_UA


def test_outside_region_address_request_keeps_wgs84_tag():
    backend = FakeBackend(address=AddressResponse(ok=True, address=AddressResult(formatted_address="London")))
    london = PositionFix.from_platform(51.5074, -0.1278, 20.0, NOW_MS)
    collector, _ = make_collector(Result.success(london), backend)

    report = asyncio.run(collector.collect())

    requested = backend.address_requests[0]
    assert requested.system == CoordinateSystem.WGS84
    assert requested.latitude == 51.5074
    assert requested.longitude == -0.1278
    assert backend.saved[0].location.gcj02.applicable is False
    assert report.saved is True


def test_address_failure_still_saves():
    backend = FakeBackend(address_error=TransportError("Request failed: connection refused"))
    collector, statuses = make_collector(Result.success(beijing_fix()), backend)

    report = asyncio.run(collector.collect())

    assert report.saved is True
    assert "地址获取失败: Request failed: connection refused" in statuses
    assert backend.saved[0].address is None


def test_address_not_found_still_saves():
    backend = FakeBackend(address=AddressResponse(ok=False, code="address_not_found"))
    collector, statuses = make_collector(Result.success(beijing_fix()), backend)

    report = asyncio.run(collector.collect())

    assert report.saved is True
    assert "地址获取失败" in statuses


def test_save_transport_error_is_reported():
    backend = FakeBackend(
        address=AddressResponse(ok=False), save_error=TransportError("Request timeout after 15.0s")
    )
    collector, _ = make_collector(Result.success(beijing_fix()), backend)

    report = asyncio.run(collector.collect())

    assert report.saved is False
    assert report.error_kind == ErrorKind.TRANSPORT_ERROR
    assert report.status == "保存失败: Request timeout after 15.0s"


def test_backend_rejecting_save_is_reported():
    backend = FakeBackend(address=AddressResponse(ok=False), save_ok=False)
    collector, _ = make_collector(Result.success(beijing_fix()), backend)

    report = asyncio.run(collector.collect())

    assert report.saved is False
    assert report.status == "保存失败"


def test_interaction_window_failure_has_hint_and_saves_without_location():
    backend = FakeBackend()
    collector, _ = make_collector(
        Result.failure(ErrorKind.INTERACTION_WINDOW_EXPIRED.value, "expired"),
        backend,
        environment=RuntimeEnvironment.EMBEDDED_WEBVIEW,
    )

    report = asyncio.run(collector.collect(last_interaction_ms=NOW_MS - 6000))

    assert report.error_kind == ErrorKind.INTERACTION_WINDOW_EXPIRED
    assert report.hint == HINT_INTERACTION_REQUIRED
    assert report.status == '请点击"重新采集"按钮开始定位'
    assert backend.address_requests == []

    payload = backend.saved[0]
    assert payload.location.wgs84.lat is None
    assert payload.location.gcj02.applicable is False
    assert payload.error == report.status
    assert report.saved is True


def test_permission_denied_in_embedded_webview():
    backend = FakeBackend()
    collector, _ = make_collector(
        Result.failure(ErrorKind.PERMISSION_DENIED.value, "denied"),
        backend,
        environment=RuntimeEnvironment.EMBEDDED_WEBVIEW,
    )

    report = asyncio.run(collector.collect(last_interaction_ms=NOW_MS))

    assert report.status == "定位权限被拒绝（微信浏览器）"
    assert report.hint is not None


def test_timeout_in_browser_has_no_hint():
    collector, _ = make_collector(Result.failure(ErrorKind.TIMEOUT.value, "timeout"), FakeBackend())

    report = asyncio.run(collector.collect())

    assert report.status == "定位超时（请检查网络连接和GPS信号）"
    assert report.hint is None


def test_unknown_failure_message_includes_detail():
    collector, _ = make_collector(Result.failure(ErrorKind.UNKNOWN.value, "boom"), FakeBackend())

    report = asyncio.run(collector.collect())

    assert report.status == "定位失败: boom"


def test_save_failure_after_acquisition_failure_is_swallowed():
    backend = FakeBackend(save_error=TransportError("Request failed: connection refused"))
    collector, _ = make_collector(
        Result.failure(ErrorKind.POSITION_UNAVAILABLE.value, "unavailable"), backend
    )

    report = asyncio.run(collector.collect())

    assert report.saved is False
    assert report.error_kind == ErrorKind.POSITION_UNAVAILABLE
    assert report.status == "定位服务不可用（请检查GPS是否开启）"
