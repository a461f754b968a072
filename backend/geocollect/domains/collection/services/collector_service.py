import logging
import time
from typing import Callable, Dict, Optional

from geocollect.domains.acquisition.models.position_model import (
    PositionFix,
    RuntimeEnvironment,
)
from geocollect.domains.acquisition.services.position_acquirer import (
    PositionAcquirer,
    describe_accuracy,
)
from geocollect.domains.collection.interfaces.backend_client_interface import (
    BackendClientInterface,
)
from geocollect.domains.collection.models.collection_model import (
    CollectionReport,
    DeviceInfo,
)
from geocollect.domains.common.errors import ErrorKind, TransportError
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.coordinates.services.coordinate_service import wgs84_to_gcj02
from geocollect.domains.device_data.models.dto import (
    BrowserPayload,
    DeviceDataPayload,
    Gcj02Location,
    LocationPayload,
    Wgs84Location,
)

logger = logging.getLogger(__name__)

# 定位失敗時顯示給使用者的訊息
FAILURE_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.CAPABILITY_UNAVAILABLE: "当前浏览器不支持定位",
    ErrorKind.INTERACTION_WINDOW_EXPIRED: '请点击"重新采集"按钮开始定位',
    ErrorKind.PERMISSION_DENIED: "定位权限被拒绝",
    ErrorKind.POSITION_UNAVAILABLE: "定位服务不可用（请检查GPS是否开启）",
    ErrorKind.TIMEOUT: "定位超时（请检查网络连接和GPS信号）",
}

HINT_INTERACTION_REQUIRED = (
    "需要用户交互：微信浏览器要求必须在用户点击按钮后的短时间内请求定位权限。"
    '请确保手机GPS已开启，点击"重新采集"按钮，在弹出的权限请求中选择"允许"，然后等待定位完成。'
)
HINT_PERMISSION_EMBEDDED = (
    '请在微信中依次进入"设置 > 通用 > 功能"开启位置信息，'
    '或在手机系统设置中为微信开启位置权限，然后返回此页面点击"重新采集"。'
)
HINT_PERMISSION = "请在浏览器或系统设置中允许本页面获取位置，然后点击\"重新采集\"。"
HINT_POSITION_UNAVAILABLE = "请确保您的手机GPS服务已开启，并在信号良好的位置重试。"
HINT_TIMEOUT = "定位超时，请确保网络连接良好，并在户外开阔地带重试。"


def _now_ms() -> int:
    return int(time.time() * 1000)


class CollectorService:
    """採集流程：定位 → WGS84 轉 GCJ02 → 查詢地址 → 保存

    每個階段都會發布人類可讀的狀態訊息；定位失敗時仍嘗試保存
    不含位置的設備資料。
    """

    def __init__(
        self,
        acquirer: PositionAcquirer,
        backend: BackendClientInterface,
        device_info: DeviceInfo,
        on_status: Optional[Callable[[str], None]] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self.acquirer = acquirer
        self.backend = backend
        self.device_info = device_info
        self.on_status = on_status
        self.clock = clock

    @property
    def embedded(self) -> bool:
        return self.acquirer.environment == RuntimeEnvironment.EMBEDDED_WEBVIEW

    def _publish(self, report: CollectionReport, message: str) -> None:
        report.status = message
        report.statuses.append(message)
        logger.info(f"採集狀態: {message}")
        if self.on_status is not None:
            self.on_status(message)

    async def collect(self, last_interaction_ms: Optional[int] = None) -> CollectionReport:
        report = CollectionReport()
        self._publish(report, "准备采集")
        if self.embedded:
            self._publish(report, "正在获取定位（微信浏览器，可能需要几秒钟）...")
        else:
            self._publish(report, "正在获取定位（可能需要几秒钟）...")

        result = await self.acquirer.acquire(last_interaction_ms)
        if result.is_failure():
            await self._handle_acquisition_failure(
                report, ErrorKind(result.error_code), result.error_message
            )
            return report

        fix: PositionFix = result.data
        report.fix = fix
        payload = self._build_payload(fix)
        report.payload = payload
        logger.info(f"定位精度: {describe_accuracy(fix.accuracy_meters)}")

        await self._fetch_address(report, payload)

        self._publish(report, "正在保存数据...")
        try:
            response = await self.backend.save_device_data(payload)
        except (TransportError, ValueError) as e:
            logger.error(f"保存採集資料失敗: {e}")
            report.error_kind = ErrorKind.TRANSPORT_ERROR
            self._publish(report, f"保存失败: {e}")
            return report

        if response.ok:
            report.saved = True
            self._publish(report, "采集完成！")
        else:
            logger.warning(f"後端拒絕保存: {response.code} {response.msg}")
            self._publish(report, "保存失败")
        return report

    async def _fetch_address(
        self, report: CollectionReport, payload: DeviceDataPayload
    ) -> None:
        """查詢地址並寫入 payload；失敗不影響後續保存"""
        gcj = payload.location.gcj02
        # 境外未做修正，座標仍是 WGS84
        system = CoordinateSystem.GCJ02 if gcj.applicable else CoordinateSystem.WGS84
        self._publish(report, "正在获取地址信息...")
        try:
            response = await self.backend.fetch_address(
                GeoCoordinate(system=system, latitude=gcj.lat, longitude=gcj.lon)
            )
        except (TransportError, ValueError) as e:
            logger.warning(f"查詢地址失敗: {e}")
            self._publish(report, f"地址获取失败: {e}")
            return

        if response.ok and response.address:
            payload.address = response.address
            payload.baidu_address = response.baidu
            payload.tencent_address = response.tencent
            self._publish(report, "地址获取成功")
        else:
            self._publish(report, "地址获取失败")

    def _build_payload(
        self, fix: Optional[PositionFix], error: Optional[str] = None
    ) -> DeviceDataPayload:
        location = LocationPayload()
        if fix is not None:
            conversion = wgs84_to_gcj02(fix.latitude, fix.longitude)
            location = LocationPayload(
                wgs84=Wgs84Location(
                    lat=fix.latitude, lon=fix.longitude, accuracy=fix.accuracy_meters
                ),
                gcj02=Gcj02Location(
                    lat=conversion.latitude,
                    lon=conversion.longitude,
                    applicable=conversion.applicable,
                ),
            )
        return DeviceDataPayload(
            timestamp=self.clock(),
            location=location,
            device=self.device_info.to_payload(),
            browser=BrowserPayload(ua=self.device_info.ua),
            error=error,
        )

    def _hint_for(self, kind: ErrorKind) -> Optional[str]:
        if kind == ErrorKind.INTERACTION_WINDOW_EXPIRED:
            return HINT_INTERACTION_REQUIRED
        if kind == ErrorKind.PERMISSION_DENIED:
            return HINT_PERMISSION_EMBEDDED if self.embedded else HINT_PERMISSION
        if not self.embedded:
            return None
        if kind == ErrorKind.POSITION_UNAVAILABLE:
            return HINT_POSITION_UNAVAILABLE
        if kind == ErrorKind.TIMEOUT:
            return HINT_TIMEOUT
        return None

    async def _handle_acquisition_failure(
        self, report: CollectionReport, kind: ErrorKind, detail: Optional[str]
    ) -> None:
        message = FAILURE_MESSAGES.get(kind)
        if message is None:
            message = f"定位失败: {detail}" if detail else "定位失败"
        if kind == ErrorKind.PERMISSION_DENIED and self.embedded:
            message = "定位权限被拒绝（微信浏览器）"

        report.error_kind = kind
        report.hint = self._hint_for(kind)
        self._publish(report, message)

        # 即使定位失敗，也嘗試保存設備資訊
        payload = self._build_payload(None, error=message)
        report.payload = payload
        try:
            response = await self.backend.save_device_data(payload)
            report.saved = response.ok
        except (TransportError, ValueError) as e:
            logger.warning(f"定位失敗後保存設備資訊失敗: {e}")
