from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from geocollect.domains.common.models.base_model import ValueObject
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)

# 平台未回報精度時使用的哨兵值（米）
ACCURACY_SENTINEL = 9999.0


class AcquisitionState(str, Enum):
    """定位會話狀態"""

    IDLE = "Idle"
    AWAITING_FIX = "AwaitingFix"
    REFINING = "Refining"
    RESOLVED = "Resolved"
    FAILED = "Failed"


class RuntimeEnvironment(str, Enum):
    """執行環境；內嵌 WebView 需要近期的使用者互動才能請求定位"""

    EMBEDDED_WEBVIEW = "embedded_webview"
    STANDALONE_BROWSER = "standalone_browser"


class PositioningOptions(BaseModel):
    """定位請求參數"""

    enable_high_accuracy: bool = Field(True, description="是否要求高精度")
    maximum_age_ms: int = Field(0, ge=0, description="可接受的快取定位最大年齡（毫秒）")
    timeout_ms: int = Field(30000, gt=0, description="單次請求逾時（毫秒）")


class PositionFix(ValueObject):
    """單次定位結果（WGS84），建立後不可變"""

    coordinate: GeoCoordinate = Field(..., description="WGS84 座標")
    accuracy_meters: float = Field(..., ge=0, description="95% 信賴半徑（米）")
    captured_at_ms: int = Field(..., description="平台回報的定位時間（毫秒）")

    @classmethod
    def from_platform(
        cls,
        latitude: float,
        longitude: float,
        accuracy: Optional[float],
        timestamp_ms: int,
    ) -> "PositionFix":
        """由平台回報值建立；精度缺失或為 0 時以哨兵值代替"""
        return cls(
            coordinate=GeoCoordinate(
                system=CoordinateSystem.WGS84,
                latitude=latitude,
                longitude=longitude,
            ),
            accuracy_meters=accuracy or ACCURACY_SENTINEL,
            captured_at_ms=int(timestamp_ms),
        )

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude
