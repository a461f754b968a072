import re
from typing import List, Optional
from pydantic import BaseModel, Field

from geocollect.domains.acquisition.models.position_model import PositionFix
from geocollect.domains.common.errors import ErrorKind
from geocollect.domains.device_data.models.dto import (
    DevicePayload,
    DeviceDataPayload,
    NetworkInfo,
    ScreenInfo,
)

UNKNOWN = "未知"

_MODEL_PATTERN = re.compile(
    r"(iPhone|iPad|iPod|SM-|MI|Redmi|HUAWEI|HONOR|Pixel|OnePlus)[^;\)]*", re.IGNORECASE
)
_ANDROID_VERSION = re.compile(r"Android\s([\d\.]+)", re.IGNORECASE)
_IOS_VERSION = re.compile(r"OS\s([\d_]+)", re.IGNORECASE)


class DeviceInfo(BaseModel):
    """由 User-Agent 與螢幕、網路資訊推得的設備描述"""

    ua: str = ""
    os: str = UNKNOWN
    model: str = UNKNOWN
    os_version: str = UNKNOWN
    screen: ScreenInfo = Field(default_factory=ScreenInfo)
    network: NetworkInfo = Field(default_factory=NetworkInfo)

    @classmethod
    def from_user_agent(
        cls,
        ua: Optional[str],
        screen: Optional[ScreenInfo] = None,
        network: Optional[NetworkInfo] = None,
    ) -> "DeviceInfo":
        ua = ua or ""
        os_name = UNKNOWN
        if re.search(r"Android", ua, re.IGNORECASE):
            os_name = "Android"
        elif re.search(r"iPhone|iPad|iPod", ua, re.IGNORECASE):
            os_name = "iOS"

        match = _MODEL_PATTERN.search(ua)
        model = match.group(0) if match else UNKNOWN

        os_version = UNKNOWN
        android = _ANDROID_VERSION.search(ua)
        ios = _IOS_VERSION.search(ua)
        if android:
            os_version = android.group(1)
        elif ios:
            os_version = ios.group(1).replace("_", ".")

        return cls(
            ua=ua,
            os=os_name,
            model=model,
            os_version=os_version,
            screen=screen or ScreenInfo(),
            network=network or NetworkInfo(),
        )

    def to_payload(self) -> DevicePayload:
        return DevicePayload(
            model=self.model,
            os_version=self.os_version,
            screen=self.screen,
            network=self.network,
        )


class CollectionReport(BaseModel):
    """一次 collect() 的結果"""

    status: str = Field("", description="最後一個狀態訊息")
    statuses: List[str] = Field(default_factory=list, description="依序發布的狀態訊息")
    hint: Optional[str] = Field(None, description="可操作的提示，例如開啟定位權限的步驟")
    saved: bool = Field(False, description="資料是否已保存")
    error_kind: Optional[ErrorKind] = Field(None, description="失敗種類")
    fix: Optional[PositionFix] = None
    payload: Optional[DeviceDataPayload] = None
