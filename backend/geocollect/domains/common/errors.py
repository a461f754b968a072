"""
錯誤分類

定位、地址解析與資料上傳共用的錯誤種類與例外。
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure kinds shared by the acquirer, resolver and orchestrator."""

    CAPABILITY_UNAVAILABLE = "CapabilityUnavailable"
    INTERACTION_WINDOW_EXPIRED = "InteractionWindowExpired"
    PERMISSION_DENIED = "PermissionDenied"
    POSITION_UNAVAILABLE = "PositionUnavailable"
    TIMEOUT = "Timeout"
    UNKNOWN = "Unknown"
    ADDRESS_NOT_FOUND = "AddressNotFound"
    PROVIDER_UNAVAILABLE = "ProviderUnavailable"
    TRANSPORT_ERROR = "TransportError"


# W3C GeolocationPositionError codes
_PLATFORM_CODES = {
    1: ErrorKind.PERMISSION_DENIED,
    2: ErrorKind.POSITION_UNAVAILABLE,
    3: ErrorKind.TIMEOUT,
}


class TransportError(Exception):
    """HTTP 呼叫失敗（連線錯誤、逾時、非 200 狀態或無效 JSON）"""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class AcquisitionError(Exception):
    """定位會話的終止性失敗"""

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


class PlatformError(AcquisitionError):
    """定位平台回報的錯誤"""

    @classmethod
    def from_code(cls, code: int, message: str = "") -> "PlatformError":
        return cls(_PLATFORM_CODES.get(code, ErrorKind.UNKNOWN), message)
