from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from geocollect.domains.geocoding.models.address_model import AddressResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Wgs84Location(_CamelModel):
    lat: Optional[float] = None
    lon: Optional[float] = None
    accuracy: Optional[float] = None


class Gcj02Location(_CamelModel):
    lat: Optional[float] = None
    lon: Optional[float] = None
    applicable: bool = False


class LocationPayload(_CamelModel):
    wgs84: Wgs84Location = Field(default_factory=Wgs84Location)
    gcj02: Gcj02Location = Field(default_factory=Gcj02Location)


class ScreenInfo(_CamelModel):
    width: Optional[int] = None
    height: Optional[int] = None
    dpr: Optional[float] = None


class NetworkInfo(_CamelModel):
    type: Optional[str] = None
    effective_type: Optional[str] = Field(None, alias="effectiveType")


class DevicePayload(_CamelModel):
    model: Optional[str] = None
    os_version: Optional[str] = Field(None, alias="osVersion")
    screen: ScreenInfo = Field(default_factory=ScreenInfo)
    network: NetworkInfo = Field(default_factory=NetworkInfo)


class BrowserPayload(_CamelModel):
    ua: Optional[str] = None


class DeviceDataPayload(_CamelModel):
    """客戶端上傳的採集資料"""

    timestamp: Optional[int] = Field(None, description="採集時間（毫秒）")
    location: LocationPayload = Field(default_factory=LocationPayload)
    device: DevicePayload = Field(default_factory=DevicePayload)
    browser: BrowserPayload = Field(default_factory=BrowserPayload)
    address: Optional[AddressResult] = None
    baidu_address: Optional[AddressResult] = None
    tencent_address: Optional[AddressResult] = None
    error: Optional[str] = None


class DeviceDataResponse(BaseModel):
    ok: bool
    id: Optional[int] = None
    code: Optional[str] = None
    msg: Optional[str] = None
