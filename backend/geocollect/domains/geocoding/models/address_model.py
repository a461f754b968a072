from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, Field


class ProviderId(str, Enum):
    """逆地理編碼供應商"""

    AMAP = "amap"  # 高德，主要供應商
    BAIDU = "baidu"  # 百度，次要供應商 (BD09)
    TENCENT = "tencent"  # 騰訊，次要供應商


class AddressResult(BaseModel):
    """單一供應商的標準化地址；不同供應商的結果不會合併"""

    formatted_address: str = Field("", description="完整地址（可能前置 POI / 道路名稱）")
    country: str = Field("", description="國家")
    province: str = Field("", description="省份")
    city: str = Field("", description="城市，直轄市時退回省份")
    district: str = Field("", description="區/縣")
    street: str = Field("", description="街道")
    admin_code: str = Field("", description="行政區劃代碼")
    city_code: str = Field("", description="城市代碼")
    provider_specific: Dict[str, str] = Field(
        default_factory=dict, description="供應商特有欄位"
    )


class ResolutionOutcome(BaseModel):
    """一次地址解析的結果，依供應商分開保存"""

    primary: Optional[AddressResult] = Field(None, description="主要供應商結果")
    secondary: Dict[ProviderId, Optional[AddressResult]] = Field(
        default_factory=dict, description="次要供應商結果，失敗時為 None"
    )


class AddressResponse(BaseModel):
    """/address API 回應"""

    ok: bool
    code: Optional[str] = None
    address: Optional[AddressResult] = None
    baidu: Optional[AddressResult] = None
    tencent: Optional[AddressResult] = None
