from enum import Enum
from pydantic import BaseModel, Field

from geocollect.domains.common.models.base_model import ValueObject


class CoordinateSystem(str, Enum):
    """座標系統（大地基準）"""

    WGS84 = "WGS84"
    GCJ02 = "GCJ02"
    BD09 = "BD09"


class GeoCoordinate(ValueObject):
    """地理座標，帶有所屬座標系統標籤；轉換時產生新物件，不會原地修改"""

    system: CoordinateSystem = Field(..., description="座標系統")
    latitude: float = Field(..., description="緯度，範圍 -90 到 90")
    longitude: float = Field(..., description="經度，範圍 -180 到 180")


class DatumConversion(BaseModel):
    """單次基準轉換結果"""

    latitude: float = Field(..., description="轉換後緯度")
    longitude: float = Field(..., description="轉換後經度")
    applicable: bool = Field(
        True, description="轉換是否適用；False 表示座標原樣返回"
    )


class LatLonInput(BaseModel):
    """座標轉換 API 的輸入"""

    latitude: float = Field(..., ge=-90, le=90, description="緯度")
    longitude: float = Field(..., ge=-180, le=180, description="經度")
