import logging
import math

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    DatumConversion,
    GeoCoordinate,
)
from geocollect.domains.coordinates.interfaces.coordinate_service_interface import (
    CoordinateServiceInterface,
)

logger = logging.getLogger(__name__)

# --- GCJ02 (火星座標) 參數 ---
PI = 3.1415926535897932384626
A = 6378245.0  # 克拉索夫斯基橢球長半軸 (米)
EE = 0.00669342162296594323  # 偏心率平方

# 適用範圍 (經度 x 緯度)
CHINA_MIN_LON = 72.004
CHINA_MAX_LON = 137.8347
CHINA_MIN_LAT = 0.8293
CHINA_MAX_LAT = 55.8271

# --- BD09 參數 ---
BD09_LON_OFFSET = 0.0065
BD09_LAT_OFFSET = 0.006
BD09_RADIUS_PERTURBATION = 0.00002
BD09_ANGLE_PERTURBATION = 0.000003


def out_of_china(lat: float, lon: float) -> bool:
    """座標是否落在 GCJ02 修正的定義範圍之外"""
    return (
        lon < CHINA_MIN_LON
        or lon > CHINA_MAX_LON
        or lat < CHINA_MIN_LAT
        or lat > CHINA_MAX_LAT
    )


def _transform_lat(x: float, y: float) -> float:
    ret = -100.0 + 2.0 * x + 3.0 * y + 0.2 * y * y + 0.1 * x * y + 0.2 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * PI) + 20.0 * math.sin(2.0 * x * PI)) * 2.0 / 3.0
    ret += (20.0 * math.sin(y * PI) + 40.0 * math.sin(y / 3.0 * PI)) * 2.0 / 3.0
    ret += (160.0 * math.sin(y / 12.0 * PI) + 320.0 * math.sin(y * PI / 30.0)) * 2.0 / 3.0
    return ret


def _transform_lon(x: float, y: float) -> float:
    ret = 300.0 + x + 2.0 * y + 0.1 * x * x + 0.1 * x * y + 0.1 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * PI) + 20.0 * math.sin(2.0 * x * PI)) * 2.0 / 3.0
    ret += (20.0 * math.sin(x * PI) + 40.0 * math.sin(x / 3.0 * PI)) * 2.0 / 3.0
    ret += (150.0 * math.sin(x / 12.0 * PI) + 300.0 * math.sin(x / 30.0 * PI)) * 2.0 / 3.0
    return ret


def wgs84_to_gcj02(lat: float, lon: float) -> DatumConversion:
    """WGS84 轉 GCJ02

    境外座標不做修正，原樣返回並標記 applicable=False，
    呼叫端應直接使用原始座標。
    """
    if out_of_china(lat, lon):
        return DatumConversion(latitude=lat, longitude=lon, applicable=False)

    d_lat = _transform_lat(lon - 105.0, lat - 35.0)
    d_lon = _transform_lon(lon - 105.0, lat - 35.0)
    rad_lat = lat / 180.0 * PI
    magic = math.sin(rad_lat)
    magic = 1 - EE * magic * magic
    sqrt_magic = math.sqrt(magic)
    d_lat = (d_lat * 180.0) / ((A * (1 - EE)) / (magic * sqrt_magic) * PI)
    d_lon = (d_lon * 180.0) / (A / sqrt_magic * math.cos(rad_lat) * PI)
    return DatumConversion(latitude=lat + d_lat, longitude=lon + d_lon, applicable=True)


def gcj02_to_bd09(lat: float, lon: float) -> DatumConversion:
    """GCJ02 轉 BD09（百度座標），對任何輸入皆有定義"""
    x = lon
    y = lat
    z = math.sqrt(x * x + y * y) + BD09_RADIUS_PERTURBATION * math.sin(
        y * math.pi * 3000.0 / 180.0
    )
    theta = math.atan2(y, x) + BD09_ANGLE_PERTURBATION * math.cos(
        x * math.pi * 3000.0 / 180.0
    )
    bd_lon = z * math.cos(theta) + BD09_LON_OFFSET
    bd_lat = z * math.sin(theta) + BD09_LAT_OFFSET
    return DatumConversion(latitude=bd_lat, longitude=bd_lon, applicable=True)


class CoordinateService(CoordinateServiceInterface):
    """座標基準轉換服務實現"""

    def to_gcj02(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        if coordinate.system != CoordinateSystem.WGS84:
            raise ValueError(
                f"GCJ02 conversion expects a WGS84 coordinate, got {coordinate.system.value}"
            )
        result = wgs84_to_gcj02(coordinate.latitude, coordinate.longitude)
        if not result.applicable:
            logger.debug(
                f"Coordinate ({coordinate.latitude}, {coordinate.longitude}) is outside the GCJ02 region; keeping WGS84"
            )
            return coordinate
        return GeoCoordinate(
            system=CoordinateSystem.GCJ02,
            latitude=result.latitude,
            longitude=result.longitude,
        )

    def to_bd09(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        if coordinate.system != CoordinateSystem.GCJ02:
            raise ValueError(
                f"BD09 conversion expects a GCJ02 coordinate, got {coordinate.system.value}"
            )
        result = gcj02_to_bd09(coordinate.latitude, coordinate.longitude)
        return GeoCoordinate(
            system=CoordinateSystem.BD09,
            latitude=result.latitude,
            longitude=result.longitude,
        )
