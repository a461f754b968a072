"""
座標領域模組

WGS84、GCJ02（火星座標）與 BD09（百度座標）之間的基準轉換。
"""

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
    DatumConversion,
)
from geocollect.domains.coordinates.interfaces.coordinate_service_interface import (
    CoordinateServiceInterface,
)
from geocollect.domains.coordinates.services.coordinate_service import (
    CoordinateService,
    out_of_china,
    wgs84_to_gcj02,
    gcj02_to_bd09,
)
