from abc import ABC, abstractmethod

from geocollect.domains.coordinates.models.coordinate_model import GeoCoordinate


class CoordinateServiceInterface(ABC):
    """座標基準轉換服務介面"""

    @abstractmethod
    def to_gcj02(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        """將 WGS84 座標轉換為 GCJ02 座標；境外座標原樣返回（保留 WGS84 標籤）"""
        pass

    @abstractmethod
    def to_bd09(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        """將 GCJ02 座標轉換為 BD09 座標"""
        pass
