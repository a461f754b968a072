from abc import ABC, abstractmethod
from typing import Optional

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.geocoding.models.address_model import AddressResult, ProviderId


class ReverseGeocodingProviderInterface(ABC):
    """逆地理編碼供應商介面"""

    provider_id: ProviderId
    datum: CoordinateSystem  # 供應商要求的輸入座標系統
    timeout: float  # 單次呼叫逾時 (秒)

    @abstractmethod
    async def reverse_geocode(self, coordinate: GeoCoordinate) -> Optional[AddressResult]:
        """查詢座標對應的地址，供應商不可用時返回 None"""
        pass
