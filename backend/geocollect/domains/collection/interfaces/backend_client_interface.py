from abc import ABC, abstractmethod

from geocollect.domains.coordinates.models.coordinate_model import GeoCoordinate
from geocollect.domains.device_data.models.dto import (
    DeviceDataPayload,
    DeviceDataResponse,
)
from geocollect.domains.geocoding.models.address_model import AddressResponse


class BackendClientInterface(ABC):
    """採集客戶端對本地後端的呼叫"""

    @abstractmethod
    async def fetch_address(self, coordinate: GeoCoordinate) -> AddressResponse:
        """查詢 GCJ02 座標的地址（含次要供應商）

        Raises:
            TransportError: 後端無法連線或回應無效
        """
        pass

    @abstractmethod
    async def save_device_data(self, payload: DeviceDataPayload) -> DeviceDataResponse:
        """上傳一次採集的資料

        Raises:
            TransportError: 後端無法連線或回應無效
        """
        pass
