from abc import ABC, abstractmethod

from geocollect.domains.device_data.models.device_record_model import DeviceRecord


class DeviceDataRepository(ABC):
    """設備資料存儲庫接口"""

    @abstractmethod
    async def create(self, record: DeviceRecord) -> DeviceRecord:
        """寫入一筆採集記錄，返回含 ID 的記錄"""
        pass
