import logging
from sqlalchemy.ext.asyncio import AsyncSession

from geocollect.domains.device_data.interfaces.device_data_repository import (
    DeviceDataRepository,
)
from geocollect.domains.device_data.models.device_record_model import DeviceRecord

logger = logging.getLogger(__name__)


class SQLModelDeviceDataRepository(DeviceDataRepository):
    """SQLModel 設備資料存儲庫實現"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: DeviceRecord) -> DeviceRecord:
        logger.debug(f"Inserting device record (timestamp={record.timestamp}, ip={record.ip})")
        try:
            self.session.add(record)
            await self.session.commit()
            await self.session.refresh(record)
            logger.info(f"Successfully stored device record with ID {record.id}")
            return record
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error storing device record: {e}", exc_info=True)
            raise  # 重新拋出異常，讓上層處理
