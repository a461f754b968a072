"""
設備資料領域模組

將一次採集（座標、三個供應商的地址、設備與網路資訊）整理為扁平記錄並保存。
"""

from geocollect.domains.device_data.models.device_record_model import DeviceRecord
from geocollect.domains.device_data.models.dto import DeviceDataPayload
from geocollect.domains.device_data.services.device_data_service import (
    DeviceDataService,
)
from geocollect.domains.device_data.interfaces.device_data_repository import (
    DeviceDataRepository,
)
from geocollect.domains.device_data.adapters.sqlmodel_device_data_repository import (
    SQLModelDeviceDataRepository,
)
