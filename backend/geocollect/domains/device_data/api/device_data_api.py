import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from geocollect.api.deps import get_session
from geocollect.domains.device_data.adapters.sqlmodel_device_data_repository import (
    SQLModelDeviceDataRepository,
)
from geocollect.domains.device_data.models.dto import (
    DeviceDataPayload,
    DeviceDataResponse,
)
from geocollect.domains.device_data.services.device_data_service import (
    DeviceDataService,
)
from geocollect.domains.geocoding.api.geocoding_api import get_address_resolver
from geocollect.domains.geocoding.services.address_service import (
    AddressResolverService,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# 依賴注入函數，創建設備資料服務實例
async def get_device_data_service(
    session: AsyncSession = Depends(get_session),
    resolver: AddressResolverService = Depends(get_address_resolver),
) -> DeviceDataService:
    """獲取設備資料服務實例，用於依賴注入"""
    repository = SQLModelDeviceDataRepository(session=session)
    return DeviceDataService(repository=repository, address_resolver=resolver)


def get_client_ip(request: Request) -> Optional[str]:
    """X-Forwarded-For 的第一跳，否則為連線對端位址"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post("", response_model=DeviceDataResponse)
async def create_device_data(
    *,
    request: Request,
    payload: DeviceDataPayload,
    device_data_service: DeviceDataService = Depends(get_device_data_service),
) -> Any:
    """
    保存一次採集的設備資料（位置、地址、設備資訊）。
    """
    ip = get_client_ip(request)
    logger.info(f"API: Received device data from {ip}")
    try:
        record = await device_data_service.save(payload, ip)
        return DeviceDataResponse(ok=True, id=record.id)
    except Exception as e:
        logger.error(f"保存到数据库失败 - IP: {ip}, 错误: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "code": "save_failed", "msg": str(e) or "数据库保存失败"},
        )
