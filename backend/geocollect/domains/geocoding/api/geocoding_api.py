import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.geocoding.models.address_model import (
    AddressResponse,
    ProviderId,
)
from geocollect.domains.geocoding.services.address_service import (
    AddressResolverService,
    create_address_resolver,
)

logger = logging.getLogger(__name__)
router = APIRouter()

_COORD_TYPES = {
    "gcj02": CoordinateSystem.GCJ02,
    "wgs84": CoordinateSystem.WGS84,
}

# 創建地址解析服務的單例
_address_resolver: Optional[AddressResolverService] = None


def get_address_resolver() -> AddressResolverService:
    """獲取地址解析服務實例，用於依賴注入"""
    global _address_resolver
    if _address_resolver is None:
        _address_resolver = create_address_resolver()
    return _address_resolver


def _error(status_code: int, code: str, msg: Optional[str] = None) -> JSONResponse:
    body = {"ok": False, "code": code}
    if msg:
        body["msg"] = msg
    return JSONResponse(status_code=status_code, content=body)


@router.get("", response_model=AddressResponse)
async def read_address(
    lat: Optional[float] = Query(None, description="緯度"),
    lon: Optional[float] = Query(None, description="經度"),
    coord_type: str = Query("gcj02", alias="coordType", description="gcj02 或 wgs84"),
    include_secondary: bool = Query(
        True, alias="includeSecondary", description="是否同時查詢百度與騰訊"
    ),
    resolver: AddressResolverService = Depends(get_address_resolver),
) -> Any:
    """
    透過經緯度取得地址：回傳主要供應商地址與（可選的）次要供應商地址。
    """
    if not lat or not lon:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_params", "缺少经纬度参数")
    system = _COORD_TYPES.get(coord_type.lower())
    if system is None:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_params", f"不支持的坐标类型: {coord_type}")

    logger.info(f"API: Received address request for ({lat}, {lon}) [{system.value}]")
    try:
        coordinate = GeoCoordinate(system=system, latitude=lat, longitude=lon)
        result = await resolver.resolve(coordinate, include_secondary=include_secondary)
    except Exception as e:
        logger.error(f"API Error resolving address: {e}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "server_error", str(e))

    if result.is_failure():
        return AddressResponse(ok=False, code="address_not_found")

    outcome = result.data
    return AddressResponse(
        ok=True,
        address=outcome.primary,
        baidu=outcome.secondary.get(ProviderId.BAIDU),
        tencent=outcome.secondary.get(ProviderId.TENCENT),
    )
