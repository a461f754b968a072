import logging
from fastapi import APIRouter, HTTPException, status

from geocollect.domains.coordinates.models.coordinate_model import (
    DatumConversion,
    LatLonInput,
)
from geocollect.domains.coordinates.services.coordinate_service import (
    gcj02_to_bd09,
    wgs84_to_gcj02,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/wgs84-to-gcj02", response_model=DatumConversion)
async def convert_wgs84_to_gcj02(point: LatLonInput) -> DatumConversion:
    """將 WGS84 座標轉換為 GCJ02 座標"""
    try:
        result = wgs84_to_gcj02(point.latitude, point.longitude)
        logger.info(f"Converted WGS84 {point} to GCJ02 {result}")
        return result
    except Exception as e:
        logger.error(f"Error converting WGS84 to GCJ02: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Coordinate conversion error: {str(e)}",
        )


@router.post("/gcj02-to-bd09", response_model=DatumConversion)
async def convert_gcj02_to_bd09(point: LatLonInput) -> DatumConversion:
    """將 GCJ02 座標轉換為 BD09 座標"""
    try:
        result = gcj02_to_bd09(point.latitude, point.longitude)
        logger.info(f"Converted GCJ02 {point} to BD09 {result}")
        return result
    except Exception as e:
        logger.error(f"Error converting GCJ02 to BD09: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Coordinate conversion error: {str(e)}",
        )
