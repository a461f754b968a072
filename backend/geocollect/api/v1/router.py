from fastapi import APIRouter

from geocollect.domains.coordinates.api.coordinate_api import (
    router as coordinates_router,
)
from geocollect.domains.geocoding.api.geocoding_api import router as geocoding_router
from geocollect.domains.device_data.api.device_data_api import (
    router as device_data_router,
)

api_router = APIRouter()

api_router.include_router(
    coordinates_router, prefix="/coordinates", tags=["Coordinates"]
)
api_router.include_router(geocoding_router, prefix="/address", tags=["Address"])
api_router.include_router(
    device_data_router, prefix="/device-data", tags=["Device Data"]
)
