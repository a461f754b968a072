import asyncio
import logging
from typing import Any, Optional

import aiohttp

from geocollect.core.config import COLLECTOR_BACKEND_URL, COLLECTOR_TIMEOUT
from geocollect.domains.collection.interfaces.backend_client_interface import (
    BackendClientInterface,
)
from geocollect.domains.common.errors import TransportError
from geocollect.domains.coordinates.models.coordinate_model import GeoCoordinate
from geocollect.domains.device_data.models.dto import (
    DeviceDataPayload,
    DeviceDataResponse,
)
from geocollect.domains.geocoding.models.address_model import AddressResponse

logger = logging.getLogger(__name__)


class AiohttpBackendClient(BackendClientInterface):
    """以 aiohttp 呼叫本地後端 /api/v1 的客戶端

    後端在錯誤時也回傳 JSON（ok=false），因此不以 HTTP 狀態判斷成敗。
    """

    def __init__(
        self,
        base_url: str = COLLECTOR_BACKEND_URL,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = COLLECTOR_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self.timeout = timeout

    async def fetch_address(self, coordinate: GeoCoordinate) -> AddressResponse:
        params = {
            "lat": str(coordinate.latitude),
            "lon": str(coordinate.longitude),
            "coordType": coordinate.system.value.lower(),
            "includeSecondary": "true",
        }
        data = await self._request("GET", "/api/v1/address", params=params)
        return AddressResponse.model_validate(data)

    async def save_device_data(self, payload: DeviceDataPayload) -> DeviceDataResponse:
        body = payload.model_dump(mode="json", by_alias=True)
        data = await self._request("POST", "/api/v1/device-data", json=body)
        return DeviceDataResponse.model_validate(data)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            if self._session is not None:
                return await self._send(self._session, method, url, client_timeout, **kwargs)
            async with aiohttp.ClientSession() as session:
                return await self._send(session, method, url, client_timeout, **kwargs)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timeout after {self.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request failed: {e}", url=url) from e

    @staticmethod
    async def _send(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        client_timeout: aiohttp.ClientTimeout,
        **kwargs,
    ) -> Any:
        async with session.request(method, url, timeout=client_timeout, **kwargs) as response:
            logger.debug(f"{method} {url} -> {response.status}")
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise TransportError(
                    f"Invalid JSON response (HTTP {response.status})", url=url
                ) from e
