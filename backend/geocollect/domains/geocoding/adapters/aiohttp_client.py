import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from geocollect.domains.common.errors import TransportError
from geocollect.domains.geocoding.interfaces.http_client_interface import (
    HttpClientInterface,
)

logger = logging.getLogger(__name__)


class AiohttpJsonClient(HttpClientInterface):
    """以 aiohttp 實作的 JSON GET 客戶端，每次呼叫各自帶逾時"""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session

    async def get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None, timeout: float = 5.0
    ) -> Any:
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        try:
            if self._session is not None:
                return await self._fetch(self._session, url, params, client_timeout)
            async with aiohttp.ClientSession() as session:
                return await self._fetch(session, url, params, client_timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timeout after {timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request failed: {e}", url=url) from e

    @staticmethod
    async def _fetch(
        session: aiohttp.ClientSession,
        url: str,
        params: Optional[Dict[str, Any]],
        client_timeout: aiohttp.ClientTimeout,
    ) -> Any:
        async with session.get(url, params=params, timeout=client_timeout) as response:
            if response.status != 200:
                raise TransportError(f"Unexpected HTTP status {response.status}", url=url)
            try:
                # 部分供應商回傳 text/javascript，不檢查 content-type
                return await response.json(content_type=None)
            except ValueError as e:
                raise TransportError("Invalid JSON response", url=url) from e
