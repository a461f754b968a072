import logging
from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple

from geocollect.domains.common.errors import TransportError
from geocollect.domains.coordinates.models.coordinate_model import GeoCoordinate
from geocollect.domains.geocoding.interfaces.geocoding_provider_interface import (
    ReverseGeocodingProviderInterface,
)
from geocollect.domains.geocoding.interfaces.http_client_interface import (
    HttpClientInterface,
)
from geocollect.domains.geocoding.models.address_model import AddressResult

logger = logging.getLogger(__name__)

ADDRESS_SEPARATOR = "，"


def text_field(value: Any) -> str:
    """將供應商欄位標準化為字串

    None、空列表（高德以 [] 表示空值）與其他非純量值一律視為空字串。
    """
    if value is None or isinstance(value, (list, dict)):
        return ""
    if isinstance(value, bool):
        return ""
    return str(value).strip()


def title_field(value: Any, key: str = "title") -> str:
    """取出 {"title": ...} 形式巢狀物件的名稱"""
    if isinstance(value, dict):
        return text_field(value.get(key))
    return ""


def prepend_names(address: str, *names: str) -> str:
    """依序將名稱前置到地址，後給的名稱排在最前面"""
    result = address
    for name in names:
        if name:
            result = f"{name}{ADDRESS_SEPARATOR}{result}" if result else name
    return result


def first_item(items: Any) -> Dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


class BaseReverseGeocodingProvider(ReverseGeocodingProviderInterface):
    """供應商共用流程：組請求、呼叫、依供應商自己的成功判斷解析"""

    def __init__(
        self,
        http_client: HttpClientInterface,
        api_key: str,
        url: str,
        timeout: float,
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    @abstractmethod
    def build_params(self, coordinate: GeoCoordinate) -> Dict[str, Any]:
        """組合查詢參數"""
        pass

    @abstractmethod
    def parse(self, payload: Any) -> Optional[AddressResult]:
        """檢查供應商的成功判斷並標準化回應；失敗時返回 None"""
        pass

    async def reverse_geocode(self, coordinate: GeoCoordinate) -> Optional[AddressResult]:
        name = self.provider_id.value
        if not self.api_key:
            logger.debug(f"{name}: API key not configured, skipping request")
            return None

        try:
            payload = await self.http_client.get_json(
                self.url, params=self.build_params(coordinate), timeout=self.timeout
            )
        except TransportError as e:
            logger.debug(f"{name}: reverse geocoding request failed: {e}")
            return None

        result = self.parse(payload)
        if result is None:
            logger.debug(f"{name}: provider reported failure: {self._describe(payload)}")
        return result

    @staticmethod
    def _describe(payload: Any) -> Tuple[Any, Any]:
        if isinstance(payload, dict):
            return payload.get("status"), payload.get("info") or payload.get("message")
        return None, type(payload).__name__
