from typing import Any, Dict, Optional

from geocollect.core.config import BAIDU_KEY, BAIDU_REGEO_URL, BAIDU_TIMEOUT
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.geocoding.adapters.base_provider import (
    BaseReverseGeocodingProvider,
    first_item,
    prepend_names,
    text_field,
)
from geocollect.domains.geocoding.interfaces.http_client_interface import (
    HttpClientInterface,
)
from geocollect.domains.geocoding.models.address_model import AddressResult, ProviderId


class BaiduProvider(BaseReverseGeocodingProvider):
    """百度地圖逆地理編碼，座標必須是 BD09；成功判斷為 status == 0"""

    provider_id = ProviderId.BAIDU
    datum = CoordinateSystem.BD09

    def __init__(
        self,
        http_client: HttpClientInterface,
        api_key: str = BAIDU_KEY,
        url: str = BAIDU_REGEO_URL,
        timeout: float = BAIDU_TIMEOUT,
    ):
        super().__init__(http_client, api_key, url, timeout)

    def build_params(self, coordinate: GeoCoordinate) -> Dict[str, Any]:
        return {
            "ak": self.api_key,
            "output": "json",
            "coordtype": "bd09ll",
            "location": f"{coordinate.latitude},{coordinate.longitude}",
            "radius": 100,
            "extensions_poi": 1,
        }

    def parse(self, payload: Any) -> Optional[AddressResult]:
        if not isinstance(payload, dict) or payload.get("status") != 0:
            return None
        result = payload.get("result")
        if not isinstance(result, dict):
            return None

        component = result.get("addressComponent") or {}
        address = text_field(result.get("formatted_address")) or text_field(
            result.get("sematic_description")
        )
        poi_name = text_field(first_item(result.get("pois")).get("name"))
        province = text_field(component.get("province"))

        return AddressResult(
            formatted_address=prepend_names(address, poi_name),
            country=text_field(component.get("country")),
            province=province,
            city=text_field(component.get("city")) or province,
            district=text_field(component.get("district")),
            street=text_field(component.get("street")),
            admin_code=text_field(component.get("adcode")),
            city_code=text_field(component.get("citycode"))
            or text_field(result.get("cityCode")),
            provider_specific={
                "town": text_field(component.get("town")),
                "town_code": text_field(component.get("town_code")),
                "direction": text_field(component.get("direction")),
                "distance": text_field(component.get("distance")),
            },
        )
