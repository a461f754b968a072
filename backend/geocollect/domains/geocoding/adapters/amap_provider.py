from typing import Any, Dict, Optional

from geocollect.core.config import AMAP_KEY, AMAP_REGEO_URL, AMAP_TIMEOUT
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.geocoding.adapters.base_provider import (
    BaseReverseGeocodingProvider,
    first_item,
    prepend_names,
    text_field,
    title_field,
)
from geocollect.domains.geocoding.interfaces.http_client_interface import (
    HttpClientInterface,
)
from geocollect.domains.geocoding.models.address_model import AddressResult, ProviderId


class AmapProvider(BaseReverseGeocodingProvider):
    """高德地圖逆地理編碼 (GCJ02)；成功判斷為 status == "1"

    回應中空值以 [] 表示，解析時一律轉為空字串。
    """

    provider_id = ProviderId.AMAP
    datum = CoordinateSystem.GCJ02

    def __init__(
        self,
        http_client: HttpClientInterface,
        api_key: str = AMAP_KEY,
        url: str = AMAP_REGEO_URL,
        timeout: float = AMAP_TIMEOUT,
    ):
        super().__init__(http_client, api_key, url, timeout)

    def build_params(self, coordinate: GeoCoordinate) -> Dict[str, Any]:
        # 半徑 100 米、extensions=all 以取得道路與 POI
        return {
            "key": self.api_key,
            "location": f"{coordinate.longitude},{coordinate.latitude}",
            "output": "json",
            "radius": 100,
            "extensions": "all",
            "roadlevel": 1,
            "poitype": "120000|150000|160000",
        }

    def parse(self, payload: Any) -> Optional[AddressResult]:
        if not isinstance(payload, dict) or payload.get("status") != "1":
            return None
        regeocode = payload.get("regeocode")
        if not isinstance(regeocode, dict):
            return None

        component = regeocode.get("addressComponent") or {}
        if not isinstance(component, dict):
            component = {}
        road_name = text_field(first_item(regeocode.get("roads")).get("name"))
        poi_name = text_field(first_item(regeocode.get("pois")).get("name"))

        street_number = component.get("streetNumber")
        street = (
            text_field(component.get("street"))
            or title_field(street_number, "street")
            or road_name
        )
        province = text_field(component.get("province"))

        return AddressResult(
            formatted_address=prepend_names(
                text_field(regeocode.get("formatted_address")), road_name, poi_name
            ),
            country=text_field(component.get("country")),
            province=province,
            city=text_field(component.get("city")) or province,
            district=text_field(component.get("district")),
            street=street,
            admin_code=text_field(component.get("adcode")),
            city_code=text_field(component.get("citycode")),
            provider_specific={
                "township": text_field(component.get("township")),
                "neighborhood": title_field(component.get("neighborhood"), "name"),
                "building": title_field(component.get("building"), "name"),
            },
        )
