from typing import Any, Dict, Optional

from geocollect.core.config import TENCENT_KEY, TENCENT_REGEO_URL, TENCENT_TIMEOUT
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


class TencentProvider(BaseReverseGeocodingProvider):
    """騰訊地圖逆地址解析 (GCJ02)；成功判斷為 status == 0，沒有城市代碼"""

    provider_id = ProviderId.TENCENT
    datum = CoordinateSystem.GCJ02

    def __init__(
        self,
        http_client: HttpClientInterface,
        api_key: str = TENCENT_KEY,
        url: str = TENCENT_REGEO_URL,
        timeout: float = TENCENT_TIMEOUT,
    ):
        super().__init__(http_client, api_key, url, timeout)

    def build_params(self, coordinate: GeoCoordinate) -> Dict[str, Any]:
        return {
            "location": f"{coordinate.latitude},{coordinate.longitude}",
            "key": self.api_key,
            "get_poi": 1,
            "output": "json",
        }

    def parse(self, payload: Any) -> Optional[AddressResult]:
        if not isinstance(payload, dict) or payload.get("status") != 0:
            return None
        result = payload.get("result")
        if not isinstance(result, dict):
            return None

        component = result.get("address_component") or {}
        reference = result.get("address_reference") or {}
        ad_info = result.get("ad_info") or {}

        address = text_field(result.get("recommend")) or text_field(result.get("address"))
        # 以 POI 為基準的標準地址優先
        standard = title_field(result.get("formatted_addresses"), "standard_address")
        if standard:
            address = standard
        poi_title = text_field(first_item(result.get("pois")).get("title"))
        province = text_field(component.get("province"))

        return AddressResult(
            formatted_address=prepend_names(address, poi_title),
            country=text_field(component.get("nation")),
            province=province,
            city=text_field(component.get("city")) or province,
            district=text_field(component.get("district")),
            street=text_field(component.get("street")),
            admin_code=text_field(ad_info.get("adcode")) or text_field(component.get("adcode")),
            city_code="",
            provider_specific={
                "street_number": text_field(component.get("street_number")),
                "town": title_field(reference.get("town")) or title_field(component.get("town")),
                "landmark_l1": title_field(reference.get("landmark_l1"))
                or title_field(result.get("landmark_l1")),
                "landmark_l2": title_field(reference.get("landmark_l2"))
                or title_field(result.get("landmark_l2")),
            },
        )
