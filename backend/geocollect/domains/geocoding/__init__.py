"""
地址解析領域模組

向高德（主要）、百度與騰訊（次要）三個逆地理編碼供應商並行查詢，
將各自的回應標準化為共同的地址結構。
"""

from geocollect.domains.geocoding.models.address_model import (
    AddressResult,
    ProviderId,
    ResolutionOutcome,
)
from geocollect.domains.geocoding.services.address_service import (
    AddressResolverService,
    create_address_resolver,
)
