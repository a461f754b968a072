import asyncio
import logging
from typing import Dict, Optional, Sequence

from geocollect.domains.common.errors import ErrorKind
from geocollect.domains.common.utils.result import Result
from geocollect.domains.coordinates.interfaces.coordinate_service_interface import (
    CoordinateServiceInterface,
)
from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.coordinates.services.coordinate_service import (
    CoordinateService,
)
from geocollect.domains.geocoding.adapters.aiohttp_client import AiohttpJsonClient
from geocollect.domains.geocoding.adapters.amap_provider import AmapProvider
from geocollect.domains.geocoding.adapters.baidu_provider import BaiduProvider
from geocollect.domains.geocoding.adapters.tencent_provider import TencentProvider
from geocollect.domains.geocoding.interfaces.geocoding_provider_interface import (
    ReverseGeocodingProviderInterface,
)
from geocollect.domains.geocoding.interfaces.http_client_interface import (
    HttpClientInterface,
)
from geocollect.domains.geocoding.models.address_model import (
    AddressResult,
    ProviderId,
    ResolutionOutcome,
)

logger = logging.getLogger(__name__)


class AddressResolverService:
    """多供應商地址解析服務

    主要供應商失敗即解析失敗；次要供應商失敗只會讓對應欄位為 None。
    同一次解析的所有供應商呼叫並行執行。
    """

    def __init__(
        self,
        primary: ReverseGeocodingProviderInterface,
        secondaries: Sequence[ReverseGeocodingProviderInterface] = (),
        coordinate_service: Optional[CoordinateServiceInterface] = None,
    ):
        self.primary = primary
        self.secondaries = list(secondaries)
        self.coordinate_service = coordinate_service or CoordinateService()

    async def resolve(
        self, coordinate: GeoCoordinate, include_secondary: bool = True
    ) -> Result[ResolutionOutcome]:
        """解析座標的地址

        Args:
            coordinate: GCJ02 或 WGS84 座標（WGS84 會先轉換為 GCJ02）
            include_secondary: 是否同時查詢次要供應商

        Returns:
            成功時為 ResolutionOutcome；主要供應商失敗時錯誤代碼為 AddressNotFound

        Raises:
            ValueError: 輸入為 BD09 座標（本系統不提供反向轉換）
        """
        base = self._normalize(coordinate)
        providers = [self.primary] + (self.secondaries if include_secondary else [])
        results = await self._query_all(providers, base)

        primary = results[0]
        if primary is None:
            logger.warning(
                f"Primary provider {self.primary.provider_id.value} returned no address for ({base.latitude}, {base.longitude})"
            )
            return Result.failure(
                ErrorKind.ADDRESS_NOT_FOUND.value,
                "Primary reverse geocoding provider returned no address",
                details={"latitude": base.latitude, "longitude": base.longitude},
            )

        secondary = {p.provider_id: r for p, r in zip(providers[1:], results[1:])}
        return Result.success(ResolutionOutcome(primary=primary, secondary=secondary))

    async def resolve_secondary(
        self, coordinate: GeoCoordinate
    ) -> Dict[ProviderId, Optional[AddressResult]]:
        """只查詢次要供應商，失敗一律視為缺席"""
        base = self._normalize(coordinate)
        results = await self._query_all(self.secondaries, base)
        return {p.provider_id: r for p, r in zip(self.secondaries, results)}

    def _normalize(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        if coordinate.system == CoordinateSystem.BD09:
            raise ValueError("BD09 input is not supported; pass a GCJ02 or WGS84 coordinate")
        if coordinate.system == CoordinateSystem.WGS84:
            # 境外座標維持 WGS84 標籤
            return self.coordinate_service.to_gcj02(coordinate)
        return coordinate

    def _coordinate_for(
        self, provider: ReverseGeocodingProviderInterface, base: GeoCoordinate
    ) -> Optional[GeoCoordinate]:
        if provider.datum == CoordinateSystem.BD09:
            if base.system != CoordinateSystem.GCJ02:
                return None
            return self.coordinate_service.to_bd09(base)
        # 境外的原始座標即為供應商可用的座標
        return base

    async def _query_all(
        self,
        providers: Sequence[ReverseGeocodingProviderInterface],
        base: GeoCoordinate,
    ) -> list:
        tasks = [self._query(provider, base) for provider in providers]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        normalized = []
        for provider, result in zip(providers, results):
            if isinstance(result, Exception):
                logger.debug(
                    f"{provider.provider_id.value}: unexpected error during reverse geocoding: {result}",
                    exc_info=result,
                )
                result = None
            normalized.append(result)
        return normalized

    async def _query(
        self, provider: ReverseGeocodingProviderInterface, base: GeoCoordinate
    ) -> Optional[AddressResult]:
        target = self._coordinate_for(provider, base)
        if target is None:
            logger.debug(
                f"{provider.provider_id.value}: no {provider.datum.value} coordinate available outside the GCJ02 region"
            )
            return None
        return await provider.reverse_geocode(target)


def create_address_resolver(
    http_client: Optional[HttpClientInterface] = None,
) -> AddressResolverService:
    """以設定檔中的 Key 與逾時建立預設的解析服務"""
    http_client = http_client or AiohttpJsonClient()
    return AddressResolverService(
        primary=AmapProvider(http_client),
        secondaries=[BaiduProvider(http_client), TencentProvider(http_client)],
    )
