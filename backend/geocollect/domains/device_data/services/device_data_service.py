import logging
import time
from typing import Dict, Optional

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.device_data.interfaces.device_data_repository import (
    DeviceDataRepository,
)
from geocollect.domains.device_data.models.device_record_model import DeviceRecord
from geocollect.domains.device_data.models.dto import DeviceDataPayload
from geocollect.domains.geocoding.models.address_model import AddressResult, ProviderId
from geocollect.domains.geocoding.services.address_service import (
    AddressResolverService,
)

logger = logging.getLogger(__name__)


def _or_none(value: Optional[str]) -> Optional[str]:
    return value or None


def _address_columns(prefix: str, address: Optional[AddressResult]) -> Dict[str, Optional[str]]:
    """將 AddressResult 展開為帶前綴的欄位，缺席時全部為 None"""
    address = address or AddressResult()
    return {
        f"{prefix}address": _or_none(address.formatted_address),
        f"{prefix}country": _or_none(address.country),
        f"{prefix}province": _or_none(address.province),
        f"{prefix}city": _or_none(address.city),
        f"{prefix}district": _or_none(address.district),
        f"{prefix}street": _or_none(address.street),
        f"{prefix}adcode": _or_none(address.admin_code),
    }


class DeviceDataService:
    """設備資料服務層：補齊次要供應商地址並組成扁平記錄"""

    def __init__(
        self,
        repository: DeviceDataRepository,
        address_resolver: Optional[AddressResolverService] = None,
    ):
        self.repository = repository
        self.address_resolver = address_resolver

    async def save(self, payload: DeviceDataPayload, ip: Optional[str]) -> DeviceRecord:
        """組成並寫入記錄；即使定位失敗也會寫入（位置欄位為 None）"""
        secondary = await self._secondary_addresses(payload)
        record = self.build_record(payload, ip, secondary)
        return await self.repository.create(record)

    async def _secondary_addresses(
        self, payload: DeviceDataPayload
    ) -> Dict[ProviderId, Optional[AddressResult]]:
        secondary = {
            ProviderId.BAIDU: payload.baidu_address,
            ProviderId.TENCENT: payload.tencent_address,
        }
        gcj = payload.location.gcj02
        if all(secondary.values()) or self.address_resolver is None:
            return secondary
        if not (gcj.lat and gcj.lon and gcj.applicable):
            return secondary

        fetched = await self.address_resolver.resolve_secondary(
            GeoCoordinate(system=CoordinateSystem.GCJ02, latitude=gcj.lat, longitude=gcj.lon)
        )
        for provider_id, address in fetched.items():
            if secondary.get(provider_id) is None:
                secondary[provider_id] = address
        return secondary

    @staticmethod
    def build_record(
        payload: DeviceDataPayload,
        ip: Optional[str],
        secondary: Optional[Dict[ProviderId, Optional[AddressResult]]] = None,
    ) -> DeviceRecord:
        secondary = secondary or {}
        wgs = payload.location.wgs84
        gcj = payload.location.gcj02
        device = payload.device
        primary = payload.address or AddressResult()
        baidu = secondary.get(ProviderId.BAIDU)
        tencent = secondary.get(ProviderId.TENCENT)
        tencent_extra = tencent.provider_specific if tencent else {}

        columns = {}
        columns.update(_address_columns("", primary))
        columns["citycode"] = _or_none(primary.city_code)
        columns.update(_address_columns("baidu_", baidu))
        columns["baidu_citycode"] = _or_none(baidu.city_code) if baidu else None
        columns.update(_address_columns("tencent_", tencent))

        return DeviceRecord(
            timestamp=payload.timestamp or int(time.time() * 1000),
            ip=ip,
            wgs84_lat=wgs.lat,
            wgs84_lon=wgs.lon,
            wgs84_accuracy=wgs.accuracy,
            gcj02_lat=gcj.lat,
            gcj02_lon=gcj.lon,
            gcj02_applicable=gcj.applicable,
            tencent_street_number=_or_none(tencent_extra.get("street_number")),
            tencent_town=_or_none(tencent_extra.get("town")),
            tencent_landmark_l1=_or_none(tencent_extra.get("landmark_l1")),
            tencent_landmark_l2=_or_none(tencent_extra.get("landmark_l2")),
            device_model=device.model,
            os_version=device.os_version,
            screen_w=device.screen.width,
            screen_h=device.screen.height,
            dpr=device.screen.dpr,
            network_type=device.network.type,
            effective_type=device.network.effective_type,
            ua=payload.browser.ua or None,
            error=payload.error,
            **columns,
        )
