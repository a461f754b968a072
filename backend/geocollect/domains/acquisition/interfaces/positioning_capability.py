from abc import ABC, abstractmethod
from typing import AsyncIterator

from geocollect.domains.acquisition.models.position_model import (
    PositionFix,
    PositioningOptions,
)


class FixSubscription(ABC):
    """持續定位更新的訂閱

    以 async iterator 逐一產生 PositionFix；串流出錯時在迭代中拋出
    PlatformError。cancel() 用於拆除訂閱。
    """

    def __aiter__(self) -> AsyncIterator[PositionFix]:
        return self

    @abstractmethod
    async def __anext__(self) -> PositionFix:
        pass

    @abstractmethod
    def cancel(self) -> None:
        """停止接收更新並釋放平台資源"""
        pass


class PositioningCapability(ABC):
    """平台定位能力（瀏覽器 Geolocation 或等效實作）"""

    @abstractmethod
    async def request_fix(self, options: PositioningOptions) -> PositionFix:
        """請求單次定位

        Raises:
            PlatformError: 平台回報權限拒絕、位置不可用或逾時
        """
        pass

    @abstractmethod
    def subscribe_fixes(self, options: PositioningOptions) -> FixSubscription:
        """訂閱持續的定位更新"""
        pass
