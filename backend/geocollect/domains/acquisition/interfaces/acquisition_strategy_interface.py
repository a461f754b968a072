from abc import ABC, abstractmethod

from geocollect.domains.acquisition.interfaces.positioning_capability import (
    PositioningCapability,
)
from geocollect.domains.acquisition.models.position_model import (
    AcquisitionState,
    PositionFix,
)


class AcquisitionSession(ABC):
    """策略用來回報狀態轉換的會話"""

    @abstractmethod
    def transition(self, state: AcquisitionState) -> None:
        pass


class AcquisitionStrategyInterface(ABC):
    """定位策略接口"""

    @abstractmethod
    async def acquire(
        self,
        capability: PositioningCapability,
        session: AcquisitionSession,
        last_interaction_ms: int,
        now_ms: int,
    ) -> PositionFix:
        """取得一個定位結果

        Raises:
            AcquisitionError: 會話以失敗結束，kind 為失敗種類
        """
        pass
