import logging
import re
import time
from typing import Callable, List, Optional

from geocollect.domains.acquisition.interfaces.acquisition_strategy_interface import (
    AcquisitionSession,
    AcquisitionStrategyInterface,
)
from geocollect.domains.acquisition.interfaces.positioning_capability import (
    PositioningCapability,
)
from geocollect.domains.acquisition.models.position_model import (
    AcquisitionState,
    PositionFix,
    RuntimeEnvironment,
)
from geocollect.domains.acquisition.services.strategies import (
    RefinementStrategy,
    SingleShotStrategy,
)
from geocollect.domains.common.errors import AcquisitionError, ErrorKind
from geocollect.domains.common.utils.result import Result

logger = logging.getLogger(__name__)

_EMBEDDED_WEBVIEW_UA = re.compile(r"MicroMessenger", re.IGNORECASE)


def detect_environment(user_agent: Optional[str]) -> RuntimeEnvironment:
    """由 User-Agent 判斷執行環境（微信內建瀏覽器為內嵌 WebView）"""
    if user_agent and _EMBEDDED_WEBVIEW_UA.search(user_agent):
        return RuntimeEnvironment.EMBEDDED_WEBVIEW
    return RuntimeEnvironment.STANDALONE_BROWSER


def describe_accuracy(accuracy_meters: Optional[float]) -> str:
    """精度的人類可讀描述，例如 "35 米（较精确）" """
    accuracy = accuracy_meters or 0
    if accuracy <= 20:
        label = "精确"
    elif accuracy <= 100:
        label = "较精确"
    else:
        label = "大致范围"
    return f"{accuracy:.0f} 米（{label}）"


def _now_ms() -> int:
    return int(time.time() * 1000)


class PositionSession(AcquisitionSession):
    """單次 acquire() 的狀態與轉換歷史"""

    def __init__(self):
        self.state = AcquisitionState.IDLE
        self.history: List[AcquisitionState] = [AcquisitionState.IDLE]

    def transition(self, state: AcquisitionState) -> None:
        logger.debug(f"定位狀態: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)


class PositionAcquirer:
    """定位獲取器

    每次 acquire() 建立獨立的 PositionSession：Idle → AwaitingFix → Refining → Resolved | Failed。
    依執行環境選擇單次定位或持續精化策略，結果以 Result 包裝，
    失敗時錯誤代碼為 ErrorKind 的值。
    """

    def __init__(
        self,
        capability: Optional[PositioningCapability],
        environment: RuntimeEnvironment = RuntimeEnvironment.STANDALONE_BROWSER,
        single_shot: Optional[AcquisitionStrategyInterface] = None,
        refinement: Optional[AcquisitionStrategyInterface] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self.capability = capability
        self.environment = environment
        self.single_shot = single_shot or SingleShotStrategy()
        self.refinement = refinement or RefinementStrategy()
        self.clock = clock
        # 最近一次開始的會話
        self.last_session = PositionSession()

    @property
    def strategy(self) -> AcquisitionStrategyInterface:
        if self.environment == RuntimeEnvironment.EMBEDDED_WEBVIEW:
            return self.single_shot
        return self.refinement

    @property
    def state(self) -> AcquisitionState:
        return self.last_session.state

    @property
    def history(self) -> List[AcquisitionState]:
        return self.last_session.history

    @staticmethod
    def _fail(
        session: PositionSession, kind: ErrorKind, message: str
    ) -> Result[PositionFix]:
        session.transition(AcquisitionState.FAILED)
        return Result.failure(kind.value, message)

    async def acquire(
        self, last_interaction_ms: Optional[int] = None
    ) -> Result[PositionFix]:
        """執行一次定位會話

        Args:
            last_interaction_ms: 最近一次使用者互動的時間（毫秒），
                內嵌 WebView 環境必須提供

        Returns:
            成功時 data 為 PositionFix
        """
        session = PositionSession()
        self.last_session = session

        if self.capability is None:
            logger.warning("平台不支援定位")
            return self._fail(session, ErrorKind.CAPABILITY_UNAVAILABLE, "当前环境不支持定位")

        session.transition(AcquisitionState.AWAITING_FIX)
        try:
            fix = await self.strategy.acquire(
                self.capability, session, last_interaction_ms, self.clock()
            )
        except AcquisitionError as e:
            return self._fail(session, e.kind, str(e))
        except Exception as e:
            logger.error(f"定位時發生未預期錯誤: {e}", exc_info=True)
            return self._fail(session, ErrorKind.UNKNOWN, str(e))

        session.transition(AcquisitionState.RESOLVED)
        return Result.success(fix)
