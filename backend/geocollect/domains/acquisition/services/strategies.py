import asyncio
import logging
from typing import Optional

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
    PositioningOptions,
)
from geocollect.domains.acquisition.services.cancellation import CancellationToken
from geocollect.domains.common.errors import (
    AcquisitionError,
    ErrorKind,
    PlatformError,
)

logger = logging.getLogger(__name__)

# 取消原因
REASON_ACCURATE = "accurate"
REASON_ERROR = "error"
REASON_DEADLINE = "deadline"


class SingleShotStrategy(AcquisitionStrategyInterface):
    """單次定位策略（內嵌 WebView）

    必須在最近一次使用者互動後的時間窗口內發出請求；
    平台逾時會重試，權限拒絕與位置不可用則立即失敗。
    """

    INTERACTION_WINDOW_MS = 5000
    MAX_RETRIES = 2

    def __init__(self, retry_delay_s: float = 0.1):
        self.retry_delay_s = retry_delay_s
        self.options = PositioningOptions(
            enable_high_accuracy=True,
            maximum_age_ms=60000,
            timeout_ms=30000,
        )

    async def acquire(
        self,
        capability: PositioningCapability,
        session: AcquisitionSession,
        last_interaction_ms: Optional[int],
        now_ms: int,
    ) -> PositionFix:
        elapsed = now_ms - (last_interaction_ms or 0)
        if elapsed > self.INTERACTION_WINDOW_MS:
            logger.warning(f"定位請求未在使用者互動時間窗口內 (距上次互動 {elapsed} ms)")
            raise AcquisitionError(
                ErrorKind.INTERACTION_WINDOW_EXPIRED,
                "定位請求必須在使用者點擊後的短時間內發出",
            )

        retries = 0
        while True:
            try:
                fix = await capability.request_fix(self.options)
                logger.info(
                    f"單次定位成功: ({fix.latitude}, {fix.longitude}), 精度 {fix.accuracy_meters} 米"
                )
                return fix
            except PlatformError as e:
                if e.kind == ErrorKind.TIMEOUT and retries < self.MAX_RETRIES:
                    retries += 1
                    logger.info(f"定位逾時，正在進行第 {retries} 次重試")
                    await asyncio.sleep(self.retry_delay_s)
                    continue
                logger.warning(f"單次定位失敗: {e.kind.value} - {e}")
                raise


class RefinementStrategy(AcquisitionStrategyInterface):
    """持續定位精化策略（一般瀏覽器）

    訂閱定位更新並保留精度最佳的結果；首次達到精度門檻即提前結束，
    串流出錯或到達截止時間時以最佳結果結束，沒有任何結果則失敗。
    """

    def __init__(self, accuracy_threshold_m: float = 50.0, deadline_s: float = 30.0):
        self.accuracy_threshold_m = accuracy_threshold_m
        self.deadline_s = deadline_s
        self.options = PositioningOptions(
            enable_high_accuracy=True,
            maximum_age_ms=0,
            timeout_ms=30000,
        )

    async def acquire(
        self,
        capability: PositioningCapability,
        session: AcquisitionSession,
        last_interaction_ms: Optional[int],
        now_ms: int,
    ) -> PositionFix:
        token = CancellationToken()
        best: Optional[PositionFix] = None
        subscription = capability.subscribe_fixes(self.options)
        session.transition(AcquisitionState.REFINING)

        async def consume() -> None:
            nonlocal best
            try:
                async for fix in subscription:
                    if token.cancelled:
                        return
                    logger.debug(f"收到定位更新，精度 {fix.accuracy_meters} 米")
                    if best is None or fix.accuracy_meters < best.accuracy_meters:
                        best = fix
                    if fix.accuracy_meters <= self.accuracy_threshold_m:
                        token.cancel(REASON_ACCURATE, fix)
                        return
                token.cancel(
                    REASON_ERROR,
                    PlatformError(ErrorKind.POSITION_UNAVAILABLE, "定位更新串流已結束"),
                )
            except PlatformError as e:
                token.cancel(REASON_ERROR, e)
            except Exception as e:
                logger.error(f"定位更新串流發生未預期錯誤: {e}", exc_info=True)
                token.cancel(REASON_ERROR, PlatformError(ErrorKind.UNKNOWN, str(e)))

        stream_task = asyncio.create_task(consume())
        try:
            try:
                await asyncio.wait_for(token.wait(), timeout=self.deadline_s)
            except asyncio.TimeoutError:
                token.cancel(REASON_DEADLINE)
        finally:
            stream_task.cancel()
            subscription.cancel()
            await asyncio.gather(stream_task, return_exceptions=True)

        if token.reason == REASON_ACCURATE:
            return token.payload
        if best is not None:
            logger.info(
                f"定位精化以最佳結果結束 ({token.reason})，精度 {best.accuracy_meters} 米"
            )
            return best
        if token.reason == REASON_DEADLINE:
            raise AcquisitionError(
                ErrorKind.TIMEOUT, f"{self.deadline_s} 秒內未取得任何定位"
            )
        raise token.payload
