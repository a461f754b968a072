import asyncio
from typing import Any, Optional


class CancellationToken:
    """定位串流與逾時計時器共用的取消令牌

    只有第一次 cancel() 生效，其 reason 與 payload 決定會話結果。
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None
        self.payload: Any = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str, payload: Any = None) -> bool:
        """回傳 True 表示此次呼叫贏得競賽"""
        if self._event.is_set():
            return False
        self.reason = reason
        self.payload = payload
        self._event.set()
        return True

    async def wait(self) -> None:
        await self._event.wait()
