from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class HttpClientInterface(ABC):
    """對外 HTTP 呼叫能力"""

    @abstractmethod
    async def get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None, timeout: float = 5.0
    ) -> Any:
        """發出 GET 請求並解析 JSON 回應

        Raises:
            TransportError: 連線錯誤、逾時、非 200 狀態或無效 JSON
        """
        pass
