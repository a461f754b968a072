"""
採集流程領域模組

串接定位、座標轉換、地址查詢與保存，並發布每個階段的狀態訊息。
"""

from geocollect.domains.collection.models.collection_model import (
    CollectionReport,
    DeviceInfo,
)
from geocollect.domains.collection.interfaces.backend_client_interface import (
    BackendClientInterface,
)
from geocollect.domains.collection.adapters.aiohttp_backend_client import (
    AiohttpBackendClient,
)
from geocollect.domains.collection.services.collector_service import (
    CollectorService,
)
