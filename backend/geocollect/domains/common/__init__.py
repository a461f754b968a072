"""
共享領域模組

包含所有領域共用的模型、結果包裝與錯誤分類。
"""

# 從基本模型導出
from geocollect.domains.common.models.base_model import (
    DomainBaseModel,
    ValueObject,
)

# 從結果工具導出
from geocollect.domains.common.utils.result import (
    Result,
    ResultStatus,
    Error,
)

# 從錯誤分類導出
from geocollect.domains.common.errors import (
    AcquisitionError,
    ErrorKind,
    PlatformError,
    TransportError,
)
