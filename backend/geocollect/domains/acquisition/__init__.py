"""
定位獲取領域模組

客戶端定位會話：依執行環境選擇單次定位或持續精化策略，產生一個帶精度的 WGS84 定位。
"""

from geocollect.domains.acquisition.models.position_model import (
    AcquisitionState,
    PositionFix,
    PositioningOptions,
    RuntimeEnvironment,
)
from geocollect.domains.acquisition.interfaces.positioning_capability import (
    FixSubscription,
    PositioningCapability,
)
from geocollect.domains.acquisition.services.cancellation import CancellationToken
from geocollect.domains.acquisition.services.strategies import (
    RefinementStrategy,
    SingleShotStrategy,
)
from geocollect.domains.acquisition.services.position_acquirer import (
    PositionAcquirer,
    PositionSession,
    describe_accuracy,
    detect_environment,
)
