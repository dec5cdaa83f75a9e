from .common_v1 import MoneyV1, WireModel  # noqa
from .dunning_config_v1 import (  # noqa
    CollectionAttemptV1,
    DunningConfigurationV1,
    DunningLevel3V1,
    DunningLevelV1,
    InvoiceV1,
)
from .margin_config_v1 import (  # noqa
    MarginConfigurationV1,
    MarginQueryV1,
    RouteMarginV1,
    ServiceMarginV1,
    VolumeTierV1,
)
