from .days import add_days, as_utc, ceil_days, floor_days  # noqa
from .dual_margin import DualMargin, calc_dual_margin  # noqa
