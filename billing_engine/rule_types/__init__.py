# Ensure registration happens by importing modules
from .base import MarginRule, RuleResult, SelectedRule, rule_registry  # noqa
from . import (  # noqa
    route,
    service,
    volume_tier,
    default,
)
