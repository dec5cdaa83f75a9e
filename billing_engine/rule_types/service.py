from __future__ import annotations

from ..domain.enums import RuleKind
from .base import MarginRule, RuleResult, SelectedRule, register


def _service_key(value) -> str:
    # ServiceType members and their plain string values compare equal
    return getattr(value, "value", value)


@register
class ServiceMarginRule(MarginRule):
    type_name = "service"
    kind = RuleKind.SERVICE

    def match(self, config, query) -> RuleResult:
        if not query.service_type:
            return RuleResult.skipped({"reason": "missing_service_type"})

        wanted = _service_key(query.service_type)
        for sm in config.service_margins:
            if _service_key(sm.service_type) == wanted:
                return RuleResult.applied(
                    SelectedRule(
                        kind=self.kind,
                        margin_percentage=sm.margin_percentage,
                        minimum_margin_amount=sm.minimum_margin_amount,
                        description=sm.description,
                    ),
                    {"serviceType": wanted},
                )

        return RuleResult.skipped({"reason": "no_matching_service", "serviceType": wanted})
