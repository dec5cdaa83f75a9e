from __future__ import annotations

from ..domain.enums import RuleKind
from .base import MarginRule, RuleResult, SelectedRule, register


@register
class DefaultMarginRule(MarginRule):
    """Fallback tier; always applies."""

    type_name = "default"
    kind = RuleKind.DEFAULT

    def match(self, config, query) -> RuleResult:
        return RuleResult.applied(
            SelectedRule(
                kind=self.kind,
                margin_percentage=config.default_margin_percentage,
                minimum_margin_amount=config.default_minimum_margin_amount,
            )
        )
