from __future__ import annotations

from ..domain.enums import RuleKind
from .base import MarginRule, RuleResult, SelectedRule, register


@register
class VolumeTierMarginRule(MarginRule):
    type_name = "volume_tier"
    kind = RuleKind.VOLUME_TIER

    def match(self, config, query) -> RuleResult:
        count = query.monthly_shipment_count
        if count is None:
            return RuleResult.skipped({"reason": "missing_shipment_count"})

        # Declaration order: with overlapping tiers (invalid config) the first one wins
        for idx, tier in enumerate(config.volume_tiers):
            if not tier.contains(count):
                continue

            upper = "open" if tier.max_shipments_per_month is None else str(tier.max_shipments_per_month)
            return RuleResult.applied(
                SelectedRule(
                    kind=self.kind,
                    margin_percentage=tier.margin_percentage,
                    minimum_margin_amount=tier.minimum_margin_amount,
                    description=tier.description,
                ),
                {"tierIndex": idx, "min": str(tier.min_shipments_per_month), "max": upper, "count": str(count)},
            )

        return RuleResult.skipped({"reason": "no_matching_tier", "count": str(count)})
