from __future__ import annotations

from ..domain.enums import RuleKind
from .base import MarginRule, RuleResult, SelectedRule, register


@register
class RouteMarginRule(MarginRule):
    """
    Exact, case-sensitive match on the ordered (origin, destination) pair.
    Skipped entirely when the query lacks either end of the route.
    """

    type_name = "route"
    kind = RuleKind.ROUTE

    def match(self, config, query) -> RuleResult:
        if not query.origin or not query.destination:
            return RuleResult.skipped({"reason": "missing_route"})

        for rm in config.route_margins:
            if rm.origin == query.origin and rm.destination == query.destination:
                return RuleResult.applied(
                    SelectedRule(
                        kind=self.kind,
                        margin_percentage=rm.margin_percentage,
                        minimum_margin_amount=rm.minimum_margin_amount,
                        description=rm.description,
                    ),
                    {"origin": rm.origin, "destination": rm.destination},
                )

        return RuleResult.skipped(
            {"reason": "no_matching_route", "origin": query.origin, "destination": query.destination}
        )
