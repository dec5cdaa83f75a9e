from .collection_advisor import CollectionPolicy, next_collection_action  # noqa
from .dunning_driver import (  # noqa
    determine_dunning_actions,
    determine_dunning_level,
    dunning_fee_total,
    should_reactivate,
)
from .margin_resolver import EXECUTION_ORDER, MarginResolver, resolve_margin  # noqa
from .overdue_classifier import OverduePolicy, classify_invoice, classify_overdue  # noqa
from .review_schedule import needs_review, next_review_date  # noqa
from .risk_assessment import (  # noqa
    RiskPolicy,
    assess_customer_risk,
    days_since_last_contact,
    needs_follow_up_alert,
)
from .service_access import check_service_access, compute_due_date, effective_payment_terms_days  # noqa
