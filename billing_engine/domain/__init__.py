from .enums import (  # noqa
    CLOSED_STATUSES,
    CollectionAction,
    CollectionMethod,
    CurrencyCode,
    InvoiceStatus,
    MarginMethod,
    RiskLevel,
    RuleKind,
    ServiceType,
    Severity,
    currency_symbol,
)
from .errors import BillingEngineError, CurrencyMismatch, InvalidConfiguration, NoApplicableRule  # noqa
from .models import (  # noqa
    CollectionAttempt,
    CustomerAnalytics,
    CustomerRiskAssessment,
    DunningActions,
    DunningConfiguration,
    DunningLevel,
    Invoice,
    MarginConfiguration,
    MarginDecision,
    MarginQuery,
    OverdueStatus,
    RouteMargin,
    ServiceAccessCheck,
    ServiceMargin,
    VolumeTier,
    replace_margin_lists,
)
from .money import Money, round_half_up  # noqa
