from __future__ import annotations

import structlog

from ..domain.models import DunningConfiguration
from .common import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    _err,
    _warn,
    check_non_negative,
    check_single_currency,
)

logger = structlog.get_logger(__name__)


def validate_dunning_configuration(config: DunningConfiguration) -> ValidationResult:
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    for number, level in config.levels:
        if level.days_overdue < 0:
            errors.append(_err("dunning", number, "daysOverdue", "OUT_OF_RANGE", f"level {number}: daysOverdue moet >= 0 zijn."))
        check_non_negative(errors, "dunning", number, "feeAmount", level.fee_amount)

    l1, l2, l3 = config.level1.days_overdue, config.level2.days_overdue, config.level3.days_overdue
    if not (l1 < l2 < l3):
        errors.append(
            _err("dunning", None, "daysOverdue", "NON_MONOTONIC", f"Drempels moeten strikt oplopen: {l1} < {l2} < {l3}.")
        )

    if config.custom_payment_terms_days is not None and config.custom_payment_terms_days < 0:
        errors.append(_err("dunning", None, "customPaymentTermsDays", "INVALID_PAYMENT_TERMS", "customPaymentTermsDays moet >= 0 zijn."))

    check_single_currency(errors, "dunning", [lvl.fee_amount for _, lvl in config.levels])

    if config.level1.suspend_service or config.level2.suspend_service:
        warnings.append(_warn("dunning", None, "suspendService", "IGNORED", "suspendService geldt alleen voor level 3."))

    if errors:
        logger.warning(
            "invalid_configuration",
            dataset="dunning",
            customer_id=config.customer_id,
            error_codes=sorted({e.errorCode for e in errors}),
        )
    return ValidationResult(ok=len(errors) == 0, errors=errors, warnings=warnings)


def ensure_valid_dunning_configuration(config: DunningConfiguration) -> DunningConfiguration:
    validate_dunning_configuration(config).raise_for_errors()
    return config
