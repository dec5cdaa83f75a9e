from __future__ import annotations

from typing import Optional

import structlog

from ..core.settings import get_settings
from ..domain.models import MarginConfiguration
from .common import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    _err,
    _warn,
    check_non_negative,
    check_percentage,
    check_single_currency,
)

logger = structlog.get_logger(__name__)


def _check_tiers(config: MarginConfiguration, errors: list[ValidationError]) -> None:
    parsed = []
    for idx, tier in enumerate(config.volume_tiers):
        lo = tier.min_shipments_per_month
        hi = tier.max_shipments_per_month
        if lo < 0:
            errors.append(_err("volumeTiers", idx, "minShipmentsPerMonth", "OUT_OF_RANGE", "minShipmentsPerMonth moet >= 0 zijn."))
        if hi is not None and hi < lo:
            errors.append(
                _err("volumeTiers", idx, "maxShipmentsPerMonth", "INVALID_RANGE", f"maxShipmentsPerMonth ({hi}) < minShipmentsPerMonth ({lo}).")
            )
            continue
        parsed.append((lo, hi, idx))

    # Sort and validate overlaps; gaps are allowed (the default rule covers them)
    parsed.sort(key=lambda x: (x[0], x[2]))
    for (lo1, hi1, i1), (lo2, _hi2, i2) in zip(parsed, parsed[1:]):
        if hi1 is None:
            errors.append(
                _err("volumeTiers", i2, "minShipmentsPerMonth", "OPEN_ENDED_NOT_LAST", f"Tier na een open-ended tier (#{i1}). Verwijder of corrigeer.")
            )
            break
        if lo2 <= hi1:
            errors.append(
                _err("volumeTiers", i2, "minShipmentsPerMonth", "OVERLAP", f"Tiers overlappen: #{i1} eindigt op {hi1}, #{i2} start op {lo2}.")
            )


def validate_margin_configuration(config: MarginConfiguration, *, max_percentage: Optional[int] = None) -> ValidationResult:
    """
    Save-time check of every invariant a margin configuration must hold.
    Resolution assumes a configuration that passed this.
    """
    max_pct = get_settings().max_margin_percentage if max_percentage is None else max_percentage
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    check_percentage(errors, "default", None, config.default_margin_percentage, max_pct)
    check_non_negative(errors, "default", None, "defaultMinimumMarginAmount", config.default_minimum_margin_amount)

    seen_services: set[str] = set()
    for idx, sm in enumerate(config.service_margins):
        key = getattr(sm.service_type, "value", sm.service_type)
        if key in seen_services:
            errors.append(_err("serviceMargins", idx, "serviceType", "DUPLICATE_SERVICE", f"serviceType '{key}' komt dubbel voor."))
        seen_services.add(key)
        check_percentage(errors, "serviceMargins", idx, sm.margin_percentage, max_pct)
        check_non_negative(errors, "serviceMargins", idx, "minimumMarginAmount", sm.minimum_margin_amount)

    seen_routes: set[tuple[str, str]] = set()
    for idx, rm in enumerate(config.route_margins):
        if not rm.origin.strip() or not rm.destination.strip():
            errors.append(_err("routeMargins", idx, "origin", "REQUIRED", "origin en destination zijn verplicht."))
        if rm.key in seen_routes:
            errors.append(
                _err("routeMargins", idx, "origin", "DUPLICATE_ROUTE", f"Route '{rm.origin}' -> '{rm.destination}' komt dubbel voor.")
            )
        seen_routes.add(rm.key)
        if rm.origin.strip() != rm.origin or rm.destination.strip() != rm.destination:
            # exact match at resolution time; stray whitespace never matches
            warnings.append(_warn("routeMargins", idx, "origin", "WHITESPACE", "origin/destination bevat spaties aan begin of eind."))
        check_percentage(errors, "routeMargins", idx, rm.margin_percentage, max_pct)
        check_non_negative(errors, "routeMargins", idx, "minimumMarginAmount", rm.minimum_margin_amount)

    for idx, tier in enumerate(config.volume_tiers):
        check_percentage(errors, "volumeTiers", idx, tier.margin_percentage, max_pct)
        check_non_negative(errors, "volumeTiers", idx, "minimumMarginAmount", tier.minimum_margin_amount)
    _check_tiers(config, errors)

    check_single_currency(errors, "margins", config.all_amounts())

    result = ValidationResult(ok=len(errors) == 0, errors=errors, warnings=warnings)
    if errors:
        logger.warning(
            "invalid_configuration",
            dataset="margins",
            customer_id=config.customer_id,
            error_codes=sorted({e.errorCode for e in errors}),
        )
    return result


def ensure_valid_margin_configuration(config: MarginConfiguration) -> MarginConfiguration:
    validate_margin_configuration(config).raise_for_errors()
    return config
