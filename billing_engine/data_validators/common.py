from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..domain.errors import InvalidConfiguration
from ..domain.money import Money


# =========================
# Validation outputs + helpers
# =========================


@dataclass(frozen=True)
class ValidationError:
    datasetType: str  # serviceMargins | routeMargins | volumeTiers | default | dunning
    index: Optional[int]  # None = configuration-level error
    field: Optional[str]
    errorCode: str
    message: str


@dataclass(frozen=True)
class ValidationWarning:
    datasetType: str
    index: Optional[int]
    field: Optional[str]
    warningCode: str
    message: str


@dataclass
class ValidationResult:
    ok: bool
    errors: list[ValidationError]
    warnings: list[ValidationWarning]

    def raise_for_errors(self) -> None:
        if self.errors:
            raise InvalidConfiguration(self.errors)


def _err(
    datasetType: str,
    index: Optional[int],
    field: Optional[str],
    errorCode: str,
    message: str,
) -> ValidationError:
    return ValidationError(datasetType, index, field, errorCode, message)


def _warn(
    datasetType: str,
    index: Optional[int],
    field: Optional[str],
    warningCode: str,
    message: str,
) -> ValidationWarning:
    return ValidationWarning(datasetType, index, field, warningCode, message)


def check_percentage(
    errors: list[ValidationError],
    datasetType: str,
    index: Optional[int],
    pct: Decimal,
    max_pct: int,
) -> None:
    if pct < 0 or pct > max_pct:
        errors.append(
            _err(datasetType, index, "marginPercentage", "OUT_OF_RANGE", f"marginPercentage moet tussen 0 en {max_pct} liggen (got {pct}).")
        )


def check_non_negative(
    errors: list[ValidationError],
    datasetType: str,
    index: Optional[int],
    field: str,
    amount: Money,
) -> None:
    if amount.amount < 0:
        errors.append(_err(datasetType, index, field, "OUT_OF_RANGE", f"{field} mag niet negatief zijn (got {amount.amount})."))


def check_single_currency(errors: list[ValidationError], datasetType: str, amounts: Iterable[Money]) -> None:
    codes = sorted({m.currency_code for m in amounts})
    if len(codes) > 1:
        errors.append(
            _err(datasetType, None, None, "MIXED_CURRENCY", f"Alle bedragen moeten dezelfde valuta hebben, gevonden: {codes}.")
        )
