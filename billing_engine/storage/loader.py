from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from ..data_validators.common import ValidationError, _err
from ..domain.errors import InvalidConfiguration
from ..domain.models import DunningConfiguration, MarginConfiguration
from ..schemas.common_v1 import WireModel
from ..schemas.dunning_config_v1 import DunningConfigurationV1
from ..schemas.margin_config_v1 import MarginConfigurationV1

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=WireModel)


@dataclass(frozen=True)
class CustomerBillingSnapshot:
    """Everything the engine needs for one customer; either part may be missing ("not found")."""

    customer_id: Optional[str]
    margins: Optional[MarginConfiguration]
    dunning: Optional[DunningConfiguration]


def _schema_errors(dataset: str, exc: PydanticValidationError) -> list[ValidationError]:
    out: list[ValidationError] = []
    for e in exc.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        out.append(_err(dataset, None, loc or None, "SCHEMA", str(e.get("msg", "invalid value"))))
    return out


def _parse(model: Type[M], raw: Dict[str, Any], dataset: str) -> M:
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        errors = _schema_errors(dataset, e)
        logger.warning("invalid_configuration", dataset=dataset, error_codes=["SCHEMA"], errors=len(errors))
        raise InvalidConfiguration(errors) from e


def margin_configuration_from_dict(raw: Optional[Dict[str, Any]]) -> Optional[MarginConfiguration]:
    """None in, None out: the store's "not found" stays visible to the resolver."""
    if raw is None:
        return None
    return _parse(MarginConfigurationV1, raw, "margins").to_domain(validate=True)


def dunning_configuration_from_dict(raw: Optional[Dict[str, Any]]) -> Optional[DunningConfiguration]:
    if raw is None:
        return None
    return _parse(DunningConfigurationV1, raw, "dunning").to_domain(validate=True)


def read_document(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        if p.suffix.lower() == ".json":
            d = json.load(f)
        else:
            d = yaml.safe_load(f)

    if d is None:
        return {}
    if not isinstance(d, dict):
        raise InvalidConfiguration(
            [_err("document", None, None, "SCHEMA", f"top-level must be a mapping, got {type(d).__name__}")]
        )
    return d


def load_snapshot(path: str | Path) -> CustomerBillingSnapshot:
    """
    File layout (YAML or JSON):

        customerId: C-1001
        margins: {...MarginConfiguration, camelCase...}
        dunning: {...DunningConfiguration...}
    """
    d = read_document(path)

    unknown = sorted(set(d) - {"customerId", "margins", "dunning"})
    if unknown:
        raise InvalidConfiguration(
            [_err("document", None, k, "SCHEMA", "unknown top-level key") for k in unknown]
        )

    snapshot = CustomerBillingSnapshot(
        customer_id=d.get("customerId"),
        margins=margin_configuration_from_dict(d.get("margins")),
        dunning=dunning_configuration_from_dict(d.get("dunning")),
    )
    logger.info(
        "snapshot_loaded",
        path=str(path),
        customer_id=snapshot.customer_id,
        has_margins=snapshot.margins is not None,
        has_dunning=snapshot.dunning is not None,
    )
    return snapshot
