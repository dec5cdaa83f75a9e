# billing_engine/schemas/margin_config_v1.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ..data_validators.margins import ensure_valid_margin_configuration
from ..domain.enums import ServiceType
from ..domain.models import (
    MarginConfiguration,
    MarginQuery,
    RouteMargin,
    ServiceMargin,
    VolumeTier,
)
from .common_v1 import MoneyV1, WireModel


class ServiceMarginV1(WireModel):
    service_type: ServiceType
    margin_percentage: Decimal
    minimum_margin_amount: MoneyV1
    description: Optional[str] = None

    def to_domain(self) -> ServiceMargin:
        return ServiceMargin(
            service_type=self.service_type.value,
            margin_percentage=self.margin_percentage,
            minimum_margin_amount=self.minimum_margin_amount.to_domain(),
            description=self.description,
        )


class RouteMarginV1(WireModel):
    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    margin_percentage: Decimal
    minimum_margin_amount: MoneyV1
    description: Optional[str] = None

    def to_domain(self) -> RouteMargin:
        return RouteMargin(
            origin=self.origin,
            destination=self.destination,
            margin_percentage=self.margin_percentage,
            minimum_margin_amount=self.minimum_margin_amount.to_domain(),
            description=self.description,
        )


class VolumeTierV1(WireModel):
    min_shipments_per_month: int
    max_shipments_per_month: Optional[int] = None
    margin_percentage: Decimal
    minimum_margin_amount: MoneyV1
    description: Optional[str] = None

    def to_domain(self) -> VolumeTier:
        return VolumeTier(
            min_shipments_per_month=self.min_shipments_per_month,
            max_shipments_per_month=self.max_shipments_per_month,
            margin_percentage=self.margin_percentage,
            minimum_margin_amount=self.minimum_margin_amount.to_domain(),
            description=self.description,
        )


class MarginConfigurationV1(WireModel):
    """
    Full configuration snapshot for one customer.
    Shape checks only; invariants (duplicates, overlaps) live in data_validators.
    """

    customer_id: Optional[str] = None
    default_margin_percentage: Decimal
    default_minimum_margin_amount: MoneyV1
    service_margins: List[ServiceMarginV1] = Field(default_factory=list)
    route_margins: List[RouteMarginV1] = Field(default_factory=list)
    volume_tiers: List[VolumeTierV1] = Field(default_factory=list)
    next_review_date: Optional[datetime] = None

    def to_domain(self, *, validate: bool = True) -> MarginConfiguration:
        config = MarginConfiguration(
            default_margin_percentage=self.default_margin_percentage,
            default_minimum_margin_amount=self.default_minimum_margin_amount.to_domain(),
            service_margins=tuple(sm.to_domain() for sm in self.service_margins),
            route_margins=tuple(rm.to_domain() for rm in self.route_margins),
            volume_tiers=tuple(t.to_domain() for t in self.volume_tiers),
            customer_id=self.customer_id,
            next_review_date=self.next_review_date,
        )
        if validate:
            ensure_valid_margin_configuration(config)
        return config


class MarginQueryV1(WireModel):
    revenue: MoneyV1
    service_type: Optional[ServiceType] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    monthly_shipment_count: Optional[int] = Field(default=None, ge=0)

    def to_domain(self) -> MarginQuery:
        return MarginQuery(
            revenue=self.revenue.to_domain(),
            service_type=self.service_type.value if self.service_type else None,
            origin=self.origin,
            destination=self.destination,
            monthly_shipment_count=self.monthly_shipment_count,
        )
