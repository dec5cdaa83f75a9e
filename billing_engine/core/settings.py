# billing_engine/core/settings.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BillingSettings(BaseSettings):
    # === Logging ===
    log_level: str = "INFO"
    log_json: bool = True

    # === Money ===
    money_decimal_places: int = Field(2, ge=0, le=6)

    # === Overdue classification ===
    due_soon_window_days: int = Field(3, ge=0, description="Days before due date that count as 'warning'")
    severe_overdue_days: int = Field(30, ge=1, description="Days overdue from which an invoice is 'severe'")

    # === Collection advisor ===
    email_followup_days: int = Field(7, ge=0)
    collection_escalation_days: int = Field(14, ge=0)

    # === Invoicing ===
    default_payment_terms_days: int = Field(30, ge=0)

    # === Risk assessment ===
    acceptable_payment_days: int = 30
    late_payment_days: int = 45
    critical_payment_days: int = 60
    contact_alert_threshold_days: int = 30

    # === Margin configuration ===
    max_margin_percentage: int = 100
    default_review_frequency_days: int = 90

    model_config = SettingsConfigDict(
        env_prefix="BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> BillingSettings:
    return BillingSettings()


def reset_settings_cache() -> None:
    """Forget the cached settings (tests patch env vars and call this)."""
    get_settings.cache_clear()
