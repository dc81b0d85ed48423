"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Fiscal constants live in their own group so the calculation engine can be
handed an explicit FiscalSettings instance in tests.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FiscalSettings(BaseSettings):
    """Statutory constants and fallbacks used by the fiscal engine."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FISCAL_", extra="ignore")

    forfettario_limit: Decimal = Field(
        default=Decimal("85000"),
        description="Revenue ceiling of the regime forfettario (euro)",
    )
    separata_rate: Decimal = Field(
        default=Decimal("0.2623"),
        description="INPS Gestione Separata contribution rate",
    )
    default_coefficient: Decimal = Field(
        default=Decimal("0.78"),
        description="Profitability coefficient used when no ATECO code is configured",
    )
    artigiani_fixed_income: Decimal = Field(
        default=Decimal("18415"),
        description="Artigiani/Commercianti minimum taxable income (minimale)",
    )
    artigiani_fixed_cost: Decimal = Field(
        default=Decimal("4515"),
        description="Artigiani/Commercianti fixed yearly contribution",
    )
    artigiani_exceed_rate: Decimal = Field(
        default=Decimal("0.24"),
        description="Artigiani/Commercianti rate on income above the minimale",
    )
    deadline_paid_tolerance: Decimal = Field(
        default=Decimal("5"),
        description="Rounding tolerance when matching paid taxes against deadlines",
    )


class Settings(BaseSettings):
    """Root settings.

    Usage:
        settings = Settings()
        settings.fiscal.forfettario_limit
        settings.log_level
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)

    fiscal: FiscalSettings = Field(default_factory=FiscalSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton — import this wherever settings are needed.
settings = Settings()
