"""
Configuration management for thermalnet.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="THERMALNET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data source
    data_source: str = Field(
        default="heat_pump_comparison_results.csv",
        description="Path or http(s) URL of the hourly comparison CSV",
    )
    http_timeout_seconds: float = Field(default=30.0, description="Timeout for remote sources")

    # Processing
    missing_field_policy: Literal["default_zero", "fail"] = Field(
        default="default_zero",
        description="How absent/non-numeric load, COP and electric fields are handled",
    )
    default_hour: int = Field(default=1, description="Initial hour of a new query session")

    # Borefield network economics
    borefield_capacity_kw: float = Field(default=440.0, description="Rated capacity of each borefield (kW)")
    max_operating_fraction: float = Field(default=0.8, description="Share of capacity usable for expansion")
    kw_per_additional_building: float = Field(default=20.0, description="Average load of a new connection (kW)")
    energy_value_per_kw_elec: float = Field(default=15.0, description="Energy value ($ per kW-elec saved)")
    capacity_value_per_kw_elec: float = Field(default=250.0, description="Capacity value ($ per kW-elec saved)")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_file: Optional[str] = Field(default=None, description="Also write JSON-line logs to this file")


# Global settings instance
settings = Settings()
