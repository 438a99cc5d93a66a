"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pulseboard.models.enums import DeltaMode, TimeHorizon


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data source
    metrics_adapter: Literal["mock", "http"] = Field(
        default="mock", description="Metrics adapter (mock|http)"
    )
    metrics_api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the upstream metrics API (http adapter only)",
    )
    metrics_api_timeout_seconds: float = Field(
        default=10.0, gt=0.0, description="Upstream metrics API timeout"
    )

    # Mock adapter
    mock_latency_seconds: float = Field(
        default=0.1, ge=0.0, description="Simulated network delay for the mock adapter"
    )
    mock_seed: Optional[int] = Field(
        default=None, description="Seed for mock sparkline generation (None = random)"
    )

    # Dashboard defaults
    default_time_horizon: TimeHorizon = Field(
        default=TimeHorizon.WEEK, description="Time horizon used when none is requested"
    )
    default_delta_mode: DeltaMode = Field(
        default=DeltaMode.PCT, description="Delta mode used when none is requested"
    )
    dashboard_product: str = Field(default="dooze", description="Product filter label")
    dashboard_region: str = Field(default="global", description="Region filter label")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_reload: bool = Field(default=True, description="Enable hot reload")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")
    testing: bool = Field(default=False, description="Testing mode")

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("metrics_adapter", mode="before")
    @classmethod
    def normalize_adapter_name(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
