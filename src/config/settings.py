"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WarehouseSettings(BaseSettings):
    """Stock rules: thresholds and expiration windows."""

    model_config = SettingsConfigDict(env_prefix="WAREHOUSE_")

    # Quantity below which a lot is low-stock
    low_stock_threshold: int = Field(default=10, ge=1)
    # Per-product overrides, e.g. WAREHOUSE_LOW_STOCK_OVERRIDES='{"PROD-1": 25}'
    low_stock_overrides: dict[str, int] = Field(default_factory=dict)

    # Expiration windows (days)
    expiring_days: int = 7
    critical_days: int = 3
    warning_days: int = 7

    dispatch_queue_limit: int = 10
    default_performer: str = "System"

    def threshold_for(self, product_id: str | None) -> int:
        """Low-stock threshold for a product, falling back to the global one."""
        if product_id is not None and product_id in self.low_stock_overrides:
            return self.low_stock_overrides[product_id]
        return self.low_stock_threshold


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "warehouse.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Warehouse FIFO Engine"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    warehouse: WarehouseSettings = Field(default_factory=WarehouseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
