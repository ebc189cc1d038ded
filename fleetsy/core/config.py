from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FLEETSY_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    devices_file: Path = Field(default=Path("devices.csv"))
    devices_file_has_header: bool = Field(default=True)

    cors_origins: list[str] = Field(default_factory=list)
    # Empty accepts any Host header; devices reach the service by arbitrary names/IPs.
    trusted_hosts: list[str] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level '{v}'.")
        return level

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    return Settings()
