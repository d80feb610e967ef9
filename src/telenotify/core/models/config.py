"""Configuration models using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.telegram.org"


class ApiConfig(BaseModel):
    """Bot API connection configuration."""

    token: SecretStr = SecretStr("")
    base_url: str = DEFAULT_API_URL
    timeout: float = Field(default=5.0, gt=0)  # Seconds
    max_response_bytes: int = Field(default=100_000, ge=1)


class PollingConfig(BaseModel):
    """Poll loop configuration."""

    interval: float = Field(default=1.0, gt=0)  # Seconds between ticks
    initial_cursor: int = Field(default=0, ge=0)
    subscriber_queue_size: int = Field(default=100, ge=0)  # 0 = unbounded


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}


class Settings(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TELENOTIFY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api: ApiConfig = Field(default_factory=ApiConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open() as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary. The token is masked."""
        return self.model_dump()
