"""Configuration for the asset calendar reminder engine."""

import os
from datetime import timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from assetcal.constants import DEFAULT_GRACE_MINUTES, DEFAULT_SWEEP_MAX_DURATION_SECONDS

# Environment variables holding plain strings, keyed by config field
_STRING_SETTINGS = {
    "database_url": "DATABASE_URL",
    "environment": "ASSETCAL_ENV",
    "cron_secret": "CRON_SECRET",
    "timezone": "ASSETCAL_TIMEZONE",
    "log_filename": "LOG_FILENAME",
    "dvla_ves_api_url": "DVLA_VES_API_URL",
    "dvla_ves_api_key": "DVLA_VES_API_KEY",
    "mot_history_token_url": "MOT_HISTORY_TOKEN_URL",
    "mot_history_client_id": "MOT_HISTORY_CLIENT_ID",
    "mot_history_client_secret": "MOT_HISTORY_CLIENT_SECRET",
    "mot_history_scope": "MOT_HISTORY_SCOPE",
    "mot_history_vehicle_url": "MOT_HISTORY_VEHICLE_URL",
    "mot_history_api_key": "MOT_HISTORY_API_KEY",
}

# Environment variables holding integers, keyed by config field
_INT_SETTINGS = {
    "grace_minutes": "REMINDER_GRACE_MINUTES",
    "sweep_max_duration_seconds": "SWEEP_MAX_DURATION_SECONDS",
    "http_timeout_seconds": "HTTP_TIMEOUT_SECONDS",
}


class AssetCalConfig(BaseModel):
    """Application configuration with Pydantic validation."""

    # Storage
    database_url: str = Field(default="sqlite:///data/assetcal.db")

    # Runtime
    environment: str = Field(default="production")
    cron_secret: str | None = None
    timezone: str = Field(default="UTC")

    # Reminder sweep
    grace_minutes: int = Field(default=DEFAULT_GRACE_MINUTES, ge=0)
    sweep_max_duration_seconds: int = Field(
        default=DEFAULT_SWEEP_MAX_DURATION_SECONDS, ge=1
    )

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="assetcal.log")

    # Vehicle data sources
    dvla_ves_api_url: str = Field(
        default="https://driver-vehicle-licensing.api.gov.uk/vehicle-enquiry/v1/vehicles"
    )
    dvla_ves_api_key: str | None = None
    mot_history_token_url: str | None = None
    mot_history_client_id: str | None = None
    mot_history_client_secret: str | None = None
    mot_history_scope: str | None = None
    mot_history_vehicle_url: str | None = None
    mot_history_api_key: str | None = None
    http_timeout_seconds: int = Field(default=30, ge=1)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown IANA time zone names."""
        try:
            ZoneInfo(v)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def is_development(self) -> bool:
        """True when running in the development environment."""
        return self.environment.lower() == "development"

    @property
    def grace_window(self) -> timedelta:
        """Grace window applied by the reminder sweep."""
        return timedelta(minutes=self.grace_minutes)

    @property
    def tzinfo(self) -> ZoneInfo:
        """Time zone used to compute all-day windows."""
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> "AssetCalConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv()

        config_dict = {}

        for field_name, env_name in _STRING_SETTINGS.items():
            if env_name in os.environ:
                config_dict[field_name] = os.environ[env_name]

        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])

        for field_name, env_name in _INT_SETTINGS.items():
            if env_name in os.environ:
                try:
                    config_dict[field_name] = int(os.environ[env_name])
                except ValueError:
                    pass  # Keep default if invalid

        return cls(**config_dict)
