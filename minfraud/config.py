"""Client configuration via environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "minfraud-client"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    license_key: str = ""
    uri: str = "https://minfraud.maxmind.com/app/ccv2r"
    # Service level sent when a transaction does not set its own
    requested_type: str | None = None
    timeout_seconds: float = 10.0

    model_config = {
        "env_prefix": "MINFRAUD_",
        "env_file": ".env",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("uri")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if not value.startswith("https://"):
            raise ValueError(f"minFraud uri must use https: {value}")
        return value


# Loaded once at import; pass an explicit Settings to override
settings = Settings()
