"""
Environment configuration.

Values come from the process environment, with a ``.env`` file loaded first
when present.
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from resource_query.adapters.geocoding.mapquest import DEFAULT_BASE_URL
from resource_query.core.models import DEFAULT_RADIUS_KM


class Settings(BaseModel):
    """Configuration for the API process."""

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "sitters"
    geocoder_api_key: Optional[str] = None
    geocoder_base_url: str = DEFAULT_BASE_URL
    geocoder_timeout: float = 10.0
    default_radius_km: float = DEFAULT_RADIUS_KM
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables, keeping defaults for unset ones."""
        env_names = {
            "mongo_uri": "MONGO_URI",
            "mongo_database": "MONGO_DATABASE",
            "geocoder_api_key": "GEOCODER_API_KEY",
            "geocoder_base_url": "GEOCODER_BASE_URL",
            "geocoder_timeout": "GEOCODER_TIMEOUT",
            "default_radius_km": "DEFAULT_RADIUS_KM",
            "log_level": "LOG_LEVEL",
            "api_host": "API_HOST",
            "api_port": "API_PORT",
        }
        values = {
            field: os.getenv(env_name)
            for field, env_name in env_names.items()
            if os.getenv(env_name) is not None
        }
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    load_dotenv()
    return Settings.from_env()
