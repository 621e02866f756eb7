"""
Configuration management for FlightMint.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    username: Optional[str] = os.getenv('OPENSKY_USERNAME') or None
    password: Optional[str] = os.getenv('OPENSKY_PASSWORD') or None
    base_url: str = os.getenv('OPENSKY_BASE_URL', 'https://opensky-network.org/api')
    timeout_seconds: float = float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '30'))


@dataclass(frozen=True)
class CacheConfig:
    """Upstream response cache settings."""
    ttl_seconds: int = int(os.getenv('CACHE_TTL_SECONDS', '60'))
    max_entries: int = 32  # One entry per distinct upstream URL


@dataclass(frozen=True)
class ClientConfig:
    """Settings for the flight tracker client."""
    api_url: str = os.getenv('FLIGHTMINT_API_URL', 'http://localhost:5000')
    timeout_seconds: float = float(os.getenv('CLIENT_TIMEOUT_SECONDS', '15'))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    cache: CacheConfig
    client: ClientConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        opensky=OpenSkyConfig(),
        cache=CacheConfig(),
        client=ClientConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
