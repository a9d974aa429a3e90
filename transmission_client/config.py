import os
from dataclasses import dataclass
from typing import Optional

import dotenv


dotenv.load_dotenv()


# Defaults
DEBUG = False
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "DEBUG" if DEBUG else "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

DEFAULT_ADDRESS = "http://localhost:9091/transmission/rpc"

# Transmission defaults
TRANSMISSION_ADDRESS = DEFAULT_ADDRESS
TRANSMISSION_USERNAME = ""
TRANSMISSION_PASSWORD = ""
TRANSMISSION_SKIP_CHECK_SSL = False
TRANSMISSION_TIMEOUT = ""


def _optional_float(value):
    return float(value) if value else None


class Config:
    DEBUG = os.getenv("DEBUG", str(DEBUG)).lower() == "true"
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # Transmission Configuration
    TRANSMISSION_ADDRESS = os.getenv("TRANSMISSION_ADDRESS", TRANSMISSION_ADDRESS)
    TRANSMISSION_USERNAME = os.getenv("TRANSMISSION_USERNAME", TRANSMISSION_USERNAME)
    TRANSMISSION_PASSWORD = os.getenv("TRANSMISSION_PASSWORD", TRANSMISSION_PASSWORD)
    # Only set this for daemons behind a self-signed certificate.
    TRANSMISSION_SKIP_CHECK_SSL = os.getenv(
        "TRANSMISSION_SKIP_CHECK_SSL", str(TRANSMISSION_SKIP_CHECK_SSL)
    ).lower() == "true"
    TRANSMISSION_TIMEOUT = _optional_float(os.getenv("TRANSMISSION_TIMEOUT", TRANSMISSION_TIMEOUT))


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for a single Transmission daemon.

    Immutable once built. An empty address falls back to DEFAULT_ADDRESS, so
    ``ClientConfig()`` targets a daemon on localhost with no authentication.

    Args:
        address: Full RPC endpoint URL
        username: Basic auth username (optional)
        password: Basic auth password (optional)
        skip_check_ssl: Disable TLS certificate verification
        timeout: Seconds handed to the HTTP layer; None waits forever
    """
    address: str = DEFAULT_ADDRESS
    username: str = ""
    password: str = ""
    skip_check_ssl: bool = False
    timeout: Optional[float] = None

    def __post_init__(self):
        if not self.address:
            object.__setattr__(self, "address", DEFAULT_ADDRESS)

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from TRANSMISSION_* environment variables."""
        return cls(
            address=Config.TRANSMISSION_ADDRESS,
            username=Config.TRANSMISSION_USERNAME,
            password=Config.TRANSMISSION_PASSWORD,
            skip_check_ssl=Config.TRANSMISSION_SKIP_CHECK_SSL,
            timeout=Config.TRANSMISSION_TIMEOUT,
        )
