from pathlib import Path
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vodafone_epg import __version__


logger = logging.getLogger(__name__)

GRABBER_NAME = "tv_grab_pt_vodafone"


class CustomSettings(BaseSettings):
    """Grabber settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    base_url: str = "https://cdn.pt.vtv.vodafone.com/epg"
    request_timeout_sec: float = 30.0
    request_delay_sec: float = 0.1  # Fixed pause before every API call
    max_days: int = 7  # Days of listings the provider exposes
    default_days: int = 7
    channel_id_suffix: str = ".tv.vodafone.pt"
    image_system: str = "vodafone.pt"
    user_agent: str = f"{GRABBER_NAME}/{__version__}"
    channels_file: str | None = None
    xmltv_home: Path = Path.home() / ".xmltv"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="VODAFONE_EPG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Validate the API base URL is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"base_url must be HTTP/HTTPS: {value}")
        return value.rstrip("/")

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        return value

    @field_validator("request_delay_sec")
    @classmethod
    def validate_delay(cls, value: float) -> float:
        """Validate inter-request delay (seconds)."""
        if value < 0:
            raise ValueError("request_delay_sec must be >= 0")
        return value

    @field_validator("max_days")
    @classmethod
    def validate_max_days(cls, value: int) -> int:
        """Validate the provider window is positive and reasonable."""
        if value < 1:
            raise ValueError("max_days must be >= 1")
        if value > 31:
            raise ValueError("max_days must be <= 31 days")
        return value

    @field_validator("default_days")
    @classmethod
    def validate_default_days(cls, value: int) -> int:
        if value < 1:
            raise ValueError("default_days must be >= 1")
        return value

    @field_validator("channel_id_suffix")
    @classmethod
    def validate_suffix(cls, value: str) -> str:
        if not value:
            raise ValueError("channel_id_suffix must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @property
    def default_config_file(self) -> Path:
        """Grabber configuration file inside the XMLTV home directory."""
        return self.xmltv_home / f"{GRABBER_NAME}.conf"

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.debug("Configuration loaded:")
        logger.debug("  API Base URL: %s", self.base_url)
        logger.debug("  Request Timeout: %ss", self.request_timeout_sec)
        logger.debug("  Request Delay: %ss", self.request_delay_sec)
        logger.debug("  Max Days: %s", self.max_days)
        logger.debug("  Channel ID Suffix: %s", self.channel_id_suffix)
        logger.debug("  Channels File: %s", self.channels_file or "bundled")
        logger.debug("  Config File: %s", self.default_config_file)


settings = CustomSettings()


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
