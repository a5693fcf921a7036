import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

API_KEY_ENV = "PIXABAY_API_KEY"
TIMEOUT_ENV = "PIXABAY_TIMEOUT"

BASE_URL = "https://pixabay.com/api/"
VIDEO_URL = "https://pixabay.com/api/videos/"
DEFAULT_TIMEOUT = 15.0


class PixabaySettings(BaseModel):
    """Read-only settings shared by every tool invocation.

    Loaded once at startup. A missing API key is not an error here: it is
    reported per invocation so the server can still start and list its tools.
    """
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT
    image_url: str = BASE_URL
    video_url: str = VIDEO_URL

    @field_validator("api_key", mode='before')
    @classmethod
    def blank_key_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("timeout")
    @classmethod
    def positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be greater than 0")
        return v

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "PixabaySettings":
        if load_dotenv_file:
            load_dotenv()
        values = {"api_key": os.getenv(API_KEY_ENV)}
        timeout = os.getenv(TIMEOUT_ENV)
        if timeout:
            values["timeout"] = timeout
        settings = cls(**values)
        if not settings.has_api_key:
            logger.warning(f"{API_KEY_ENV} is not set; every search will be rejected until it is configured.")
        return settings
