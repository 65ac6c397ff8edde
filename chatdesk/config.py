"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat client.
Values come from the process environment, after a `.env` file is loaded.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean feature flag from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_url: Base URL of the assistant endpoint.
        ask_path: Route of the question/answer operation.
        request_timeout: Seconds to wait for the assistant before giving up.
        modes_enabled: Whether the mode selector (search/study/image) is offered.
        voice_enabled: Whether dictation and spoken playback are offered.
        dictation_locale: Recognition locale (None for the device default).
        auto_send_delay: Seconds between a final transcript and auto-submit.
    """

    # Defaults come from the environment and must pass the same checks
    model_config = ConfigDict(validate_default=True)

    api_url: str = Field(
        default_factory=lambda: os.getenv("CHAT_API_URL", "http://localhost:8000"),
        description="Assistant endpoint base URL",
    )
    ask_path: str = Field(
        default_factory=lambda: os.getenv("CHAT_ASK_PATH", "/ai/ask"),
        description="Route of the ask operation",
    )
    request_timeout: float = Field(
        default_factory=lambda: os.getenv("CHAT_REQUEST_TIMEOUT", "120"),
        gt=0.0,
        le=600.0,
        description="Seconds to wait for an assistant response",
    )
    modes_enabled: bool = Field(
        default_factory=lambda: _env_flag("CHAT_MODES_ENABLED", True),
        description="Offer search/study/create-image modes",
    )
    voice_enabled: bool = Field(
        default_factory=lambda: _env_flag("CHAT_VOICE_ENABLED", True),
        description="Offer dictation and spoken playback",
    )
    dictation_locale: str | None = Field(
        default_factory=lambda: os.getenv("CHAT_DICTATION_LOCALE") or None,
        description="Speech recognition locale (None for device default)",
    )
    auto_send_delay: float = Field(
        default_factory=lambda: os.getenv("CHAT_AUTO_SEND_DELAY", "0.5"),
        ge=0.0,
        le=10.0,
        description="Delay before a dictated question is sent",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("CHAT_API_URL must be an http:// or https:// URL")
        return v

    @field_validator("ask_path")
    @classmethod
    def validate_ask_path(cls, v: str) -> str:
        """Normalize the route to a single leading slash."""
        v = v.strip()
        if not v:
            raise ValueError("CHAT_ASK_PATH must not be empty")
        return "/" + v.lstrip("/")

    @property
    def ask_url(self) -> str:
        """Full URL of the ask operation."""
        return f"{self.api_url}{self.ask_path}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValidationError: If an environment value is invalid.
    """
    return ClientConfig()
