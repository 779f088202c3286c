"""Client configuration using pydantic-settings.

``Settings`` supplies environment-driven defaults; ``ClientConfig`` is the
immutable value a client is built with. Nothing reads process-wide state
after a client has been constructed.
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clawswap.polling import TERMINAL_STATUSES_V2, terminal_statuses_for

DEFAULT_BASE_URL = "https://api.clawswap.dev"


class Settings(BaseSettings):
    """Defaults loaded from CLAWSWAP_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLAWSWAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_url: str = Field(default=DEFAULT_BASE_URL, description="ClawSwap API base URL")
    user_agent: str = Field(default="clawswap-python/0.1.0", description="User-Agent header")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    # ======================
    # Settlement polling
    # ======================
    poll_timeout_seconds: float = Field(
        default=300.0, gt=0, description="Budget for waiting on settlement"
    )
    poll_interval_seconds: float = Field(
        default=3.0, ge=0, description="Delay between status polls"
    )
    status_protocol: str = Field(
        default="v2", description="Status protocol revision (selects terminal statuses)"
    )

    @field_validator("status_protocol")
    @classmethod
    def _known_status_protocol(cls, value: str) -> str:
        terminal_statuses_for(value)
        return value.lower()

    @property
    def terminal_statuses(self) -> frozenset[str]:
        return terminal_statuses_for(self.status_protocol)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class ClientConfig(BaseModel):
    """Immutable configuration for one ``ClawSwapClient``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    headers: dict[str, str] = Field(default_factory=dict, description="Headers sent on every request")
    terminal_statuses: frozenset[str] = Field(
        default=TERMINAL_STATUSES_V2, description="Statuses that end settlement polling"
    )
    poll_timeout: float = Field(default=300.0, gt=0, description="Settlement wait budget in seconds")
    poll_interval: float = Field(default=3.0, ge=0, description="Seconds between status polls")

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @field_validator("terminal_statuses")
    @classmethod
    def _non_empty_terminal_set(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("terminal_statuses must not be empty")
        return value

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: Any) -> "ClientConfig":
        """Build a config from settings, then apply non-None overrides."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "base_url": settings.api_url,
            "timeout": settings.timeout_seconds,
            "headers": {"User-Agent": settings.user_agent},
            "terminal_statuses": settings.terminal_statuses,
            "poll_timeout": settings.poll_timeout_seconds,
            "poll_interval": settings.poll_interval_seconds,
        }
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "headers":
                values["headers"] = {**values["headers"], **value}
            else:
                values[key] = value
        return cls(**values)
