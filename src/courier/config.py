"""Central configuration for Courier.

All settings are loaded from environment variables (with ``.env`` file
support via *python-dotenv* in :mod:`courier.__main__`).  Validation and
type coercion are handled by ``pydantic-settings``.

Usage::

    from courier.config import get_settings

    settings = get_settings()
    print(settings.FEEDBACK_THEME)

The :func:`get_settings` helper creates the :class:`CourierSettings`
singleton lazily so that importing this module never triggers validation
before the environment is populated.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from courier.feedback.themes import THEMES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------


class CourierSettings(BaseSettings):
    """Validated configuration for the feedback library and demo bot.

    Required fields (no defaults):
        ``DISCORD_TOKEN``
    """

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Required -- no defaults
    # ------------------------------------------------------------------
    DISCORD_TOKEN: str = Field(
        ...,
        description="Discord bot token from the Developer Portal.",
    )

    # ------------------------------------------------------------------
    # Discord
    # ------------------------------------------------------------------
    DISCORD_API_BASE_URL: str = Field(
        default="https://discord.com/api/v10",
        description="Base URL used by the REST transport.",
    )
    COMMAND_PREFIX: str = Field(
        default="!",
        min_length=1,
        description="Prefix for text commands in the demo bot.",
    )
    SYNC_COMMANDS: bool = Field(
        default=False,
        description="Sync the application command tree on startup.",
    )

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------
    FEEDBACK_THEME: str = Field(
        default="dark",
        description="Built-in colour theme: 'dark' or 'light'.",
    )
    FEEDBACK_CHUNK_THRESHOLD: int = Field(
        default=1024,
        ge=64,
        le=2048,
        description=(
            "Nominal embed length before content is split.  Discord's hard "
            "limit is well above this, leaving room for overlong words."
        ),
    )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    HTTP_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Total per-request timeout for the REST transport, in seconds.",
    )
    HTTP_MAX_RETRIES: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts made on HTTP 429 before a send fails.",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("FEEDBACK_THEME", mode="before")
    @classmethod
    def _normalise_theme(cls, value: Any) -> str:
        name = str(value).strip().lower()
        if name not in THEMES:
            raise ValueError(
                f"FEEDBACK_THEME must be one of {sorted(THEMES)}, got {value!r}"
            )
        return name

    # ------------------------------------------------------------------
    # Repr safety -- redact secrets in logs / debug output
    # ------------------------------------------------------------------

    _SENSITIVE_FIELDS: ClassVar[set[str]] = {"DISCORD_TOKEN"}

    def __repr__(self) -> str:
        fields = []
        for name in type(self).model_fields:
            val = getattr(self, name)
            if name in self._SENSITIVE_FIELDS:
                val = "***" if val else None
            fields.append(f"{name}={val!r}")
        return f"CourierSettings({', '.join(fields)})"


# ---------------------------------------------------------------------------
# Lazy singleton accessor
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def get_settings() -> CourierSettings:
    """Return the global :class:`CourierSettings` singleton.

    Raises:
        pydantic.ValidationError: If ``DISCORD_TOKEN`` is missing or any
            value fails validation.
    """
    logger.debug("Initialising CourierSettings from environment.")
    return CourierSettings()  # type: ignore[call-arg]
