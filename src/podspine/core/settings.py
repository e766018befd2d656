"""Translator settings.

``TranslatorSettings`` holds everything the translator treats as injected
configuration rather than hard-coded policy: the placeholder image stamped
on every container, how step secrets reach the container, whether dangling
mount references are fatal, and the logging knobs.

Values come from keyword arguments, then ``PODSPINE_*`` environment
variables, then a ``.env`` file, then the field defaults.

Examples:
    >>> settings = TranslatorSettings(secret_mode="reference")
    >>> settings.placeholder_image
    'drone/placeholder:1'

    PODSPINE_PLACEHOLDER_IMAGE=registry.local/placeholder:2 overrides the image.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PLACEHOLDER_IMAGE = "drone/placeholder:1"

SecretMode = Literal["inline", "reference"]


class TranslatorSettings(BaseSettings):
    """Settings for :class:`~podspine.engine.translator.Translator`.

    Fields
    ──────
    placeholder_image : Image set on every container; the real image is
                        injected by the submission client
    secret_mode       : "inline" exposes secrets as plaintext env values,
                        "reference" wires an envFrom secretRef per step
    strict_mounts     : Raise instead of dropping unresolved volume mounts
    log_level         : Structlog log level
    json_logs         : JSON log output; None auto-detects from the TTY
    """

    model_config = SettingsConfigDict(
        env_prefix="PODSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    placeholder_image: str = Field(
        default=DEFAULT_PLACEHOLDER_IMAGE,
        description="Image stamped on every container",
    )
    secret_mode: SecretMode = Field(
        default="inline",
        description="How step secrets are exposed to containers",
    )
    strict_mounts: bool = Field(
        default=False,
        description="Raise UnresolvedVolumeError on dangling mount references",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("placeholder_image")
    @classmethod
    def _image_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("placeholder_image must not be blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level
