"""Shared primitives: errors, logging, settings."""

from podspine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    PodSpineError,
    SpecValidationError,
    TranslationError,
    UnresolvedVolumeError,
)
from podspine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from podspine.core.settings import DEFAULT_PLACEHOLDER_IMAGE, TranslatorSettings

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "PodSpineError",
    "SpecValidationError",
    "TranslationError",
    "UnresolvedVolumeError",
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    "DEFAULT_PLACEHOLDER_IMAGE",
    "TranslatorSettings",
]
