"""
Structured error types for podspine.

The translation core is total: every mapper has a defined output for every
input, so the pure functions in :mod:`podspine.engine.convert` never raise.
Errors only appear at the opt-in hardening seams: strict mount resolution
in the :class:`~podspine.engine.translator.Translator`, the
:class:`~podspine.engine.validator.SpecValidator`, and settings loading.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      PodSpineError                           │
        │        (category, retryable, context, cause)                │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError          TranslationError    SpecValidationError│
        │  (CONFIG)             (TRANSLATION)       (VALIDATION)       │
        │                            │                                 │
        │                  UnresolvedVolumeError                       │
        └─────────────────────────────────────────────────────────────┘

No error type is retryable by default. ``retryable`` can be set per
instance and is included in :meth:`PodSpineError.to_dict`.

Examples:
    >>> error = TranslationError("step references unknown volume")
    >>> error.with_context(pod="build-42", step="clone")
    TranslationError('step references unknown volume', category=TRANSLATION)
    >>> error.context.step
    'clone'
    >>> error.to_dict()["category"]
    'TRANSLATION'

Tags:
    error-handling, exception-hierarchy, error-context, podspine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from podspine.engine.translator import UnresolvedMount


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        VALIDATION: Spec fails a structural check (duplicates, dangling refs)
        CONFIG: Missing or invalid translator settings
        TRANSLATION: Spec cannot be translated under the active policy
        INTERNAL: Bugs, unexpected state
    """

    VALIDATION = "VALIDATION"     # Duplicate ids, dangling references
    CONFIG = "CONFIG"             # Invalid settings
    TRANSLATION = "TRANSLATION"   # Strict-mode translation failures
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what the translator knows about (pod, step, volume);
    anything else goes into ``metadata``. ``to_dict()`` drops unset fields
    so log lines stay small.

    Examples:
        >>> ctx = ErrorContext(pod="build-42", step="clone")
        >>> ctx.to_dict()
        {'pod': 'build-42', 'step': 'clone'}
    """

    pod: str | None = None
    namespace: str | None = None
    step: str | None = None
    volume: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["pod", "namespace", "step", "volume"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PodSpineError(Exception):
    """
    Base exception for all podspine errors.

    Every instance carries a ``category`` for routing, a ``retryable`` flag,
    an :class:`ErrorContext`, and an optional chained ``cause``. Subclasses
    set ``default_category`` and ``default_retryable``.

    Examples:
        >>> error = PodSpineError("Unexpected state")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PodSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise TranslationError("Failed").with_context(pod="build-42")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(PodSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


# =============================================================================
# TRANSLATION ERRORS
# =============================================================================


class TranslationError(PodSpineError):
    """A spec could not be translated under the active policy."""

    default_category = ErrorCategory.TRANSLATION


class UnresolvedVolumeError(TranslationError):
    """
    One or more step mounts reference a volume name that is not declared.

    Raised only in strict mode; the default translation drops such mounts.
    The full list of offending mounts is kept on ``unresolved``.
    """

    def __init__(self, unresolved: list[UnresolvedMount], **kwargs: Any):
        self.unresolved = list(unresolved)
        refs = ", ".join(f"{m.step_id}:{m.name}" for m in self.unresolved)
        super().__init__(f"Unresolved volume references: {refs}", **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["unresolved"] = [
            {"step_id": m.step_id, "name": m.name, "path": m.path}
            for m in self.unresolved
        ]
        return result


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class SpecValidationError(PodSpineError):
    """
    A spec failed pre-translation validation.

    Never retryable - the spec must be fixed. ``violations`` holds every
    message the validator collected.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, violations: list[str], **kwargs: Any):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations), **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["violations"] = list(self.violations)
        return result


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PodSpineError",
    "ConfigError",
    "TranslationError",
    "UnresolvedVolumeError",
    "SpecValidationError",
]
