"""Declarative validators for request fields.

Each request field gets exactly one validator instance; the request service
runs them before any cache or network work happens.

Updates: v0.1 - 2026-10-18 - Replaced inline checks with per-field validator objects.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Collection, Optional, Pattern, cast

from .config import (
    CATEGORIES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_ORDER,
    LANGUAGES,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    MAX_QUERY_LENGTH,
    MIN_PAGE_SIZE,
    SORT_ORDERS,
)
from .exceptions import ValidationError
from .models import ErrorKind, NewsFailure

logger = logging.getLogger(__name__)

# Letters, digits, underscore and whitespace come from \w and \s (unicode aware).
QUERY_PATTERN = re.compile(r"[\w\s.,'\"!?&()+:#-]+")


@dataclass(frozen=True)
class ValidationResult:
    value: Any = None
    error: Optional[NewsFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise ValidationError(self.error.kind, self.error.message)
        return self.value


def _fail(kind: ErrorKind, message: str) -> ValidationResult:
    return ValidationResult(error=NewsFailure(kind=kind, message=message))


@dataclass(frozen=True)
class ChoiceValidator:
    """Membership check against a fixed set of values.

    With ``fallback`` set, unknown values resolve to it instead of failing.
    """

    name: str
    choices: Collection[str]
    error_kind: ErrorKind
    required: bool = False
    default: Optional[str] = None
    fallback: Optional[str] = None
    normalize: Optional[Callable[[str], str]] = None

    def __call__(self, value: Any) -> ValidationResult:
        if value is None or (isinstance(value, str) and not value.strip()):
            if self.required:
                return _fail(self.error_kind, f"{self.name} is required")
            return ValidationResult(value=self.default)
        candidate = value.strip() if isinstance(value, str) else value
        if isinstance(candidate, str) and self.normalize is not None:
            candidate = self.normalize(candidate)
        if candidate in self.choices:
            return ValidationResult(value=candidate)
        if self.fallback is not None:
            logger.debug(
                "Unknown %s %r; using %r instead.", self.name, value, self.fallback
            )
            return ValidationResult(value=self.fallback)
        return _fail(self.error_kind, f"Unsupported {self.name}: {value!r}")


@dataclass(frozen=True)
class RangeValidator:
    """Integer bound check; ``clamp`` pulls out-of-range values inside."""

    name: str
    minimum: int
    maximum: int
    default: int
    error_kind: Optional[ErrorKind] = None
    clamp: bool = False

    def __post_init__(self) -> None:
        if not self.clamp and self.error_kind is None:
            raise ValueError(f"{self.name}: a non-clamping validator needs an error kind")

    def __call__(self, value: Any) -> ValidationResult:
        if value is None:
            return ValidationResult(value=self.default)
        if isinstance(value, bool) or not isinstance(value, int):
            if self.clamp:
                return ValidationResult(value=self.default)
            return _fail(self._kind(), f"{self.name} must be an integer, got {value!r}")
        if self.clamp:
            return ValidationResult(value=max(self.minimum, min(self.maximum, value)))
        if value < self.minimum or value > self.maximum:
            return _fail(
                self._kind(),
                f"{self.name} must be between {self.minimum} and {self.maximum}, got {value}",
            )
        return ValidationResult(value=value)

    def _kind(self) -> ErrorKind:
        return cast(ErrorKind, self.error_kind)


@dataclass(frozen=True)
class TextValidator:
    """Required free text with a length bound and a character allow-list."""

    name: str
    max_length: int
    pattern: Pattern[str]
    error_kind: ErrorKind

    def __call__(self, value: Any) -> ValidationResult:
        if not isinstance(value, str) or not value.strip():
            return _fail(self.error_kind, f"{self.name} is required")
        text = value.strip()
        if len(text) > self.max_length:
            return _fail(
                self.error_kind,
                f"{self.name} must be at most {self.max_length} characters",
            )
        if not self.pattern.fullmatch(text):
            return _fail(self.error_kind, f"{self.name} contains unsupported characters")
        return ValidationResult(value=text)


validate_category = ChoiceValidator(
    name="category",
    choices=CATEGORIES,
    error_kind=ErrorKind.INVALID_CATEGORY,
    normalize=str.lower,
)
validate_language = ChoiceValidator(
    name="language",
    choices=tuple(LANGUAGES),
    error_kind=ErrorKind.UNSUPPORTED_LANGUAGE,
    normalize=str.lower,
)
validate_sort_order = ChoiceValidator(
    name="sortBy",
    choices=SORT_ORDERS,
    error_kind=ErrorKind.INVALID_QUERY,
    default=DEFAULT_SORT_ORDER,
    fallback=DEFAULT_SORT_ORDER,
)
validate_page = RangeValidator(
    name="page",
    minimum=1,
    maximum=MAX_PAGE,
    default=DEFAULT_PAGE,
    error_kind=ErrorKind.INVALID_PAGE,
)
validate_page_size = RangeValidator(
    name="pageSize",
    minimum=MIN_PAGE_SIZE,
    maximum=MAX_PAGE_SIZE,
    default=DEFAULT_PAGE_SIZE,
    clamp=True,
)
validate_query = TextValidator(
    name="query",
    max_length=MAX_QUERY_LENGTH,
    pattern=QUERY_PATTERN,
    error_kind=ErrorKind.INVALID_QUERY,
)


__all__ = [
    "ChoiceValidator",
    "QUERY_PATTERN",
    "RangeValidator",
    "TextValidator",
    "ValidationResult",
    "validate_category",
    "validate_language",
    "validate_page",
    "validate_page_size",
    "validate_query",
    "validate_sort_order",
]
