from __future__ import annotations

from typing import Optional

from .models import ErrorKind, NewsFailure


class NewsApiError(Exception):
    """Raised inside the access layer when a request cannot produce articles.

    The request service converts it into a :class:`NewsFailure` before it
    reaches callers.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
        upstream_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.upstream_code = upstream_code

    def to_failure(self) -> NewsFailure:
        return NewsFailure(
            kind=self.kind,
            message=self.message,
            status_code=self.status_code,
            upstream_code=self.upstream_code,
        )


class ValidationError(NewsApiError):
    """Raised when caller input fails local validation."""
