"""Errors raised while reconciling an edge binding."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .validation import FieldFailure


class EdgeWafError(RuntimeError):
    """Base class for failures talking to the WAF vendor API."""


class RemoteAPIError(EdgeWafError):
    """Raised when the vendor API answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API request failed: {status_code}\n{body}")
        self.status_code = status_code
        self.body = body


class RemoteRequestError(EdgeWafError):
    """Raised when a request could not be completed (network failure, timeout)."""


class InvalidBindingError(ValueError):
    """Raised when a mutation is attempted with inputs that fail validation."""

    def __init__(self, failures: Sequence[FieldFailure]) -> None:
        reasons = "; ".join(failure.reason for failure in failures)
        super().__init__(f"Invalid edge binding: {reasons}")
        self.failures = tuple(failures)
