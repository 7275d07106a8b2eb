"""Custom exceptions for the deal store and deal operations."""

from __future__ import annotations


class DealTrackerError(Exception):
    """Base exception for deal tracker errors. str() is the user-facing message."""

    pass


class MissingRequiredConfigError(DealTrackerError):
    """Raised when a required configuration value is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing required configuration: {setting}")
        self.setting = setting


class ValidationError(DealTrackerError):
    """Raised when deal input or a list request is malformed before reaching the store."""

    pass


class NotFoundError(DealTrackerError):
    """Raised when no deal exists for the requested id."""

    def __init__(self, deal_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Deal not found: {deal_id}")
        self.deal_id = deal_id


class StoreError(DealTrackerError):
    """Raised when a remote store request fails (network, timeout, HTTP error)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(StoreError):
    """Raised when the store keeps returning HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after
