"""
Custom exceptions for the TLS assessor.

This module defines the typed failure conditions an assessment session can
end with, so front ends can map each one to the right outward status.
"""

from typing import Any


class AssessmentError(Exception):
    """Base exception for TLS assessor errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "ASSESSMENT_ERROR"
        self.context = context or {}


class TransportError(AssessmentError):
    """Base exception for failures talking to the assessment API."""


class TransportTransientError(TransportError):
    """Exception for 503/529 responses that persisted through every retry."""

    def __init__(
        self,
        message: str,
        status_code: int,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "TRANSPORT_TRANSIENT", context)
        self.status_code = status_code


class TransportPermanentError(TransportError):
    """Exception for responses that retrying will not fix (400, 429, 500)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "TRANSPORT_PERMANENT", context)
        self.status_code = status_code


class NetworkError(TransportError):
    """Exception for connection-level failures (refused, timeout, DNS)."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "NETWORK_ERROR", context)


class DecodeError(AssessmentError):
    """Exception for payloads that do not match the expected schema."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "DECODE_ERROR", context)


class QuotaExceededError(AssessmentError):
    """Exception raised when the service reports no free assessment slots."""

    def __init__(
        self,
        message: str,
        max_assessments: int = 0,
        current_assessments: int = 0,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "QUOTA_EXCEEDED", context)
        self.max_assessments = max_assessments
        self.current_assessments = current_assessments


class PollLimitExceededError(AssessmentError):
    """Exception raised when a session exceeds the configured poll ceiling."""

    def __init__(
        self,
        message: str,
        polls: int = 0,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "POLL_LIMIT_EXCEEDED", context)
        self.polls = polls


class MissingInputError(AssessmentError):
    """Exception for front-end requests that lack a hostname."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "MISSING_INPUT", context)


class ConfigurationError(AssessmentError):
    """Exception for configuration related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "CONFIGURATION_ERROR", context)
