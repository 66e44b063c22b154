"""
Data models for the TLS assessor.

The report models mirror the JSON documents returned by the SSL Labs API.
Wire names are camelCase; attributes are snake_case and either form is
accepted when validating.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .exceptions import MissingInputError

STATUS_DNS = "DNS"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_READY = "READY"
STATUS_ERROR = "ERROR"

TERMINAL_STATUSES = frozenset({STATUS_READY, STATUS_ERROR})


def is_terminal(status: str) -> bool:
    """Return True when polling must stop for this status."""
    return status in TERMINAL_STATUSES


class WireModel(BaseModel):
    """Base model for documents exchanged with the assessment API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """Treat an explicit JSON null the same as an absent field."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Endpoint(WireModel):
    """One scanned server (by IP address) within a host assessment."""

    ip_address: str = ""
    server_name: str = ""
    status_message: str = ""
    status_details: str = ""
    status_details_message: str = ""
    grade: str = ""
    grade_trust_ignored: str = ""
    has_warnings: bool = False
    is_exceptional: bool = False
    progress: int = 0
    duration: int = 0
    eta: int = 0
    delegation: int = 0


class Host(WireModel):
    """Assessment report for one hostname, including its endpoints."""

    host: str = ""
    port: int = 0
    protocol: str = ""
    is_public: bool = False
    status: str = ""
    status_message: str = ""
    start_time: int = 0
    test_time: int = 0
    engine_version: str = ""
    criteria_version: str = ""
    cache_expiry_time: int = 0
    endpoints: list[Endpoint] = Field(default_factory=list)
    cert_hostnames: list[str] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        """Check if the assessment has finished (READY or ERROR)."""
        return is_terminal(self.status)


class Info(WireModel):
    """Service information returned by the ``/info`` call."""

    engine_version: str = ""
    criteria_version: str = ""
    max_assessments: int = 0
    current_assessments: int = 0
    new_assessment_cool_off: int = 0
    messages: list[str] = Field(default_factory=list)


class QuotaState(BaseModel):
    """
    Concurrent assessment quota advertised by the service.

    Zero for ``max_assessments`` means no limit was observed.
    """

    model_config = ConfigDict(frozen=True)

    max_assessments: int = 0
    current_assessments: int = 0


class AssessmentRequest(BaseModel):
    """Parameters of one assessment session."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Hostname to assess")
    from_cache: bool = Field(
        default=False, description="Accept a cached report instead of a new scan"
    )

    @classmethod
    def for_host(
        cls, host: str | None, from_cache: bool = False
    ) -> "AssessmentRequest":
        """
        Build a request from front-end input.

        Raises:
            MissingInputError: If no hostname was supplied
        """
        host = (host or "").strip()
        if not host:
            raise MissingInputError("a hostname is required")
        return cls(host=host, from_cache=from_cache)

    @property
    def start_new(self) -> bool:
        """Whether the first request of the session starts a fresh assessment."""
        return not self.from_cache
