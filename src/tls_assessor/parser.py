"""
Payload decoding for assessment API responses.
"""

from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from .exceptions import DecodeError
from .models import Host, Info

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode(model: type[ModelT], payload: bytes | str) -> ModelT:
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        logger.error(
            "Failed to decode payload",
            model=model.__name__,
            error_count=e.error_count(),
            error=str(e),
        )
        raise DecodeError(
            f"invalid {model.__name__} payload: {e.errors()[0]['msg']}",
            context={"model": model.__name__, "errors": e.error_count()},
        ) from e


def parse_host(payload: bytes | str) -> Host:
    """
    Decode an ``analyze`` response into a Host report.

    Args:
        payload: Raw JSON response body

    Returns:
        A fresh Host snapshot

    Raises:
        DecodeError: If the payload is not a JSON object matching the schema
    """
    return _decode(Host, payload)


def parse_info(payload: bytes | str) -> Info:
    """Decode an ``info`` response."""
    return _decode(Info, payload)
