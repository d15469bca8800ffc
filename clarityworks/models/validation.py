import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from .payloads import ClientPayload
from .schemas import Client, MeetingPrep

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Outcome of checking an untrusted payload: a value, or the reason there is none."""

    value: Optional[T] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, value: T) -> "Validated[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "Validated[T]":
        return cls(reason=reason)


def _describe(payload: Any) -> str:
    return type(payload).__name__


def validate_meeting_prep(payload: Any) -> Validated[MeetingPrep]:
    if not isinstance(payload, dict):
        return Validated.failure(f"expected a JSON object, got {_describe(payload)}")
    try:
        return Validated.success(MeetingPrep.model_validate(payload))
    except ValidationError as e:
        logger.warning(f"Meeting prep payload rejected: {e}")
        return Validated.failure(str(e))


def validate_client_payload(payload: Any) -> Validated[Client]:
    if not isinstance(payload, dict):
        return Validated.failure(f"expected a JSON object, got {_describe(payload)}")
    try:
        return Validated.success(ClientPayload.model_validate(payload).to_client())
    except ValidationError as e:
        logger.warning(f"Client payload rejected: {e}")
        return Validated.failure(str(e))
