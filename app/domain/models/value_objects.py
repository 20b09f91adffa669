"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.
"""

from typing import Union
from datetime import datetime, timezone
from dataclasses import dataclass

from app.domain.models.base import ValueObject, ValidationError


RawTimestamp = Union[int, float, str, datetime]


@dataclass(frozen=True)
class Timestamp(ValueObject):
    """
    Point in time as supplied by the data layer.

    Accepts epoch milliseconds, an ISO-8601 string or a datetime. Naive
    datetimes are taken to be UTC.
    """

    value: RawTimestamp

    def validate(self) -> None:
        """Validate that the raw value can be read as an instant."""
        if isinstance(self.value, bool):
            raise ValidationError("Timestamp cannot be a boolean", "timestamp")
        self.to_datetime()

    def to_datetime(self) -> datetime:
        """Get the instant as an aware UTC datetime."""
        value = self.value
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)

        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                raise ValidationError(f"Invalid timestamp: {value}", "timestamp")
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)

        raise ValidationError(f"Unsupported timestamp type: {type(value).__name__}", "timestamp")

    @property
    def epoch_ms(self) -> int:
        """Get the instant as epoch milliseconds."""
        return int(self.to_datetime().timestamp() * 1000)

    def isoformat(self) -> str:
        return self.to_datetime().isoformat()

    def __str__(self) -> str:
        return self.isoformat()
