"""Shared base for immutable domain models.

Every value object and the Character aggregate derive from ValueObject:
frozen pydantic models whose invariants are enforced by model validators
raising the application's ValidationError. Pydantic's own type errors are
converted to the same exception at the ``from_data`` boundary so callers
only ever see one validation error family.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from gamebook_companion.core.exceptions import ValidationError


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps from old records as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ValueObject(BaseModel):
    """Base class for frozen domain models.

    Field names are snake_case in Python and camelCase in the persisted
    record; both spellings are accepted when hydrating. Validation is
    strict: a stored ``"20"`` or ``true`` never passes for an int. Fields
    whose JSON form differs from their Python type (timestamps, enums and
    tuples) opt out per field.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> Self:
        """Hydrate an instance from a raw record.

        Args:
            data: Record using camelCase (persisted) or snake_case keys.

        Returns:
            A validated instance.

        Raises:
            ValidationError: If the record is malformed or breaks an invariant.
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ValidationError(
                f"Invalid {cls.__name__} data: {first['msg']}",
                field_name=location or None,
                details={"error_count": exc.error_count()},
            ) from exc

    def to_data(self) -> dict[str, Any]:
        """Serialize to the persisted record shape (camelCase, JSON types)."""
        return self.model_dump(mode="json", by_alias=True)

    def _evolve(self, **changes: Any) -> Self:
        """Return a revalidated copy with ``changes`` applied.

        Raises:
            ValidationError: If the merged values are invalid. The receiver
                is never modified.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValidationError(
                f"Unknown {type(self).__name__} field(s): {', '.join(sorted(unknown))}",
                field_name=sorted(unknown)[0],
            )
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return self.from_data(data)


__all__ = [
    "ValueObject",
    "utc_now",
    "ensure_utc",
]
