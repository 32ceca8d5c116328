"""Reading progress through the book."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import Field, field_validator, model_validator

from gamebook_companion.core.constants import (
    MAX_DAYS_ELAPSED,
    MIN_DAYS_ELAPSED,
    STARTING_PARAGRAPH,
)
from gamebook_companion.core.exceptions import ValidationError
from gamebook_companion.models.base import ValueObject, ensure_utc, utc_now


class Progress(ValueObject):
    """Current paragraph, visit history and day tracking.

    Attributes:
        current_position: Paragraph being read (>= 1).
        history: Every paragraph visited, in order, duplicates included.
        last_saved_at: When the position last changed.
        days_elapsed: Days spent, tracked by book 2 only (0..4).
        next_wake_up_position: Paragraph to resume at after resting.
    """

    current_position: int = STARTING_PARAGRAPH
    history: tuple[int, ...] = Field((STARTING_PARAGRAPH,), strict=False)
    last_saved_at: datetime = Field(default_factory=utc_now, strict=False)
    days_elapsed: int | None = None
    next_wake_up_position: int | None = None

    @field_validator("last_saved_at", mode="after")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def check_progress(self) -> Self:
        if self.current_position < 1:
            raise ValidationError(
                "Paragraph number must be at least 1",
                field_name="current_position",
                invalid_value=self.current_position,
            )
        if self.days_elapsed is not None and not MIN_DAYS_ELAPSED <= self.days_elapsed <= MAX_DAYS_ELAPSED:
            raise ValidationError(
                f"Days elapsed must be between {MIN_DAYS_ELAPSED} and {MAX_DAYS_ELAPSED}",
                field_name="days_elapsed",
                invalid_value=self.days_elapsed,
            )
        if self.next_wake_up_position is not None and self.next_wake_up_position < 1:
            raise ValidationError(
                "Wake-up paragraph must be at least 1",
                field_name="next_wake_up_position",
                invalid_value=self.next_wake_up_position,
            )
        return self

    @classmethod
    def starting(cls, *, track_days: bool = False) -> Progress:
        """Progress of a new character, at paragraph 1.

        Args:
            track_days: Start the day counter at 0 instead of leaving it unset.
        """
        return cls(
            current_position=STARTING_PARAGRAPH,
            history=(STARTING_PARAGRAPH,),
            last_saved_at=utc_now(),
            days_elapsed=MIN_DAYS_ELAPSED if track_days else None,
        )

    def go_to_paragraph(self, paragraph: int) -> Progress:
        """Move to ``paragraph`` and record it in the history.

        Raises:
            ValidationError: If ``paragraph`` is below 1.
        """
        if paragraph < 1:
            raise ValidationError(
                "Paragraph number must be at least 1",
                field_name="current_position",
                invalid_value=paragraph,
            )
        return self._evolve(
            current_position=paragraph,
            history=(*self.history, paragraph),
            last_saved_at=utc_now(),
        )

    def update_days_elapsed(self, days: int) -> Progress:
        return self._evolve(days_elapsed=days)

    def update_next_wake_up_paragraph(self, paragraph: int | None) -> Progress:
        return self._evolve(next_wake_up_position=paragraph)


__all__ = ["Progress"]
