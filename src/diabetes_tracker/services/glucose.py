"""Glucose readings and statistics."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from diabetes_tracker.domain.glucose import (
    GlucoseReading,
    GlucoseSample,
    GlucoseSummary,
    TargetRange,
)
from diabetes_tracker.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


class GlucoseRepository(Protocol):
    """Persistence interface for glucose readings."""

    def list_readings(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[GlucoseReading]:
        """Return readings in the range, newest first."""

    def get_reading(self, reading_id: UUID) -> GlucoseReading | None:
        """Return a reading by id."""

    def create_reading(
        self, user_id: UUID, values: dict[str, object]
    ) -> GlucoseReading:
        """Create a reading and return it."""

    def update_reading(
        self, reading_id: UUID, values: dict[str, object]
    ) -> GlucoseReading | None:
        """Update a reading and return it, or None when missing."""

    def delete_reading(self, reading_id: UUID) -> bool:
        """Delete a reading, returning False when missing."""


def summarize_glucose(
    samples: Iterable[GlucoseSample],
    start: datetime,
    end: datetime,
    target_range: TargetRange | None = None,
) -> GlucoseSummary:
    """Describe the samples measured within [start, end]."""
    bounds = target_range or TargetRange()
    values = [
        sample.value for sample in samples if start <= sample.measured_at <= end
    ]
    if not values:
        return GlucoseSummary()

    count = len(values)
    below = sum(1 for value in values if value < bounds.low)
    above = sum(1 for value in values if value > bounds.high)
    in_range = count - below - above
    return GlucoseSummary(
        reading_count=count,
        average=sum(values) / count,
        minimum=min(values),
        maximum=max(values),
        in_range_pct=in_range / count * 100,
        below_range_pct=below / count * 100,
        above_range_pct=above / count * 100,
    )


@dataclass
class GlucoseService:
    """Service for glucose logging and statistics."""

    repository: GlucoseRepository
    settings_service: UserSettingsService

    def list_readings(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[GlucoseReading]:
        return self.repository.list_readings(user_id, start, end)

    def get_reading(self, reading_id: UUID) -> GlucoseReading | None:
        return self.repository.get_reading(reading_id)

    def add_reading(self, user_id: UUID, values: dict[str, object]) -> GlucoseReading:
        """Persist a new reading."""
        return self.repository.create_reading(user_id, values)

    def update_reading(
        self, reading_id: UUID, values: dict[str, object]
    ) -> GlucoseReading | None:
        """Replace the editable fields of a reading."""
        return self.repository.update_reading(reading_id, values)

    def delete_reading(self, reading_id: UUID) -> bool:
        return self.repository.delete_reading(reading_id)

    def get_statistics(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> GlucoseSummary:
        """Summarize the user's readings against their target range."""
        if start > end:
            raise ValueError("start must not be after end")
        target_range = self.settings_service.get_target_range(user_id)
        readings = self.repository.list_readings(user_id, start, end)
        summary = summarize_glucose(
            (reading.as_sample() for reading in readings),
            start,
            end,
            target_range,
        )
        _logger.debug(
            "Glucose statistics: user=%s readings=%s", user_id, summary.reading_count
        )
        return summary
