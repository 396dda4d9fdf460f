"""Row parsing helpers shared by Supabase repositories."""

from datetime import UTC, date, datetime
from uuid import UUID


def parse_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value)
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: object) -> date | None:
    """Parse an ISO calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return None


def required_datetime(value: object) -> datetime:
    return parse_datetime(value) or datetime.min.replace(tzinfo=UTC)


def optional_uuid(value: object) -> UUID | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, UUID) else UUID(str(value))


def to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def serialize_values(values: dict[str, object]) -> dict[str, object]:
    """Convert UUID, date and datetime values into JSON-friendly strings."""
    payload: dict[str, object] = {}
    for key, value in values.items():
        if isinstance(value, UUID):
            payload[key] = str(value)
        elif isinstance(value, date):
            payload[key] = value.isoformat()
        else:
            payload[key] = value
    return payload
