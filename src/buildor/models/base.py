from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as naive datetime.

    Rows written here hold UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Aware UTC view of a timestamp; naive values are taken to be UTC.

    asyncpg returns aware values for timestamptz columns and naive ones for
    plain timestamp columns, so comparisons go through here.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
