from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def empty_to_none(value: str | None) -> str | None:
    """Treat blank form values as missing."""
    if value is None or value.strip() == "":
        return None
    return value
