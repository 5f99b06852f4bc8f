from datetime import datetime, timezone


def dt_to_iso(dt: datetime) -> str:
    """
    Convert a datetime to canonical DynamoDB-friendly ISO8601.
    Always returns a UTC Z-suffixed string.
    """
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def iso_to_dt(d: str) -> datetime:
    """
    Convert an ISO8601 string back to an aware datetime.
    """
    return datetime.fromisoformat(d.replace("Z", "+00:00"))


def optional_dt_to_iso(dt: datetime | None) -> str | None:
    return dt_to_iso(dt) if dt is not None else None


def optional_iso_to_dt(d: str | None) -> datetime | None:
    return iso_to_dt(d) if d else None


def now() -> datetime:
    return datetime.now(timezone.utc)
