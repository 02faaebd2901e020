from datetime import date, datetime, timezone


def to_iso(moment: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision, e.g. ``2026-01-15T10:20:30.123Z``.

    The fixed width keeps text ordering chronological, which the entry queries
    rely on.
    """
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def today_key(day: date | None = None) -> str:
    return (day or date.today()).isoformat()


def format_date_european(iso: str) -> str:
    """``15.01.26`` (day.month.year) in local time; unparseable input is returned as-is."""
    try:
        moment = datetime.fromisoformat(str(iso).replace("Z", "+00:00"))
    except ValueError:
        return str(iso)
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime("%d.%m.%y")
