from datetime import datetime
import pytz

UTC = pytz.utc

def now_utc() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(UTC)

def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from databases without tz support."""
    if value.tzinfo is None:
        return UTC.localize(value)
    return value
