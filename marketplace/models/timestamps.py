from datetime import datetime, timezone
from sqlalchemy import DateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp_column() -> DateTime:
    """Timezone-aware column so stored instants keep their UTC offset."""
    return DateTime(timezone=True)
