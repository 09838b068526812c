from datetime import datetime, timezone

from sqlalchemy import DateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# column type for every timestamp field
TIMESTAMP = DateTime(timezone=True)
