from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware current UTC time for table timestamps."""
    return datetime.now(timezone.utc)
