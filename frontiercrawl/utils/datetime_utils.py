from datetime import datetime, timedelta, timezone
from typing import Optional, Union

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_millis(value: Union[datetime, int, None]) -> int:
    """Convert a datetime (naive values are taken as UTC) or epoch millis to epoch millis.

    Returns 0 for None, meaning "unknown".
    """
    if value is None:
        return 0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) // timedelta(milliseconds=1)
    return int(value)


def from_epoch_millis(millis: int) -> Optional[datetime]:
    """Return an aware UTC datetime for `millis`, or None when it is 0."""
    if not millis:
        return None
    return _EPOCH + timedelta(milliseconds=millis)
