from datetime import datetime, timezone, timedelta

from frontiercrawl.utils.datetime_utils import from_epoch_millis, to_epoch_millis


def test_none_is_unknown():
    assert to_epoch_millis(None) == 0
    assert from_epoch_millis(0) is None


def test_int_passes_through():
    assert to_epoch_millis(1_600_000_000_123) == 1_600_000_000_123


def test_naive_datetime_taken_as_utc():
    dt = datetime(2020, 1, 1, 12, 0, 0)
    assert to_epoch_millis(dt) == to_epoch_millis(dt.replace(tzinfo=timezone.utc))


def test_aware_datetime_converted():
    dt = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert from_epoch_millis(to_epoch_millis(dt)) == datetime(2020, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def test_millisecond_precision():
    dt = datetime(2021, 6, 1, 0, 0, 0, 999000, tzinfo=timezone.utc)
    assert to_epoch_millis(dt) % 1000 == 999
    assert from_epoch_millis(to_epoch_millis(dt)) == dt
