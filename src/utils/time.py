import datetime

from pytz import timezone

from configs import configs

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
ONE_MILLISECOND = datetime.timedelta(milliseconds=1)


def now() -> datetime.datetime:
    """Get a datetime object with the current timestamp at the configured timezone"""
    return datetime.datetime.now(tz=timezone(configs.time_zone))


def format_datetime_iso(timestamp: datetime.datetime | None) -> str | None:
    return timestamp.isoformat(timespec="milliseconds") if timestamp is not None else None


def to_epoch_millis(timestamp: datetime.datetime) -> int:
    """Convert an aware datetime to integer epoch milliseconds, truncating sub-millisecond
    precision"""
    return (timestamp - EPOCH) // ONE_MILLISECOND


def from_epoch_millis(epoch_millis: int) -> datetime.datetime:
    """Convert integer epoch milliseconds to a datetime at the configured timezone. Processes
    sharing a queue should use the same 'time_zone' so the timestamps they read are displayed the
    same way"""
    return (EPOCH + epoch_millis * ONE_MILLISECOND).astimezone(timezone(configs.time_zone))
