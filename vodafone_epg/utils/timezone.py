"""
Date and Time utilities

This module handles epoch conversion into XMLTV timestamps, the requested
listing window and ISO 8601 duration parsing.
"""
from datetime import date, datetime, timedelta, timezone
import logging
import re

from vodafone_epg.errors import ConfigurationError

logger = logging.getLogger(__name__)

XMLTV_TIME_FORMAT = "%Y%m%d%H%M%S"

_DURATION_PATTERN = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)


class DateFormatError(ValueError):
    """Raised when a timestamp value is invalid"""
    pass


def epoch_to_xmltv(epoch: int | float) -> str:
    """
    Format a provider epoch value as an XMLTV timestamp.

    The provider shifts its epoch values so that reading them as GMT yields
    the wall-clock time shown on screen. They are formatted as-is with a
    '+0000' offset and must not be converted to local time.

    Args:
        epoch: Seconds since 1970-01-01 as sent by the provider

    Returns:
        Timestamp like '20231114221320 +0000'

    Raises:
        DateFormatError: If the value cannot be converted
    """
    try:
        dt = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError) as e:
        raise DateFormatError(f"Invalid epoch timestamp: {epoch!r}") from e
    return f"{dt.strftime(XMLTV_TIME_FORMAT)} +0000"


def clamp_days(offset: int, days: int, max_days: int) -> int:
    """
    Limit the number of days so the window never passes the provider limit.

    Args:
        offset: First day to fetch, relative to today
        days: Requested number of days
        max_days: Number of days the provider exposes

    Returns:
        days, or max_days - offset when offset + days exceeds max_days
    """
    if offset + days > max_days:
        clamped = max_days - offset
        logger.warning(
            f"Requested {days} days from offset {offset} exceeds the {max_days} day limit, "
            f"fetching {max(clamped, 0)} days"
        )
        return clamped
    return days


def resolve_date_window(
    offset: int,
    days: int,
    max_days: int,
    today: date | None = None
) -> list[date]:
    """
    Calculate the calendar days to fetch.

    Args:
        offset: First day to fetch, relative to today (0 = today)
        days: Requested number of days
        max_days: Number of days the provider exposes
        today: Reference day (defaults to the local date)

    Returns:
        Consecutive dates, empty when the offset is past the provider window

    Raises:
        ConfigurationError: If offset is negative or days is not positive
    """
    if offset < 0:
        raise ConfigurationError(f"Offset must be >= 0, got {offset}")
    if days < 1:
        raise ConfigurationError(f"Days must be >= 1, got {days}")

    days = clamp_days(offset, days, max_days)
    start = (today or date.today()) + timedelta(days=offset)
    return [start + timedelta(days=i) for i in range(max(days, 0))]


def parse_iso8601_duration(text: str | None) -> int | None:
    """
    Convert an ISO 8601 duration like 'PT1H30M' into seconds.

    Day components are accepted. Week, month and year components are not
    used by the provider and are rejected.

    Args:
        text: Duration string

    Returns:
        Total seconds, or None if the string is missing, malformed or empty
        of components
    """
    if not text:
        return None

    match = _DURATION_PATTERN.match(text.strip())
    if match is None:
        logger.debug(f"Unrecognised duration format: {text!r}")
        return None

    parts = match.groupdict()
    if all(value is None for value in parts.values()):
        logger.debug(f"Duration without components: {text!r}")
        return None

    total = (
        int(parts["days"] or 0) * 86400
        + int(parts["hours"] or 0) * 3600
        + int(parts["minutes"] or 0) * 60
        + float(parts["seconds"] or 0)
    )
    return int(total)
