"""Formatting helpers for progress output."""

from datetime import datetime

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"
FILENAME_TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def time_str(seconds: float) -> str:
    """Format a duration as "HH:MM:SS.ss"."""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"


def rate_str(count: int, seconds: float, unit: str) -> str:
    """Format a throughput such as "1,234 words/second".

    Args:
        count: Number of items processed.
        seconds: Elapsed time in seconds.
        unit: Plural name of the items.
    """
    rate = count / seconds if seconds > 0 else 0
    return f"{rate:,.0f} {unit}/second"


def timestamp_str(timestamp: float, fmt: str = TIMESTAMP_FMT) -> str:
    """Format a UNIX timestamp in the local timezone."""
    return datetime.fromtimestamp(timestamp).astimezone().strftime(fmt)
