from __future__ import annotations

import calendar
import typing as tp
from email.utils import parsedate_tz


def parse_date(date: str) -> tp.Optional[int]:
    """
    Convert an HTTP-date (RFC 9110 Section 5.6.7) to a POSIX timestamp.

    Returns None when the value cannot be parsed.

    Example:
        ```
        parse_date("Mon, 01 Jan 2024 00:00:00 GMT")  # 1704067200
        ```
    """
    parsed = parsedate_tz(date)
    if parsed is None:
        return None
    timestamp = calendar.timegm(parsed[:6])
    # parsedate_tz keeps the zone offset separately; HTTP dates are GMT,
    # but obsolete formats may carry one.
    return timestamp - (parsed[9] or 0)

