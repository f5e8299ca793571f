"""
Parsing of refresh interval expressions such as '2h30m', '90s', '1d' or '45'.
"""

import re

from ytsub.exceptions import IntervalError

_UNIT_SECONDS = {"d": 86400, "h": 3600, "m": 60, "s": 1}

_DURATION_PATTERN = re.compile(
    r"^(?:(?P<d>\d+)d)?(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s)?$"
)


def parse_interval(expression: str) -> int:
    """
    Converts a duration expression into a number of seconds.

    Components must appear in the order d, h, m, s and each is optional.
    A bare integer is read as seconds.

    Raises:
        IntervalError: If the expression is empty, malformed, or totals zero.
    """
    text = str(expression).strip().lower()
    if not text:
        raise IntervalError("Interval expression is empty.")

    if text.isdecimal():
        seconds = int(text)
    else:
        match = _DURATION_PATTERN.match(text)
        if not match:
            raise IntervalError(
                f"Invalid interval '{expression}'. Use e.g. '2h30m', '90s', '1d' or a"
                " number of seconds."
            )
        seconds = sum(
            int(value) * _UNIT_SECONDS[unit]
            for unit, value in match.groupdict().items()
            if value is not None
        )

    if seconds <= 0:
        raise IntervalError(f"Interval '{expression}' must be greater than zero.")
    return seconds
