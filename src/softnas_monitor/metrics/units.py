"""Value normalization helpers shared by the collectors.

Functions:
    convert_size: Convert a human-readable size token (e.g. "1,002.9M") to bytes
    first_token: Extract the leading token of a SoftNAS descriptor string
    parse_rate: Parse a decimal rate string (IOPS) to float
    average_nonzero: Mean of the non-zero readings of a sample series
    metric_name: Make a pool name safe for use inside a metric key
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from softnas_monitor.core.constants import SIZE_SUFFIX_MULTIPLIERS
from softnas_monitor.core.errors import ParseError

_UNSAFE_METRIC_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def _parse_float(text: str, original: str) -> float:
    # float() also takes digit separators ("1_000"), plain decimal notation does not
    if "_" in text:
        raise ParseError(f"Not a number: {original!r}")
    try:
        value = float(text)
    except ValueError as e:
        raise ParseError(f"Not a number: {original!r}") from e
    if not math.isfinite(value):
        raise ParseError(f"Not a finite number: {original!r}")
    return value


def convert_size(token: str) -> float:
    """Convert a size token to a byte count.

    Thousands separators are dropped, then a trailing K, M, G or T suffix
    scales the numeral by 1024, 1024^2, 1024^3 or 1024^4. Without a suffix
    the numeral is already a byte count.

    Example:
        >>> convert_size("1,000K")
        1024000.0

    Args:
        token: Size token such as "44.8G", "480.0K" or "1,002.9M"

    Returns:
        Byte count, never negative

    Raises:
        ParseError: If the numeral part is not a valid non-negative number
    """
    text = token.replace(",", "")
    if any(c.isspace() for c in text):
        raise ParseError(f"Size token contains whitespace: {token!r}")
    multiplier = SIZE_SUFFIX_MULTIPLIERS.get(text[-1:])
    if multiplier is None:
        value = _parse_float(text, token)
    else:
        value = _parse_float(text[:-1], token) * multiplier
    if value < 0:
        raise ParseError(f"Negative size: {token!r}")
    return value


def first_token(descriptor: str) -> str:
    """Return the first whitespace- or newline-delimited token of a descriptor.

    "44.8G Free\\n(100.0%)" and "666.7K\\nCache Used\\n(0.1%)" both carry the
    size as their leading token.

    Raises:
        ParseError: If the descriptor is blank
    """
    parts = descriptor.split()
    if not parts:
        raise ParseError(f"Empty size descriptor: {descriptor!r}")
    return parts[0]


def parse_rate(value: str | float) -> float:
    """Parse a rate that softnas-cmd reports as a decimal string or a number.

    Raises:
        ParseError: If the value is not a finite number
    """
    if isinstance(value, str):
        return _parse_float(value.strip(), value)
    if not math.isfinite(value):
        raise ParseError(f"Not a finite number: {value!r}")
    return float(value)


def average_nonzero(series: Iterable[float]) -> float:
    """Average the non-zero readings of a sample series.

    perfmon pads unfilled minute slots with zero, so zeros mean "no data"
    and are left out of both the sum and the count.

    Args:
        series: Sample readings

    Returns:
        Mean of the non-zero readings, 0.0 if there are none
    """
    total = 0.0
    count = 0
    for value in series:
        if value != 0:
            total += value
            count += 1
    if count == 0:
        return 0.0
    return total / count


def metric_name(name: str) -> str:
    """Replace characters that are not allowed in a metric key with "_".

    Example:
        >>> metric_name("tank.backup 01")
        'tank_backup_01'
    """
    return _UNSAFE_METRIC_CHARS.sub("_", name)
