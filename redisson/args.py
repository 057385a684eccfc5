"""Argument encoding for command argv.

Redis only understands strings on the wire, so every argument passes through
``stringify`` before it reaches the driver. The accepted value types form a
closed set: ``str``, ``bytes``, ``int``, ``float``, ``bool`` and ``datetime``.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

# Duration sentinel for ``SET ... KEEPTTL``.
KEEP_TTL = -1

Duration = timedelta | int | float


def _since(start: float) -> float:
    return time.perf_counter() - start


# Clock seams, only to be replaced before the first call.
now_func = time.perf_counter
since_func = _since


def _format_float(value: float) -> str:
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    if math.isnan(value):
        msg = "NaN is not a valid redis argument"
        raise ValueError(msg)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def format_time(value: datetime) -> str:
    """Render a datetime as RFC 3339 with nanosecond precision trimmed."""
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def stringify(value: Any) -> str | bytes:
    """Encode one argument value.

    Raises:
        TypeError: If ``value`` is outside the accepted type set.
    """
    if isinstance(value, (str, bytes)):
        return value
    # bool first, it is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    msg = f"redis argument must be str, bytes, int, float, bool or datetime, not {type(value).__name__}"
    raise TypeError(msg)


def stringify_all(values: Iterable[Any]) -> list[str | bytes]:
    return [stringify(v) for v in values]


def flatten(values: Any) -> list[str | bytes]:
    """Flatten key/value style input into an argv fragment.

    Accepts a mapping, a sequence of pairs, a flat sequence, or a single value.
    """
    if isinstance(values, dict):
        out: list[str | bytes] = []
        for k, v in values.items():
            out.append(stringify(k))
            out.append(stringify(v))
        return out
    if isinstance(values, (list, tuple)):
        out = []
        for item in values:
            if isinstance(item, (list, tuple)):
                out.extend(stringify(v) for v in item)
            else:
                out.append(stringify(item))
        return out
    return [stringify(values)]


def flatten_pairs(*values: Any) -> list[str | bytes]:
    """Flatten ``mset``-style arguments: a mapping or alternating keys and values."""
    if len(values) == 1:
        return flatten(values[0])
    return flatten(list(values))


def pairs_from(values: Mapping[Any, Any] | Iterable[Any]) -> list[tuple[Any, Any]]:
    flat = flatten(values)
    if len(flat) % 2:
        msg = "expected an even number of key/value arguments"
        raise ValueError(msg)
    return [(flat[i], flat[i + 1]) for i in range(0, len(flat), 2)]


# =============================================================================
# Durations and instants
# =============================================================================


def to_timedelta(value: Duration) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"duration must be timedelta or seconds, not {type(value).__name__}"
        raise TypeError(msg)
    return timedelta(seconds=value)


def use_precise(value: Duration) -> bool:
    """Return True when the duration needs millisecond resolution."""
    d = to_timedelta(value)
    return d < timedelta(seconds=1) or d % timedelta(seconds=1) != timedelta(0)


def format_ms(value: Duration) -> int:
    d = to_timedelta(value)
    if timedelta(0) < d < timedelta(milliseconds=1):
        logger.warning("specified duration is %s, but minimal supported value is 1ms", d)
        return 1
    return d // timedelta(milliseconds=1)


def format_sec(value: Duration) -> int:
    d = to_timedelta(value)
    if timedelta(0) < d < timedelta(seconds=1):
        logger.warning("specified duration is %s, but minimal supported value is 1s", d)
        return 1
    return d // timedelta(seconds=1)


def seconds(value: Duration) -> float:
    return to_timedelta(value).total_seconds()


def is_keep_ttl(value: Any) -> bool:
    return not isinstance(value, timedelta) and value == KEEP_TTL


def is_positive(value: Duration) -> bool:
    return to_timedelta(value) > timedelta(0)


def expiry_args(expiration: Duration) -> list[str | bytes]:
    """``EX``/``PX``/``KEEPTTL`` tail for ``SET``-style commands."""
    if is_keep_ttl(expiration):
        return ["KEEPTTL"]
    if not is_positive(expiration):
        return []
    if use_precise(expiration):
        return ["PX", str(format_ms(expiration))]
    return ["EX", str(format_sec(expiration))]


def unix_seconds(value: datetime) -> int:
    return int(_aware(value).timestamp())


def unix_ms(value: datetime) -> int:
    dt = _aware(value)
    return int(dt.timestamp() * 1000)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.astimezone()
    return value


def from_unix_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=UTC)
