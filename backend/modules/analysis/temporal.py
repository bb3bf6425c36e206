"""
modules/analysis/temporal.py
----------------------------
Temporal normalisation for untrusted trip documents.

Dates arrive as native datetimes, ISO-8601 strings, store timestamp objects
exposing a to-date method, serialised {"seconds": ...} mappings, or not at all.
normalize_date() turns every one of them into a Timestamp exactly once; an
absent or unparseable value becomes the injected clock's "now" and a
NormalizationWarning is appended to the caller's list.

Times of day ("HH:MM" strings or date-like values) become integer minutes
since midnight in [0, 1439].
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Optional

from schemas.context import NormalizationWarning
from schemas.trip import Timestamp

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MINUTES_PER_DAY: int = 24 * 60
_LAST_MINUTE: int = MINUTES_PER_DAY - 1
_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::\d{1,2}(?:\.\d+)?)?\s*$")
_TO_DATE_METHODS: tuple[str, ...] = ("to_date", "toDate", "to_datetime")


def system_clock() -> datetime:
    return datetime.now()


def warn(
    warnings: Optional[list[NormalizationWarning]],
    field: str,
    value: Any,
    message: str,
) -> None:
    """Record a normalisation warning and mirror it to the module logger."""
    logger.warning("%s: %s (got %r)", field, message, value)
    if warnings is not None:
        warnings.append(NormalizationWarning(field=field, value=repr(value), message=message))


# ── Dates ──────────────────────────────────────────────────────────────────────

def _parse_iso(text: str) -> datetime:
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        # Plain calendar dates on interpreters whose datetime parser is strict
        return datetime.combine(date.fromisoformat(text), time())


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return None


def _from_epoch_mapping(raw: dict) -> Optional[datetime]:
    seconds = raw.get("seconds", raw.get("_seconds"))
    if seconds is None:
        return None
    nanos = raw.get("nanoseconds", raw.get("_nanoseconds", 0)) or 0
    instant = float(seconds) + float(nanos) / 1e9
    return datetime.fromtimestamp(instant, tz=timezone.utc)


def _read_date(raw: Any) -> Optional[Timestamp]:
    """Best-effort conversion; None when the shape is not a supported date."""
    native = _coerce_datetime(raw)
    if native is not None:
        return Timestamp(native, "native")

    if isinstance(raw, str):
        return Timestamp(_parse_iso(raw), "iso")

    if isinstance(raw, dict):
        parsed = _from_epoch_mapping(raw)
        return Timestamp(parsed, "epoch") if parsed is not None else None

    for method_name in _TO_DATE_METHODS:
        method = getattr(raw, method_name, None)
        if callable(method):
            try:
                converted = _coerce_datetime(method())
            except Exception as exc:
                # Store adapters raise their own error types; surface them as a bad value
                raise ValueError(f"{method_name}() failed: {exc!r}") from exc
            return Timestamp(converted, "to_date") if converted is not None else None
    return None


def normalize_date(
    raw: Any,
    field: str,
    clock: Clock = system_clock,
    warnings: Optional[list[NormalizationWarning]] = None,
) -> Timestamp:
    """
    Convert any accepted date representation into a Timestamp.

    Never raises. Absent or malformed input yields Timestamp(clock(), "fallback")
    and a warning naming ``field``.
    """
    if raw is None or raw == "":
        warn(warnings, field, raw, "date is missing; using current time")
        return Timestamp(clock(), "fallback")

    try:
        stamp = _read_date(raw)
    except (TypeError, ValueError, OverflowError, OSError, AttributeError) as exc:
        warn(warnings, field, raw, f"unparseable date ({exc}); using current time")
        return Timestamp(clock(), "fallback")

    if stamp is None:
        warn(warnings, field, raw, "unsupported date representation; using current time")
        return Timestamp(clock(), "fallback")
    return stamp


def inclusive_day_span(start: Timestamp, end: Timestamp) -> int:
    """Number of calendar days from start to end, counting both ends."""
    return (end.value.date() - start.value.date()).days + 1


def days_between(earlier: datetime, later: datetime) -> int:
    return (later.date() - earlier.date()).days


# ── Times of day ───────────────────────────────────────────────────────────────

def _clamp_minutes(minutes: int) -> int:
    return max(0, min(int(minutes), _LAST_MINUTE))


def parse_time_of_day(
    raw: Any,
    field: str,
    warnings: Optional[list[NormalizationWarning]] = None,
) -> Optional[int]:
    """
    Convert a start time into minutes since midnight.

    Returns None when the value is absent (the activity is unscheduled) and 0,
    with a warning, when it is present but cannot be read.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None

    if isinstance(raw, time):
        return raw.hour * 60 + raw.minute

    native = _coerce_datetime(raw)
    if native is not None:
        return native.hour * 60 + native.minute

    if isinstance(raw, str):
        match = _HHMM_RE.match(raw)
        if match:
            hours, minutes = int(match.group(1)), int(match.group(2))
            if hours < 24 and minutes < 60:
                return hours * 60 + minutes
            warn(warnings, field, raw, "time of day out of range; clamped")
            return _clamp_minutes(hours * 60 + minutes)

    try:
        stamp = _read_date(raw)
    except (TypeError, ValueError, OverflowError, OSError, AttributeError):
        stamp = None
    if stamp is not None:
        return stamp.value.hour * 60 + stamp.value.minute

    warn(warnings, field, raw, "unreadable time of day; using 00:00")
    return 0


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as zero-padded "HH:MM"."""
    minutes = max(0, int(minutes))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
