"""Plain-English schedules to five-field cron expressions (UTC).

Rule based and deterministic. Named zones convert with their standard
(non-daylight) offset, since GitHub Actions cron always runs in UTC and
cannot follow daylight saving changes anyway.
"""
from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# minutes east of UTC
_TZ_OFFSETS = {
    "utc": 0,
    "gmt": 0,
    "z": 0,
    "et": -300,
    "est": -300,
    "edt": -240,
    "eastern": -300,
    "ct": -360,
    "cst": -360,
    "cdt": -300,
    "central": -360,
    "mt": -420,
    "mst": -420,
    "mdt": -360,
    "mountain": -420,
    "pt": -480,
    "pst": -480,
    "pdt": -420,
    "pacific": -480,
    "bst": 60,
    "cet": 60,
    "cest": 120,
    "ist": 330,
    "jst": 540,
    "aest": 600,
}

_DAYS = {
    "sunday": 0, "sun": 0,
    "monday": 1, "mon": 1,
    "tuesday": 2, "tue": 2, "tues": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thu": 4, "thurs": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
}

_AT_TIME = re.compile(r"\bat\s+(\d{1,2})(?::(\d{2}))?\s*(a\.?m\.?|p\.?m\.?)?(?![\w:])")
_CLOCK_TIME = re.compile(r"\b(\d{1,2}):(\d{2})\s*(a\.?m\.?|p\.?m\.?)?")
_MERIDIEM_TIME = re.compile(r"\b(\d{1,2})\s*(a\.?m\.?|p\.?m\.?)(?!\w)")
_EVERY_MINUTES = re.compile(r"\bevery\s+(\d{1,2})\s+min(?:ute)?s?\b")
_EVERY_HOURS = re.compile(r"\bevery\s+(\d{1,2})\s+hours?\b")
_DAY_OF_MONTH = re.compile(r"\b(?:on\s+)?(?:the\s+)?(\d{1,2})(?:st|nd|rd|th)\b")
_DAILY = re.compile(r"\b(daily|every\s*day|each\s+day|every\s+(?:morning|evening|night|afternoon))\b")


def _zone_offset(name: str) -> int:
    key = name.strip().lower()
    # aliases only match whole names; region/city names go to the IANA database
    if "/" not in key:
        if key in _TZ_OFFSETS:
            return _TZ_OFFSETS[key]
        for word, off in _TZ_OFFSETS.items():
            if len(word) > 3 and re.search(rf"\b{word}\b", key):
                return off
    try:
        zone = ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {name}")
    offsets = []
    for month in (1, 7):
        delta = datetime(2024, month, 15, 12, tzinfo=zone).utcoffset()
        offsets.append(int(delta.total_seconds() // 60) if delta is not None else 0)
    return min(offsets)


def _zone_in_phrase(text: str) -> int | None:
    for word, off in _TZ_OFFSETS.items():
        if re.search(rf"(?<![\w/]){re.escape(word)}(?![\w/])", text):
            return off
    return None


def _clock(text: str) -> tuple[int, int] | None:
    if re.search(r"\bnoon\b|\bmidday\b", text):
        return 12, 0
    if re.search(r"\bmidnight\b", text):
        return 0, 0
    for rx in (_AT_TIME, _CLOCK_TIME):
        m = rx.search(text)
        if m:
            return _to_24h(int(m.group(1)), int(m.group(2) or 0), m.group(3))
    m = _MERIDIEM_TIME.search(text)
    if m:
        return _to_24h(int(m.group(1)), 0, m.group(2))
    return None


def _to_24h(hour: int, minute: int, meridiem: str | None) -> tuple[int, int]:
    if meridiem:
        pm = meridiem.startswith("p")
        if not 1 <= hour <= 12:
            raise ValueError(f"Invalid 12-hour time: {hour}")
        hour = hour % 12 + (12 if pm else 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time of day: {hour}:{minute:02d}")
    return hour, minute


def _weekdays(text: str) -> list[int] | None:
    if re.search(r"\bweekends?\b", text):
        return [0, 6]
    if re.search(r"\bweekdays?\b|\bmonday\s+(?:to|through|thru|-)\s+friday\b|\bbusiness\s+days?\b", text):
        return [1, 2, 3, 4, 5]
    found = sorted({n for word, n in _DAYS.items() if re.search(rf"\b{word}s?\b", text)})
    return found or None


def _format_days(days: list[int]) -> str:
    days = sorted(set(days))
    if len(days) > 2 and days == list(range(days[0], days[-1] + 1)):
        return f"{days[0]}-{days[-1]}"
    return ",".join(str(d) for d in days)


def cron_from_phrase(phrase: str, time_zone: str | None = None) -> str:
    """Translate ``phrase`` into ``"M H DOM MON DOW"`` in UTC.

    Raises ValueError when the phrase is not understood.
    """
    text = " ".join(phrase.lower().split())
    if not text:
        raise ValueError("Empty schedule description")

    m = _EVERY_MINUTES.search(text)
    if m:
        n = int(m.group(1))
        if not 1 <= n <= 59:
            raise ValueError(f"Minute interval out of range: {n}")
        return f"*/{n} * * * *"
    if re.search(r"\bevery\s+minute\b", text):
        return "* * * * *"
    m = _EVERY_HOURS.search(text)
    if m:
        n = int(m.group(1))
        if not 1 <= n <= 23:
            raise ValueError(f"Hour interval out of range: {n}")
        return f"0 */{n} * * *"
    if re.search(r"\bevery\s+hour\b|\bhourly\b", text):
        return "0 * * * *"

    days = _weekdays(text)
    monthly = bool(re.search(r"\bmonthly\b|\bevery\s+month\b|\bof\s+(?:every|each)\s+month\b", text))
    dom: int | None = None
    if monthly:
        dm = _DAY_OF_MONTH.search(text)
        dom = int(dm.group(1)) if dm else 1
        if not 1 <= dom <= 31:
            raise ValueError(f"Day of month out of range: {dom}")
    daily = bool(_DAILY.search(text))

    clock = _clock(text)
    if clock is None:
        if daily and days is None and not monthly:
            # bare "daily" keeps the historical 08:00 UTC default
            return "0 8 * * *"
        if days is None and not monthly:
            raise ValueError(f"Could not determine cron expression for: {phrase}")
        clock = (0, 0)
    elif days is None and not monthly and not daily and not _AT_TIME.search(text):
        raise ValueError(f"Could not determine cron expression for: {phrase}")

    if time_zone:
        offset = _zone_offset(time_zone)
    else:
        offset = _zone_in_phrase(text) or 0

    total = clock[0] * 60 + clock[1] - offset
    shift, total = divmod(total, 24 * 60)
    hour, minute = divmod(total, 60)

    dom_field = "*"
    dow_field = "*"
    if monthly and dom is not None:
        shifted = dom + shift
        if not 1 <= shifted <= 28 and shift:
            raise ValueError(f"Day {dom} of the month crosses a month boundary in UTC")
        dom_field = str(shifted)
    elif days is not None:
        dow_field = _format_days([(d + shift) % 7 for d in days])

    return f"{minute} {hour} {dom_field} * {dow_field}"
