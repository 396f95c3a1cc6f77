from __future__ import annotations

from datetime import datetime
import logging

from dateutil.rrule import rrulestr

logger = logging.getLogger(__name__)

_VALIDATION_START = datetime(2000, 1, 1)

_FREQUENCY_UNITS: dict[str, str] = {
    "DAILY": "day",
    "WEEKLY": "week",
    "MONTHLY": "month",
    "YEARLY": "year",
}
_WEEKDAY_LABELS: dict[str, str] = {
    "MO": "Monday",
    "TU": "Tuesday",
    "WE": "Wednesday",
    "TH": "Thursday",
    "FR": "Friday",
    "SA": "Saturday",
    "SU": "Sunday",
}
_POSITION_LABELS: dict[int, str] = {
    1: "first",
    2: "second",
    3: "third",
    4: "fourth",
    -1: "last",
}


def is_parseable_rule(rule: str) -> bool:
    try:
        rrulestr(rule, dtstart=_VALIDATION_START)
    except (ValueError, TypeError):
        return False
    return True


def describe_recurrence(rule: str | None) -> str | None:
    if not rule or not is_parseable_rule(rule):
        return None

    components = _split_rule(rule)
    unit = _FREQUENCY_UNITS.get(components.get("FREQ", ""))
    if unit is None:
        return None

    interval = _parse_int(components.get("INTERVAL")) or 1
    description = f"every {unit}" if interval == 1 else f"every {interval} {unit}s"

    weekdays = [code for code in components.get("BYDAY", "").split(",") if code]
    position = _parse_int(components.get("BYSETPOS"))
    month_day = _parse_int(components.get("BYMONTHDAY"))

    if weekdays and position is not None and len(weekdays) == 1:
        position_label = _POSITION_LABELS.get(position, str(position))
        return f"{description} on the {position_label} {_weekday_label(weekdays[0])}"
    if weekdays:
        return f"{description} on {_join_labels([_weekday_label(code) for code in weekdays])}"
    if month_day is not None:
        return f"{description} on the {_ordinal_suffix(month_day)}"
    return description


def _split_rule(rule: str) -> dict[str, str]:
    components: dict[str, str] = {}
    for part in rule.removeprefix("RRULE:").split(";"):
        key, separator, value = part.partition("=")
        if separator:
            components[key.strip().upper()] = value.strip().upper()
    return components


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric recurrence component: %s", value)
        return None


def _weekday_label(code: str) -> str:
    return _WEEKDAY_LABELS.get(code[-2:], code)


def _join_labels(labels: list[str]) -> str:
    if len(labels) <= 1:
        return "".join(labels)
    return f"{', '.join(labels[:-1])} and {labels[-1]}"


def _ordinal_suffix(day: int) -> str:
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"
