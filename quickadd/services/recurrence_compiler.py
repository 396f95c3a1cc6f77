from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import re

from quickadd.services.nlp_vocabulary import (
    WEEKDAY_CODE_BY_NAME,
    WEEKDAY_CODES,
    BoundaryConfig,
    RecurrenceVocabulary,
)
from quickadd.services.text_matching import alternation, remove_span

RecurrenceHandler = Callable[[re.Match[str]], str]

_ORDINAL_POSITIONS: dict[str, int] = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "last": -1,
}
_PERIOD_FREQUENCIES: dict[str, str] = {
    "day": "DAILY",
    "week": "WEEKLY",
    "month": "MONTHLY",
    "year": "YEARLY",
}
_BYDAY_PATTERN = re.compile(r"BYDAY=([^;]*)")


@dataclass(frozen=True)
class RecurrencePattern:
    name: str
    regex: re.Pattern[str]
    handler: RecurrenceHandler


def is_valid_recurrence_rule(rule: str | None) -> bool:
    if not rule or "FREQ=" not in rule:
        return False
    for match in _BYDAY_PATTERN.finditer(rule):
        value = match.group(1).strip()
        if not value or value == "undefined":
            return False
    return True


class RecurrenceCompiler:
    def __init__(self, vocabulary: RecurrenceVocabulary, boundaries: BoundaryConfig) -> None:
        self.vocabulary = vocabulary
        self.boundaries = boundaries
        self._weekday_codes = _word_lookup(vocabulary.weekdays, WEEKDAY_CODE_BY_NAME)
        self._plural_weekday_codes = _word_lookup(vocabulary.plural_weekdays, WEEKDAY_CODE_BY_NAME)
        self._ordinal_positions = _word_lookup(vocabulary.ordinals, _ORDINAL_POSITIONS)
        self._period_frequencies = _word_lookup(vocabulary.periods, _PERIOD_FREQUENCIES)
        self.patterns: tuple[RecurrencePattern, ...] = self._build_patterns()

    def extract(self, text: str) -> tuple[str, str | None]:
        for pattern in self.patterns:
            match = pattern.regex.search(text)
            if not match:
                continue
            rule = pattern.handler(match)
            if is_valid_recurrence_rule(rule):
                return remove_span(text, match.start(), match.end()), rule
        return text, None

    def _build_patterns(self) -> tuple[RecurrencePattern, ...]:
        lang = self.vocabulary
        b = self.boundaries.boundary
        e = self.boundaries.end_boundary

        every = alternation(lang.every)
        other = alternation(lang.other)
        on = alternation(lang.on_words)
        the = alternation(lang.the_words)
        ordinals = alternation(lang.all_ordinals())
        weekdays = alternation(lang.all_weekdays())
        plural_weekdays = alternation(lang.all_plural_weekdays())
        periods = alternation(lang.all_periods())
        weekly = alternation(lang.weekly)
        monthly = alternation(lang.monthly)
        list_joiner = alternation(lang.list_joiners)
        day = rf"(?:{weekdays}|{plural_weekdays}){e}"
        day_list = rf"{day}(?:\s*(?:{list_joiner})\s*{day})+"
        plural_day = rf"(?:{plural_weekdays}){e}"
        plural_day_list = rf"{plural_day}(?:\s*(?:{list_joiner})\s*{plural_day})+"
        range_joiner = alternation(lang.range_joiners)
        optional_on = rf"(?:(?:{on})\s+)?"
        optional_the = rf"(?:(?:{the})\s+)?"

        def compile_pattern(pattern: str) -> re.Pattern[str]:
            return re.compile(pattern, re.IGNORECASE)

        day_regex = compile_pattern(rf"{b}(?:{weekdays}|{plural_weekdays}){e}")

        patterns = [
            RecurrencePattern(
                name="every_ordinal_weekday",
                regex=compile_pattern(rf"{b}({every})\s+({ordinals})\s+({weekdays}){e}"),
                handler=lambda match: self._monthly_by_position(match.group(2), match.group(3)),
            ),
            RecurrencePattern(
                name="monthly_on_ordinal_weekday",
                regex=compile_pattern(
                    rf"{b}({monthly})\s+{optional_on}{optional_the}({ordinals})\s+({weekdays}){e}",
                ),
                handler=lambda match: self._monthly_by_position(match.group(2), match.group(3)),
            ),
            RecurrencePattern(
                name="monthly_on_day",
                regex=compile_pattern(
                    rf"{b}({monthly})\s+{optional_on}{optional_the}(\d{{1,2}})(?:st|nd|rd|th)?{e}",
                ),
                handler=lambda match: _monthly_by_day(match.group(2)),
            ),
            RecurrencePattern(
                name="every_n_periods",
                regex=compile_pattern(rf"{b}({every})\s+(\d+)\s+({periods}){e}"),
                handler=lambda match: self._interval(match.group(3), int(match.group(2))),
            ),
            RecurrencePattern(
                name="every_other_weekday",
                regex=compile_pattern(rf"{b}({every})\s+({other})\s+({weekdays}){e}"),
                handler=lambda match: self._weekly(
                    [self._weekday_codes.get(match.group(3).lower())],
                    interval=2,
                ),
            ),
            RecurrencePattern(
                name="every_other_period",
                regex=compile_pattern(rf"{b}({every})\s+({other})\s+({periods}){e}"),
                handler=lambda match: self._interval(match.group(3), 2),
            ),
            RecurrencePattern(
                name="weekly_on_weekday",
                regex=compile_pattern(rf"{b}({weekly})\s+{optional_on}({weekdays}){e}"),
                handler=lambda match: self._weekly([self._weekday_codes.get(match.group(2).lower())]),
            ),
            RecurrencePattern(
                name="weekly_on_plural_weekday",
                regex=compile_pattern(rf"{b}({weekly})\s+{optional_on}({plural_weekdays}){e}"),
                handler=lambda match: self._weekly(
                    [self._plural_weekday_codes.get(match.group(2).lower())],
                ),
            ),
            RecurrencePattern(
                name="weekday_list",
                regex=compile_pattern(rf"{b}(?:{weekly}|{every})\s+{optional_on}({day_list})"),
                handler=lambda match: self._weekday_list(day_regex, match.group(1)),
            ),
            RecurrencePattern(
                name="leading_weekday_list",
                regex=compile_pattern(rf"^\s*{optional_on}({day_list})"),
                handler=lambda match: self._weekday_list(day_regex, match.group(1)),
            ),
            RecurrencePattern(
                name="plural_weekday_list",
                regex=compile_pattern(rf"{b}{optional_on}({plural_day_list})"),
                handler=lambda match: self._weekday_list(day_regex, match.group(1)),
            ),
            RecurrencePattern(
                name="weekday_range",
                regex=compile_pattern(
                    rf"{b}(?:(?:{every})\s+)?({day})\s*(?:{range_joiner})\s*({day})",
                ),
                handler=lambda match: self._weekday_range(match.group(1), match.group(2)),
            ),
            RecurrencePattern(
                name="every_weekday_group",
                regex=compile_pattern(rf"{b}(?:{every})\s+({alternation(lang.weekday_group)}){e}"),
                handler=lambda match: self._weekly(list(WEEKDAY_CODES[:5])),
            ),
            RecurrencePattern(
                name="every_weekend_group",
                regex=compile_pattern(rf"{b}(?:{every})\s+({alternation(lang.weekend_group)}){e}"),
                handler=lambda match: self._weekly(list(WEEKDAY_CODES[5:])),
            ),
            RecurrencePattern(
                name="every_weekday",
                regex=compile_pattern(rf"{b}({every})\s+({weekdays}){e}"),
                handler=lambda match: self._weekly([self._weekday_codes.get(match.group(2).lower())]),
            ),
            RecurrencePattern(
                name="plural_weekday",
                regex=compile_pattern(rf"{b}({plural_weekdays}){e}"),
                handler=lambda match: self._weekly(
                    [self._plural_weekday_codes.get(match.group(1).lower())],
                ),
            ),
        ]

        for name, words, frequency in (
            ("daily", lang.daily, "DAILY"),
            ("weekly", lang.weekly, "WEEKLY"),
            ("monthly", lang.monthly, "MONTHLY"),
            ("yearly", lang.yearly, "YEARLY"),
        ):
            patterns.append(
                RecurrencePattern(
                    name=name,
                    regex=compile_pattern(rf"{b}({alternation(words)}){e}"),
                    handler=lambda match, frequency=frequency: f"FREQ={frequency}",
                ),
            )

        return tuple(patterns)

    def _monthly_by_position(self, ordinal_text: str, weekday_text: str) -> str:
        position = self._ordinal_positions.get(ordinal_text.lower())
        if position is None:
            return ""
        weekday_code = self._weekday_codes.get(weekday_text.lower())
        if not weekday_code:
            return ""
        return f"FREQ=MONTHLY;BYDAY={weekday_code};BYSETPOS={position}"

    def _interval(self, period_text: str, interval: int) -> str:
        frequency = self._period_frequencies.get(period_text.lower())
        if not frequency or interval < 1:
            return ""
        return f"FREQ={frequency};INTERVAL={interval}"

    def _weekly(self, weekday_codes: list[str | None], *, interval: int | None = None) -> str:
        if not weekday_codes or not all(weekday_codes):
            return ""
        parts = ["FREQ=WEEKLY"]
        if interval is not None:
            parts.append(f"INTERVAL={interval}")
        parts.append(f"BYDAY={','.join(code for code in weekday_codes if code)}")
        return ";".join(parts)

    def _any_weekday_code(self, day_text: str) -> str | None:
        normalized = day_text.lower()
        return self._weekday_codes.get(normalized) or self._plural_weekday_codes.get(normalized)

    def _weekday_list(self, day_regex: re.Pattern[str], list_text: str) -> str:
        codes: list[str] = []
        for day_match in day_regex.finditer(list_text):
            code = self._any_weekday_code(day_match.group(0))
            if code and code not in codes:
                codes.append(code)
        if len(codes) < 2:
            return ""
        return self._weekly(list(codes))

    def _weekday_range(self, start_text: str, end_text: str) -> str:
        start_code = self._any_weekday_code(start_text)
        end_code = self._any_weekday_code(end_text)
        if not start_code or not end_code:
            return ""

        start_index = WEEKDAY_CODES.index(start_code)
        end_index = WEEKDAY_CODES.index(end_code)
        if start_index <= end_index:
            day_range = WEEKDAY_CODES[start_index : end_index + 1]
        else:
            day_range = WEEKDAY_CODES[start_index:] + WEEKDAY_CODES[: end_index + 1]
        return self._weekly(list(day_range))


def _monthly_by_day(day_text: str) -> str:
    day = int(day_text)
    if not 1 <= day <= 31:
        return ""
    return f"FREQ=MONTHLY;BYMONTHDAY={day}"


def _word_lookup(words_by_key: Mapping[str, tuple[str, ...]], values_by_key: Mapping[str, object]) -> dict:
    lookup: dict = {}
    for key, words in words_by_key.items():
        value = values_by_key.get(key)
        if value is None:
            continue
        for word in words:
            lookup.setdefault(word.lower(), value)
    return lookup
