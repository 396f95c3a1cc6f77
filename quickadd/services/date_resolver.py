from __future__ import annotations

import calendar
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
import logging
import re
from typing import Any

from dateparser.search import search_dates

from quickadd.services.nlp_vocabulary import DateVocabulary, LanguageVocabulary
from quickadd.services.text_matching import alternation, remove_span

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_START_TOLERANCE = 3

_CLOCK_TIME_SOURCE = (
    r"(?<![\d:])(?:"
    r"(?P<hour>\d{1,2})(?::(?P<minute>[0-5]\d))?\s*(?P<meridiem>am|pm)\b"
    r"|(?P<clock_hour>[01]?\d|2[0-3]):(?P<clock_minute>[0-5]\d)\b"
    r"|(?P<named>noon|midday|midnight)\b"
    r")"
)
_CLOCK_TIME_PATTERN = re.compile(_CLOCK_TIME_SOURCE, re.IGNORECASE)
_NUMERIC_TOKEN_PATTERN = re.compile(r"\d{1,2}")


@dataclass(frozen=True)
class DateMatch:
    text: str
    index: int
    start: datetime
    end: datetime | None = None
    start_hour_certain: bool = False
    end_hour_certain: bool = False

    @property
    def end_index(self) -> int:
        return self.index + len(self.text)

    def is_range(self) -> bool:
        return self.end is not None and self.end != self.start


@dataclass(frozen=True)
class ResolvedDueDate:
    due_date: str
    due_time: str | None = None


def parse_clock_time(text: str) -> time | None:
    match = _CLOCK_TIME_PATTERN.search(text)
    if not match:
        return None
    return _clock_time_from_match(match)


def _clock_time_from_match(match: re.Match[str]) -> time | None:
    named = match.group("named")
    if named:
        return time(hour=0, minute=0) if named.lower() == "midnight" else time(hour=12, minute=0)

    if match.group("clock_hour") is not None:
        return time(hour=int(match.group("clock_hour")), minute=int(match.group("clock_minute")))

    hour = int(match.group("hour"))
    minute = int(match.group("minute")) if match.group("minute") else 0
    if not 1 <= hour <= 12:
        return None
    meridiem = match.group("meridiem").lower()
    if meridiem == "am":
        hour = 0 if hour == 12 else hour
    elif hour != 12:
        hour += 12
    return time(hour=hour, minute=minute)


class DateparserBackend:
    def __init__(
        self,
        vocabulary: DateVocabulary,
        *,
        language: str,
        clock: Clock | None = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.language = language
        self.clock = clock or datetime.now
        connectors = alternation(vocabulary.time_connectors)
        modifiers = alternation((*vocabulary.next_modifiers, *vocabulary.this_modifiers))
        articles = alternation(vocabulary.articles)
        weekdays = alternation(sorted(vocabulary.weekdays, key=len, reverse=True))
        suffixes = alternation(vocabulary.ordinal_suffixes)

        self._connector_pattern = re.compile(rf"\s*(?:(?:{connectors})\s*)?", re.IGNORECASE)
        self._preceding_connector_pattern = re.compile(
            rf"(?:^|\s)((?:{connectors})\s*)$",
            re.IGNORECASE,
        )
        self._trailing_time_pattern = re.compile(
            rf"\s*(?:(?:{connectors})\s*)?{_CLOCK_TIME_SOURCE}\s*$",
            re.IGNORECASE,
        )
        self._range_joiner_pattern = re.compile(
            rf"\s*(?:{alternation(vocabulary.range_joiners)})\s*(?:(?:{modifiers})\s+)?",
            re.IGNORECASE,
        )
        self._range_starter_pattern = re.compile(
            rf"\b(?:{alternation(vocabulary.range_starters)})\s+$",
            re.IGNORECASE,
        )
        self._filler_pattern = re.compile(
            rf"^(?:(?:{alternation(vocabulary.leading_fillers)})\s+)+(?:(?:{articles})\s+)?",
            re.IGNORECASE,
        )
        self._preceding_modifier_pattern = re.compile(rf"\b(?:{modifiers})\s+$", re.IGNORECASE)
        self._preceding_article_pattern = re.compile(rf"\b(?:{articles})\s+$", re.IGNORECASE)
        self._weekday_pattern = re.compile(
            rf"(?:(?P<modifier>{modifiers})\s+)?(?P<weekday>{weekdays})",
            re.IGNORECASE,
        )
        self._ordinal_day_pattern = re.compile(
            rf"(?:(?:{articles})\s+)?(?P<day>\d{{1,2}})(?:{suffixes})",
            re.IGNORECASE,
        )
        self._ordinal_day_search_pattern = re.compile(
            rf"\b(?:{articles})\s+(?P<day>\d{{1,2}})(?:{suffixes})\b",
            re.IGNORECASE,
        )

    def find_dates(self, text: str, *, forward_date: bool = True) -> list[DateMatch]:
        if not text.strip():
            return []

        reference = self.clock()
        candidates: list[DateMatch] = []
        cursor = 0
        for matched_text, value in self._search(text, reference, forward_date=forward_date):
            index = _locate(text, matched_text, cursor)
            if index is None:
                continue
            cursor = index + len(matched_text)
            matched_text, index = self._trim_fillers(matched_text, index)
            if self._is_noise(matched_text):
                continue
            match = _build_match(matched_text, index, value)
            candidates.append(self._anchor(text, match, reference, forward_date=forward_date))
        if forward_date:
            candidates.extend(self._ordinal_day_matches(text, reference))

        matches: list[DateMatch] = []
        for match in sorted(candidates, key=lambda candidate: candidate.index):
            if matches and match.index < matches[-1].end_index:
                continue
            matches.append(self._extend_with_trailing_time(text, match))

        return self._merge_ranges(text, matches)

    def _search(
        self,
        text: str,
        reference: datetime,
        *,
        forward_date: bool,
    ) -> list[tuple[str, datetime]]:
        settings: dict[str, Any] = {
            "RELATIVE_BASE": reference,
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        if forward_date:
            settings["PREFER_DATES_FROM"] = "future"
        results = search_dates(text, languages=[self.language], settings=settings)
        return list(results or [])

    def _is_noise(self, matched_text: str) -> bool:
        tokens = matched_text.split()
        if len(tokens) != 1:
            return not tokens
        token = tokens[0].strip(".,;:!?").lower()
        return token in self.vocabulary.ignored_matches or bool(
            _NUMERIC_TOKEN_PATTERN.fullmatch(token),
        )

    def _trim_fillers(self, matched_text: str, index: int) -> tuple[str, int]:
        filler = self._filler_pattern.match(matched_text)
        if not filler:
            return matched_text, index
        return matched_text[filler.end() :], index + filler.end()

    def _anchor(
        self,
        text: str,
        match: DateMatch,
        reference: datetime,
        *,
        forward_date: bool,
    ) -> DateMatch:
        """Re-date matches whose meaning dateparser gets wrong relative to the reference."""
        trailing_time = self._trailing_time_pattern.search(match.text)
        date_text = match.text[: trailing_time.start()] if trailing_time else match.text

        if not date_text.strip():
            if not match.start_hour_certain:
                return match
            due = datetime.combine(reference.date(), match.start.time())
            if forward_date and due < reference:
                due += timedelta(days=1)
            return replace(
                self._extend_left(text, match, self._preceding_connector_pattern),
                start=due,
            )

        ordinal = self._ordinal_day_pattern.fullmatch(date_text.strip())
        if ordinal:
            day = _next_day_of_month(reference.date(), int(ordinal.group("day")))
            if day is None or not forward_date:
                return match
            return replace(
                self._extend_left(text, match, self._preceding_article_pattern),
                start=datetime.combine(day, match.start.time()),
            )

        if self._weekday_pattern.fullmatch(date_text.strip()):
            extended = self._extend_left(text, match, self._preceding_modifier_pattern)
            weekday = self._weekday_pattern.match(extended.text)
            if weekday is None or weekday.group("modifier") is None:
                return extended
            day = self._relative_weekday(
                reference.date(),
                self.vocabulary.weekdays[weekday.group("weekday").lower()],
                weekday.group("modifier").lower(),
            )
            return replace(extended, start=datetime.combine(day, match.start.time()))

        return match

    def _extend_left(self, text: str, match: DateMatch, pattern: re.Pattern[str]) -> DateMatch:
        preceding = pattern.search(text[: match.index])
        if not preceding:
            return match
        # Keep only the captured word when the pattern also consumes a leading separator.
        start = preceding.start(1) if preceding.re.groups else preceding.start()
        return replace(match, text=text[start : match.end_index], index=start)

    def _relative_weekday(self, today: date, weekday: int, modifier: str) -> date:
        if modifier in self.vocabulary.next_modifiers:
            # The named day in the week after the current one.
            return today + timedelta(days=7 - today.weekday() + weekday)
        return today + timedelta(days=(weekday - today.weekday()) % 7)

    def _ordinal_day_matches(self, text: str, reference: datetime) -> list[DateMatch]:
        matches: list[DateMatch] = []
        for ordinal in self._ordinal_day_search_pattern.finditer(text):
            day = _next_day_of_month(reference.date(), int(ordinal.group("day")))
            if day is None:
                continue
            matches.append(
                DateMatch(
                    text=ordinal.group(0),
                    index=ordinal.start(),
                    start=datetime.combine(day, time()),
                ),
            )
        return matches

    def _extend_with_trailing_time(self, text: str, match: DateMatch) -> DateMatch:
        if match.start_hour_certain:
            return match

        following = text[match.end_index :]
        connector = self._connector_pattern.match(following)
        offset = connector.end() if connector else 0
        clock_match = _CLOCK_TIME_PATTERN.match(following, offset)
        if not clock_match:
            return match
        clock_time = _clock_time_from_match(clock_match)
        if clock_time is None:
            return match

        end_index = match.end_index + clock_match.end()
        return replace(
            match,
            text=text[match.index : end_index],
            start=datetime.combine(match.start.date(), clock_time),
            start_hour_certain=True,
        )

    def _merge_ranges(self, text: str, matches: list[DateMatch]) -> list[DateMatch]:
        merged: list[DateMatch] = []
        position = 0
        while position < len(matches):
            current = matches[position]
            following = matches[position + 1] if position + 1 < len(matches) else None
            if following and self._range_joiner_pattern.fullmatch(
                text[current.end_index : following.index],
            ):
                start_index = current.index
                starter = self._range_starter_pattern.search(text[: current.index])
                if starter:
                    start_index = starter.start()
                merged.append(
                    DateMatch(
                        text=text[start_index : following.end_index],
                        index=start_index,
                        start=current.start,
                        end=following.start,
                        start_hour_certain=current.start_hour_certain,
                        end_hour_certain=following.start_hour_certain,
                    ),
                )
                position += 2
                continue
            merged.append(current)
            position += 1
        return merged


class DateResolver:
    def __init__(
        self,
        vocabulary: LanguageVocabulary,
        *,
        default_to_due: bool,
        backend: DateparserBackend | None = None,
        clock: Clock | None = None,
        start_tolerance: int = DEFAULT_START_TOLERANCE,
    ) -> None:
        self.default_to_due = default_to_due
        self.start_tolerance = start_tolerance
        self.backend = backend or DateparserBackend(
            vocabulary.dates,
            language=vocabulary.date_parser_language,
            clock=clock,
        )
        triggers = alternation(vocabulary.dates.due_triggers)
        # Adjacent triggers ("due on", "due by") are consumed as one unit.
        self._trigger_pattern = re.compile(
            rf"\b(?:{triggers})(?:\s+(?:{triggers}))*\b",
            re.IGNORECASE,
        )
        self._due_keyword_pattern = re.compile(rf"\b(?:{triggers})\b", re.IGNORECASE)

    def extract(self, text: str) -> tuple[str, ResolvedDueDate | None]:
        working_text, resolved = self._extract_triggered(text)
        if resolved is not None:
            return working_text, resolved
        return self._extract_implicit(text)

    def _extract_triggered(self, text: str) -> tuple[str, ResolvedDueDate | None]:
        working_text = text
        resolved: ResolvedDueDate | None = None
        search_from = 0

        while True:
            trigger = self._trigger_pattern.search(working_text, search_from)
            if trigger is None:
                break

            date_match = self._leading_match(working_text[trigger.end() :])
            if date_match is None:
                search_from = trigger.end()
                continue

            if resolved is None:
                resolved = _resolve(date_match.start, hour_certain=date_match.start_hour_certain)
            else:
                logger.debug("Consumed additional due phrase without overwriting the due date")
            working_text = remove_span(
                working_text,
                trigger.start(),
                trigger.end() + date_match.end_index,
            )
            search_from = 0

        return working_text, resolved

    def _leading_match(self, remainder: str) -> DateMatch | None:
        matches = self.backend.find_dates(remainder, forward_date=True)
        if not matches:
            return None
        first = matches[0]
        if first.index > self.start_tolerance:
            return None
        return first

    def _extract_implicit(self, text: str) -> tuple[str, ResolvedDueDate | None]:
        matches = self.backend.find_dates(text, forward_date=True)
        if not matches:
            return text, None

        primary = matches[0]
        residue = remove_span(text, primary.index, primary.end_index)
        if primary.is_range() and primary.end is not None:
            return residue, _resolve(primary.end, hour_certain=primary.end_hour_certain)

        if self._due_keyword_pattern.search(primary.text) or self.default_to_due:
            return residue, _resolve(primary.start, hour_certain=primary.start_hour_certain)

        logger.debug("Discarded implicit date without due context at index %s", primary.index)
        return residue, None


def _resolve(value: datetime, *, hour_certain: bool) -> ResolvedDueDate:
    return ResolvedDueDate(
        due_date=value.strftime("%Y-%m-%d"),
        due_time=value.strftime("%H:%M") if hour_certain else None,
    )


def _build_match(matched_text: str, index: int, value: datetime) -> DateMatch:
    clock_time = parse_clock_time(matched_text)
    if clock_time is None:
        return DateMatch(text=matched_text, index=index, start=value)
    return DateMatch(
        text=matched_text,
        index=index,
        start=datetime.combine(value.date(), clock_time),
        start_hour_certain=True,
    )


def _locate(text: str, matched_text: str, cursor: int) -> int | None:
    index = text.find(matched_text, cursor)
    if index == -1:
        index = text.lower().find(matched_text.lower(), cursor)
    return None if index == -1 else index


def _next_day_of_month(today: date, day: int) -> date | None:
    if not 1 <= day <= 31:
        return None
    year, month = today.year, today.month
    # Months without the day (the 31st in November) are skipped.
    for _ in range(13):
        if day <= calendar.monthrange(year, month)[1]:
            candidate = date(year, month, day)
            if candidate >= today:
                return candidate
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return None
