from __future__ import annotations

from dataclasses import dataclass

WEEKDAY_CODES: tuple[str, ...] = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")

_WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

WEEKDAY_CODE_BY_NAME: dict[str, str] = dict(zip(_WEEKDAY_NAMES, WEEKDAY_CODES))


class UnsupportedLanguageError(ValueError):
    pass


@dataclass(frozen=True)
class BoundaryConfig:
    boundary: str = r"\b"
    end_boundary: str = r"\b"


@dataclass(frozen=True)
class RecurrenceVocabulary:
    daily: tuple[str, ...]
    weekly: tuple[str, ...]
    monthly: tuple[str, ...]
    yearly: tuple[str, ...]
    every: tuple[str, ...]
    other: tuple[str, ...]
    weekdays: dict[str, tuple[str, ...]]
    plural_weekdays: dict[str, tuple[str, ...]]
    ordinals: dict[str, tuple[str, ...]]
    periods: dict[str, tuple[str, ...]]
    weekday_group: tuple[str, ...]
    weekend_group: tuple[str, ...]
    on_words: tuple[str, ...]
    the_words: tuple[str, ...]
    list_joiners: tuple[str, ...]
    range_joiners: tuple[str, ...]

    def all_weekdays(self) -> tuple[str, ...]:
        return tuple(word for name in _WEEKDAY_NAMES for word in self.weekdays.get(name, ()))

    def all_plural_weekdays(self) -> tuple[str, ...]:
        return tuple(
            word for name in _WEEKDAY_NAMES for word in self.plural_weekdays.get(name, ())
        )

    def all_ordinals(self) -> tuple[str, ...]:
        return tuple(word for words in self.ordinals.values() for word in words)

    def all_periods(self) -> tuple[str, ...]:
        return tuple(word for words in self.periods.values() for word in words)


@dataclass(frozen=True)
class DateVocabulary:
    due_triggers: tuple[str, ...]
    range_starters: tuple[str, ...]
    range_joiners: tuple[str, ...]
    time_connectors: tuple[str, ...]
    ignored_matches: frozenset[str]
    weekdays: dict[str, int]
    next_modifiers: tuple[str, ...]
    this_modifiers: tuple[str, ...]
    articles: tuple[str, ...]
    leading_fillers: tuple[str, ...]
    ordinal_suffixes: tuple[str, ...]


@dataclass(frozen=True)
class StatusVocabulary:
    open: tuple[str, ...]
    done: tuple[str, ...]


@dataclass(frozen=True)
class LanguageVocabulary:
    code: str
    name: str
    date_parser_language: str
    dates: DateVocabulary
    recurrence: RecurrenceVocabulary
    fallback_status: StatusVocabulary


EN_VOCABULARY = LanguageVocabulary(
    code="en",
    name="English",
    date_parser_language="en",
    dates=DateVocabulary(
        due_triggers=(
            "due",
            "deadline",
            "must be done by",
            "by",
            "scheduled for",
            "start on",
            "begin on",
            "work on",
            "on",
        ),
        range_starters=("from", "between"),
        range_joiners=("to", "until", "till", "through", "thru", "-", "and"),
        time_connectors=("at", "@"),
        ignored_matches=frozenset(
            {
                "a",
                "an",
                "at",
                "by",
                "in",
                "now",
                "of",
                "on",
                "the",
                "to",
                "may",
                "second",
                "one",
                "two",
                "three",
                "four",
                "five",
                "six",
                "seven",
                "eight",
                "nine",
                "ten",
                "eleven",
                "twelve",
            },
        ),
        weekdays={
            "monday": 0,
            "mon": 0,
            "tuesday": 1,
            "tue": 1,
            "tues": 1,
            "wednesday": 2,
            "wed": 2,
            "thursday": 3,
            "thu": 3,
            "thur": 3,
            "thurs": 3,
            "friday": 4,
            "fri": 4,
            "saturday": 5,
            "sat": 5,
            "sunday": 6,
            "sun": 6,
        },
        next_modifiers=("next",),
        this_modifiers=("this", "coming"),
        articles=("the",),
        leading_fillers=("about", "regarding", "for", "of", "with"),
        ordinal_suffixes=("st", "nd", "rd", "th"),
    ),
    recurrence=RecurrenceVocabulary(
        daily=("daily", "every day", "everyday", "each day"),
        weekly=("weekly", "every week", "each week"),
        monthly=("monthly", "every month", "each month"),
        yearly=("yearly", "annually", "every year", "each year"),
        every=("every", "each"),
        other=("other", "alternate"),
        weekdays={
            "monday": ("monday", "mon"),
            "tuesday": ("tuesday", "tue", "tues"),
            "wednesday": ("wednesday", "wed"),
            "thursday": ("thursday", "thu", "thur", "thurs"),
            "friday": ("friday", "fri"),
            "saturday": ("saturday", "sat"),
            "sunday": ("sunday", "sun"),
        },
        plural_weekdays={
            "monday": ("mondays",),
            "tuesday": ("tuesdays",),
            "wednesday": ("wednesdays",),
            "thursday": ("thursdays",),
            "friday": ("fridays",),
            "saturday": ("saturdays",),
            "sunday": ("sundays",),
        },
        ordinals={
            "first": ("first", "1st"),
            "second": ("second", "2nd"),
            "third": ("third", "3rd"),
            "fourth": ("fourth", "4th"),
            "last": ("last",),
        },
        periods={
            "day": ("day", "days"),
            "week": ("week", "weeks"),
            "month": ("month", "months"),
            "year": ("year", "years"),
        },
        weekday_group=("weekday", "weekdays"),
        weekend_group=("weekend", "weekends"),
        on_words=("on",),
        the_words=("the",),
        list_joiners=(",", "and", "&"),
        range_joiners=("to", "through", "thru", "-"),
    ),
    fallback_status=StatusVocabulary(
        open=("todo", "to do", "open"),
        done=("done", "completed", "finished"),
    ),
)

_VOCABULARIES: dict[str, LanguageVocabulary] = {
    EN_VOCABULARY.code: EN_VOCABULARY,
}


def get_vocabulary(language_code: str) -> LanguageVocabulary:
    normalized = language_code.strip().lower()
    vocabulary = _VOCABULARIES.get(normalized)
    if vocabulary is None:
        supported = ", ".join(sorted(_VOCABULARIES))
        raise UnsupportedLanguageError(
            f"Unsupported NLP language '{language_code}'. Supported: {supported}",
        )
    return vocabulary


def supported_languages() -> tuple[str, ...]:
    return tuple(sorted(_VOCABULARIES))
