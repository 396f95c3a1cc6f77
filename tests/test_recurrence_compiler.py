import pytest

from quickadd.services.nlp_vocabulary import EN_VOCABULARY, BoundaryConfig
from quickadd.services.recurrence_compiler import RecurrenceCompiler, is_valid_recurrence_rule


@pytest.fixture
def compiler() -> RecurrenceCompiler:
    return RecurrenceCompiler(EN_VOCABULARY.recurrence, BoundaryConfig())


@pytest.mark.parametrize(
    ("text", "expected_rule", "expected_residue"),
    [
        ("Team sync every second monday", "FREQ=MONTHLY;BYDAY=MO;BYSETPOS=2", "Team sync"),
        ("Report every last friday", "FREQ=MONTHLY;BYDAY=FR;BYSETPOS=-1", "Report"),
        ("Book club monthly on the first tuesday", "FREQ=MONTHLY;BYDAY=TU;BYSETPOS=1", "Book club"),
        ("Pay bills monthly on the 15th", "FREQ=MONTHLY;BYMONTHDAY=15", "Pay bills"),
        ("Invoice every month on the 2nd", "FREQ=MONTHLY;BYMONTHDAY=2", "Invoice"),
        ("Water plants every 3 days", "FREQ=DAILY;INTERVAL=3", "Water plants"),
        ("Rotate keys every 6 months", "FREQ=MONTHLY;INTERVAL=6", "Rotate keys"),
        ("Gym every other tuesday", "FREQ=WEEKLY;INTERVAL=2;BYDAY=TU", "Gym"),
        ("Pay rent every other week", "FREQ=WEEKLY;INTERVAL=2", "Pay rent"),
        ("Trash weekly on thursday", "FREQ=WEEKLY;BYDAY=TH", "Trash"),
        ("Laundry weekly sundays", "FREQ=WEEKLY;BYDAY=SU", "Laundry"),
        (
            "Yoga every monday, wednesday and friday",
            "FREQ=WEEKLY;BYDAY=MO,WE,FR",
            "Yoga",
        ),
        ("mon and thu standup", "FREQ=WEEKLY;BYDAY=MO,TH", "standup"),
        ("Review due monday to friday", "FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR", "Review due"),
        ("Cleanup fri-mon", "FREQ=WEEKLY;BYDAY=FR,SA,SU,MO", "Cleanup"),
        ("Standup every weekday", "FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR", "Standup"),
        ("Relax every weekend", "FREQ=WEEKLY;BYDAY=SA,SU", "Relax"),
        ("Call mom every Sunday", "FREQ=WEEKLY;BYDAY=SU", "Call mom"),
        ("Piano lessons tuesdays", "FREQ=WEEKLY;BYDAY=TU", "Piano lessons"),
        ("Gym mondays and wednesdays", "FREQ=WEEKLY;BYDAY=MO,WE", "Gym"),
        ("Swim on tuesdays, thursdays & saturdays", "FREQ=WEEKLY;BYDAY=TU,TH,SA", "Swim"),
        ("Backup daily", "FREQ=DAILY", "Backup"),
        ("File taxes annually", "FREQ=YEARLY", "File taxes"),
    ],
)
def test_compiler_builds_rule_and_removes_phrase(
    compiler: RecurrenceCompiler,
    text: str,
    expected_rule: str,
    expected_residue: str,
) -> None:
    residue, rule = compiler.extract(text)

    assert rule == expected_rule
    assert residue == expected_residue


def test_compiler_prefers_ordinal_weekday_over_bare_frequency_word(
    compiler: RecurrenceCompiler,
) -> None:
    residue, rule = compiler.extract("Report every second monday daily")

    assert rule == "FREQ=MONTHLY;BYDAY=MO;BYSETPOS=2"
    assert residue == "Report daily"


def test_compiler_rejects_zero_interval(compiler: RecurrenceCompiler) -> None:
    residue, rule = compiler.extract("Stretch every 0 days")

    assert rule is None
    assert residue == "Stretch every 0 days"


def test_compiler_falls_through_out_of_range_month_day(compiler: RecurrenceCompiler) -> None:
    residue, rule = compiler.extract("Close books monthly on the 32nd")

    assert rule == "FREQ=MONTHLY"
    assert residue == "Close books on the 32nd"


def test_compiler_requires_two_distinct_days_for_lists(compiler: RecurrenceCompiler) -> None:
    residue, rule = compiler.extract("every monday and monday")

    assert rule == "FREQ=WEEKLY;BYDAY=MO"
    assert residue == "and monday"


def test_compiler_leaves_text_without_recurrence_untouched(compiler: RecurrenceCompiler) -> None:
    residue, rule = compiler.extract("Buy milk")

    assert rule is None
    assert residue == "Buy milk"


def test_compiler_pattern_table_is_ordered_most_specific_first(
    compiler: RecurrenceCompiler,
) -> None:
    names = [pattern.name for pattern in compiler.patterns]

    assert names[0] == "every_ordinal_weekday"
    assert names[-4:] == ["daily", "weekly", "monthly", "yearly"]
    assert names.index("every_n_periods") < names.index("every_other_period")
    assert names.index("weekday_range") < names.index("every_weekday_group")


@pytest.mark.parametrize(
    ("rule", "expected"),
    [
        ("FREQ=DAILY", True),
        ("FREQ=WEEKLY;BYDAY=MO,FR", True),
        ("FREQ=WEEKLY;BYDAY=", False),
        ("FREQ=WEEKLY;BYDAY=;INTERVAL=2", False),
        ("FREQ=WEEKLY;BYDAY=undefined", False),
        ("BYDAY=MO", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_recurrence_rule(rule: str | None, expected: bool) -> None:
    assert is_valid_recurrence_rule(rule) is expected
