import pytest

from quickadd.services.recurrence_text import describe_recurrence


@pytest.mark.parametrize(
    ("rule", "expected"),
    [
        ("FREQ=DAILY", "every day"),
        ("FREQ=WEEKLY;INTERVAL=2", "every 2 weeks"),
        ("FREQ=WEEKLY;BYDAY=MO,WE,FR", "every week on Monday, Wednesday and Friday"),
        ("FREQ=WEEKLY;INTERVAL=2;BYDAY=TU", "every 2 weeks on Tuesday"),
        ("FREQ=MONTHLY;BYDAY=MO;BYSETPOS=2", "every month on the second Monday"),
        ("FREQ=MONTHLY;BYDAY=FR;BYSETPOS=-1", "every month on the last Friday"),
        ("FREQ=MONTHLY;BYMONTHDAY=22", "every month on the 22nd"),
        ("FREQ=YEARLY", "every year"),
    ],
)
def test_describe_recurrence(rule: str, expected: str) -> None:
    assert describe_recurrence(rule) == expected


@pytest.mark.parametrize("rule", [None, "", "FREQ=SOMETIMES", "FREQ=WEEKLY;BYDAY=XX"])
def test_describe_recurrence_rejects_unparseable_rules(rule: str | None) -> None:
    assert describe_recurrence(rule) is None
