from quickadd.services.nlp_vocabulary import EN_VOCABULARY, BoundaryConfig
from quickadd.services.status_matcher import StatusMatcher
from quickadd.services.task_models import StatusConfig


def _matcher(statuses: list[StatusConfig], trigger: str | None = "*") -> StatusMatcher:
    return StatusMatcher(
        status_configs=statuses,
        status_trigger=trigger,
        fallback_vocabulary=EN_VOCABULARY.fallback_status,
        boundaries=BoundaryConfig(),
    )


def test_configured_status_label_is_matched_and_removed() -> None:
    matcher = _matcher([StatusConfig(value="done", label="Done")])

    residue, status = matcher.extract("Ship it done")

    assert status == "done"
    assert residue == "Ship it"


def test_longest_label_wins() -> None:
    matcher = _matcher(
        [
            StatusConfig(value="progress", label="Progress"),
            StatusConfig(value="in-progress", label="In Progress"),
        ],
    )

    residue, status = matcher.extract("Write docs in progress")

    assert status == "in-progress"
    assert residue == "Write docs"


def test_triggered_value_is_matched() -> None:
    matcher = _matcher([StatusConfig(value="waiting", label="Waiting on others")])

    residue, status = matcher.extract("Follow up *waiting")

    assert status == "waiting"
    assert residue == "Follow up"


def test_status_must_be_flanked_by_whitespace() -> None:
    matcher = _matcher([StatusConfig(value="done", label="Done")])

    residue, status = matcher.extract("Abandoned plans")

    assert status is None
    assert residue == "Abandoned plans"


def test_trigger_is_not_used_when_disabled() -> None:
    matcher = _matcher([StatusConfig(value="done", label="Done")], trigger=None)

    residue, status = matcher.extract("Finish *done")

    assert status is None
    assert residue == "Finish *done"


def test_fallback_vocabulary_is_used_without_configured_statuses() -> None:
    matcher = _matcher([])

    assert matcher.extract("Email Bob todo") == ("Email Bob", "open")
    assert matcher.extract("Taxes completed") == ("Taxes", "done")
    assert matcher.extract("Plan trip") == ("Plan trip", None)


def test_configured_statuses_replace_fallback_vocabulary() -> None:
    matcher = _matcher([StatusConfig(value="blocked", label="Blocked")])

    residue, status = matcher.extract("Deploy done")

    assert status is None
    assert residue == "Deploy done"
