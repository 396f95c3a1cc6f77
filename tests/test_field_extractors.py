from quickadd.services.field_extractors import TagExtractor, UserFieldExtractor
from quickadd.services.task_models import (
    NLPTriggersConfig,
    PropertyTriggerConfig,
    UserMappedField,
)
from quickadd.services.trigger_config import TriggerConfigService


def _user_field_extractor(*fields: tuple[UserMappedField, str]) -> UserFieldExtractor:
    triggers = NLPTriggersConfig(
        triggers=(
            PropertyTriggerConfig(property_id="tags", trigger="#"),
            *(
                PropertyTriggerConfig(property_id=user_field.id, trigger=trigger)
                for user_field, trigger in fields
            ),
            PropertyTriggerConfig(property_id="unknown", trigger="%"),
        ),
    )
    return UserFieldExtractor(
        TriggerConfigService(triggers, [user_field for user_field, _ in fields]),
    )


def test_tags_are_collected_and_removed() -> None:
    residue, tags = TagExtractor("#").extract("Plan #work/q4 trip #travel-2026 now")

    assert tags == ["work/q4", "travel-2026"]
    assert residue == "Plan trip now"


def test_tags_support_unicode_letters() -> None:
    residue, tags = TagExtractor("#").extract("Comprar pan #café")

    assert tags == ["café"]
    assert residue == "Comprar pan"


def test_tags_keep_devanagari_and_thai_vowel_signs() -> None:
    assert TagExtractor("#").extract("Tag #हिन्दी test") == ("Tag test", ["हिन्दी"])
    assert TagExtractor("#").extract("Read #ภาษาไทย notes") == ("Read notes", ["ภาษาไทย"])


def test_user_field_value_keeps_combining_marks() -> None:
    project = UserMappedField(id="project", key="project", type="text")
    extractor = _user_field_extractor((project, "@"))

    residue, values = extractor.extract("Write @हिन्दी draft")

    assert values == {"project": "हिन्दी"}
    assert residue == "Write draft"


def test_tag_extractor_without_trigger_is_noop() -> None:
    assert TagExtractor(None).extract("Plan #work") == ("Plan #work", [])


def test_custom_tag_trigger() -> None:
    residue, tags = TagExtractor("+").extract("Buy +groceries milk")

    assert tags == ["groceries"]
    assert residue == "Buy milk"


def test_list_user_field_collects_all_values() -> None:
    extractor = _user_field_extractor(
        (UserMappedField(id="people", key="people", type="list"), "@"),
    )

    residue, values = extractor.extract('Sync with @ana and @"Bob Smith"')

    assert values == {"people": ["ana", "Bob Smith"]}
    assert residue == "Sync with and"


def test_scalar_user_fields_use_first_occurrence() -> None:
    extractor = _user_field_extractor(
        (UserMappedField(id="effort", key="effort", type="number"), "effort:"),
        (UserMappedField(id="billable", key="billable", type="boolean"), "billable:"),
        (UserMappedField(id="start", key="start", type="date"), "start:"),
    )

    residue, values = extractor.extract(
        "Audit effort:3 effort:5 billable:TRUE start:2026-11-01",
    )

    assert values == {"effort": "3", "billable": "true", "start": "2026-11-01"}
    assert residue == "Audit effort:5"


def test_boolean_user_field_normalizes_other_values_to_false() -> None:
    extractor = _user_field_extractor(
        (UserMappedField(id="billable", key="billable", type="boolean"), "billable:"),
    )

    _, values = extractor.extract("Audit billable:no")

    assert values == {"billable": "false"}


def test_unknown_user_field_triggers_are_skipped() -> None:
    extractor = _user_field_extractor()

    residue, values = extractor.extract("Budget %high")

    assert values == {}
    assert residue == "Budget %high"
