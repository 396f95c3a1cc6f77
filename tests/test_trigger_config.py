from quickadd.services.task_models import (
    NLPTriggersConfig,
    PropertyTriggerConfig,
    UserMappedField,
    default_nlp_triggers,
)
from quickadd.services.trigger_config import TriggerConfigService


def test_default_triggers_cover_tags_and_status() -> None:
    service = TriggerConfigService(default_nlp_triggers())

    assert service.get_tag_trigger() == "#"
    assert service.get_status_trigger() == "*"


def test_disabled_and_empty_triggers_are_not_enabled() -> None:
    service = TriggerConfigService(
        NLPTriggersConfig(
            triggers=(
                PropertyTriggerConfig(property_id="tags", trigger="#", enabled=False),
                PropertyTriggerConfig(property_id="status", trigger=""),
            ),
        ),
    )

    assert service.get_tag_trigger() is None
    assert service.get_status_trigger() is None
    assert service.get_all_enabled_triggers() == ()
    assert service.get_trigger_for_property("tags") is not None


def test_later_trigger_for_same_property_replaces_earlier_one() -> None:
    service = TriggerConfigService(
        NLPTriggersConfig(
            triggers=(
                PropertyTriggerConfig(property_id="tags", trigger="#"),
                PropertyTriggerConfig(property_id="tags", trigger="+"),
            ),
        ),
    )

    assert service.get_tag_trigger() == "+"
    assert len(service.get_all_enabled_triggers()) == 1


def test_user_field_lookup() -> None:
    effort = UserMappedField(id="effort", key="effort", type="number", display_name="Effort")
    service = TriggerConfigService(default_nlp_triggers(), [effort])

    assert service.is_user_field("effort") is True
    assert service.is_user_field("tags") is False
    assert service.is_user_field("missing") is False
    assert service.get_user_field("effort") == effort


def test_user_mapped_field_from_payload() -> None:
    parsed = UserMappedField.from_payload(
        {"id": " effort ", "type": "NUMBER", "displayName": "Effort"},
    )

    assert parsed == UserMappedField(
        id="effort",
        key="effort",
        type="number",
        display_name="Effort",
    )
    assert UserMappedField.from_payload({"id": "x", "type": "color"}) is None
    assert UserMappedField.from_payload({"type": "text"}) is None
