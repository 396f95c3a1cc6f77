from __future__ import annotations

from collections.abc import Iterable

from quickadd.services.task_models import (
    STATUS_PROPERTY_ID,
    TAGS_PROPERTY_ID,
    NLPTriggersConfig,
    PropertyTriggerConfig,
    UserMappedField,
)


class TriggerConfigService:
    def __init__(
        self,
        nlp_triggers: NLPTriggersConfig,
        user_fields: Iterable[UserMappedField] = (),
    ) -> None:
        triggers_by_property: dict[str, PropertyTriggerConfig] = {}
        for trigger_config in nlp_triggers.triggers:
            # Later entries for the same property replace earlier ones.
            triggers_by_property[trigger_config.property_id] = trigger_config
        self._triggers = tuple(triggers_by_property.values())
        self._triggers_by_property = triggers_by_property
        self._user_fields = {user_field.id: user_field for user_field in user_fields}

    def get_trigger_for_property(self, property_id: str) -> PropertyTriggerConfig | None:
        return self._triggers_by_property.get(property_id)

    def get_enabled_trigger(self, property_id: str) -> str | None:
        trigger_config = self._triggers_by_property.get(property_id)
        if not trigger_config or not trigger_config.enabled:
            return None
        return trigger_config.trigger or None

    def get_tag_trigger(self) -> str | None:
        return self.get_enabled_trigger(TAGS_PROPERTY_ID)

    def get_status_trigger(self) -> str | None:
        return self.get_enabled_trigger(STATUS_PROPERTY_ID)

    def get_all_enabled_triggers(self) -> tuple[PropertyTriggerConfig, ...]:
        return tuple(
            trigger_config
            for trigger_config in self._triggers
            if trigger_config.enabled and trigger_config.trigger
        )

    def is_user_field(self, property_id: str) -> bool:
        if property_id in {TAGS_PROPERTY_ID, STATUS_PROPERTY_ID}:
            return False
        return property_id in self._user_fields

    def get_user_field(self, field_id: str) -> UserMappedField | None:
        return self._user_fields.get(field_id)
