from __future__ import annotations

import regex

from quickadd.services.task_models import UserMappedField
from quickadd.services.text_matching import (
    TOKEN_CHARACTER_CLASS,
    cleanup_whitespace,
    remove_span,
)
from quickadd.services.trigger_config import TriggerConfigService


class TagExtractor:
    def __init__(self, tag_trigger: str | None) -> None:
        self.tag_trigger = tag_trigger or ""
        self._pattern = (
            regex.compile(rf"{regex.escape(self.tag_trigger)}{TOKEN_CHARACTER_CLASS}+")
            if self.tag_trigger
            else None
        )

    def extract(self, text: str) -> tuple[str, list[str]]:
        if self._pattern is None:
            return text, []

        tags = [match.group(0)[len(self.tag_trigger) :] for match in self._pattern.finditer(text)]
        if not tags:
            return text, []
        return cleanup_whitespace(self._pattern.sub("", text)), tags


class UserFieldExtractor:
    def __init__(self, trigger_config: TriggerConfigService) -> None:
        self._field_patterns: list[tuple[UserMappedField, regex.Pattern[str]]] = []
        for trigger_def in trigger_config.get_all_enabled_triggers():
            if not trigger_config.is_user_field(trigger_def.property_id):
                continue
            user_field = trigger_config.get_user_field(trigger_def.property_id)
            if user_field is None:
                continue
            pattern = regex.compile(
                rf'{regex.escape(trigger_def.trigger)}(?:"([^"]+)"|({TOKEN_CHARACTER_CLASS}+))',
            )
            self._field_patterns.append((user_field, pattern))

    def extract(self, text: str) -> tuple[str, dict[str, str | list[str]]]:
        working_text = text
        values: dict[str, str | list[str]] = {}

        for user_field, pattern in self._field_patterns:
            if user_field.type == "list":
                list_values = [
                    _matched_value(match) for match in pattern.finditer(working_text)
                ]
                if list_values:
                    values[user_field.id] = list_values
                    working_text = cleanup_whitespace(pattern.sub("", working_text))
                continue

            match = pattern.search(working_text)
            if not match:
                continue

            raw_value = _matched_value(match)
            if user_field.type == "boolean":
                values[user_field.id] = "true" if raw_value.lower() == "true" else "false"
            else:
                # Date values stay raw; consumers parse them.
                values[user_field.id] = raw_value
            working_text = remove_span(working_text, match.start(), match.end())

        return working_text, values


def _matched_value(match: regex.Match[str]) -> str:
    return match.group(1) or match.group(2)
