from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

UNTITLED_TASK_TITLE = "Untitled Task"
TAGS_PROPERTY_ID = "tags"
STATUS_PROPERTY_ID = "status"

UserFieldType = Literal["text", "number", "date", "boolean", "list"]
USER_FIELD_TYPES: frozenset[str] = frozenset({"text", "number", "date", "boolean", "list"})


@dataclass(frozen=True)
class StatusConfig:
    value: str
    label: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> StatusConfig | None:
        value = payload.get("value")
        label = payload.get("label")
        if not isinstance(value, str):
            return None
        if not isinstance(label, str) or not label.strip():
            label = value
        return cls(value=value, label=label)


@dataclass(frozen=True)
class PropertyTriggerConfig:
    property_id: str
    trigger: str
    enabled: bool = True


@dataclass(frozen=True)
class NLPTriggersConfig:
    triggers: tuple[PropertyTriggerConfig, ...] = ()


@dataclass(frozen=True)
class UserMappedField:
    id: str
    key: str
    type: UserFieldType
    display_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> UserMappedField | None:
        raw_id = payload.get("id")
        if not isinstance(raw_id, str) or not raw_id.strip():
            return None
        field_id = raw_id.strip()
        raw_type = payload.get("type")
        field_type = raw_type.strip().lower() if isinstance(raw_type, str) else "text"
        if field_type not in USER_FIELD_TYPES:
            return None
        raw_key = payload.get("key")
        key = raw_key.strip() if isinstance(raw_key, str) and raw_key.strip() else field_id
        raw_display_name = payload.get("display_name") or payload.get("displayName")
        display_name = raw_display_name.strip() if isinstance(raw_display_name, str) else ""
        return cls(id=field_id, key=key, type=field_type, display_name=display_name)


def default_nlp_triggers() -> NLPTriggersConfig:
    return NLPTriggersConfig(
        triggers=(
            PropertyTriggerConfig(property_id=TAGS_PROPERTY_ID, trigger="#", enabled=True),
            PropertyTriggerConfig(property_id=STATUS_PROPERTY_ID, trigger="*", enabled=True),
        ),
    )


@dataclass
class ParsedTaskData:
    title: str = ""
    details: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    status: str | None = None
    tags: list[str] = field(default_factory=list)
    recurrence: str | None = None
    user_fields: dict[str, str | list[str]] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "details": self.details,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "status": self.status,
            "tags": list(self.tags),
            "recurrence": self.recurrence,
            "user_fields": (
                {
                    field_id: list(value) if isinstance(value, list) else value
                    for field_id, value in self.user_fields.items()
                }
                if self.user_fields is not None
                else None
            ),
        }


@dataclass
class TaskCreationData:
    title: str
    status: str
    tags: list[str] = field(default_factory=list)
    details: str | None = None
    due: str | None = None
    recurrence: str | None = None
    user_fields: dict[str, str | list[str]] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "details": self.details,
            "status": self.status,
            "tags": list(self.tags),
            "due": self.due,
            "recurrence": self.recurrence,
            "user_fields": dict(self.user_fields) if self.user_fields is not None else None,
        }


@dataclass(frozen=True)
class PreviewPart:
    icon: str
    text: str


@dataclass(frozen=True)
class StatusSuggestion:
    value: str
    label: str
    display: str
