from __future__ import annotations

import re

from quickadd.services.recurrence_compiler import is_valid_recurrence_rule
from quickadd.services.task_models import UNTITLED_TASK_TITLE, ParsedTaskData

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_and_cleanup(result: ParsedTaskData) -> ParsedTaskData:
    title = result.title.strip() if isinstance(result.title, str) else ""
    tags: list[str] = []
    for tag in result.tags or []:
        if tag and tag not in tags:
            tags.append(tag)

    user_fields = (
        {
            field_id: list(value) if isinstance(value, list) else value
            for field_id, value in result.user_fields.items()
        }
        if result.user_fields
        else None
    )

    return ParsedTaskData(
        title=title or UNTITLED_TASK_TITLE,
        details=result.details,
        due_date=result.due_date if _matches(_DATE_PATTERN, result.due_date) else None,
        due_time=result.due_time if _matches(_TIME_PATTERN, result.due_time) else None,
        status=result.status or None,
        tags=tags,
        recurrence=result.recurrence if is_valid_recurrence_rule(result.recurrence) else None,
        user_fields=user_fields,
    )


def _matches(pattern: re.Pattern[str], value: str | None) -> bool:
    return isinstance(value, str) and bool(pattern.fullmatch(value))
