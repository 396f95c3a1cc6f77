from pydantic import BaseModel


class NLPTextRequest(BaseModel):
    text: str


class ParsedTaskPayload(BaseModel):
    title: str
    details: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    status: str | None = None
    tags: list[str] = []
    recurrence: str | None = None
    user_fields: dict[str, str | list[str]] | None = None


class TaskCreationPayload(BaseModel):
    title: str
    status: str
    details: str | None = None
    tags: list[str] = []
    due: str | None = None
    recurrence: str | None = None
    user_fields: dict[str, str | list[str]] | None = None


class NLPParseResponse(BaseModel):
    parsed: ParsedTaskPayload
    task_data: TaskCreationPayload


class PreviewPartPayload(BaseModel):
    icon: str
    text: str


class NLPPreviewResponse(BaseModel):
    parts: list[PreviewPartPayload]
    text: str


class StatusSuggestionPayload(BaseModel):
    value: str
    label: str
    display: str


class StatusSuggestionsResponse(BaseModel):
    items: list[StatusSuggestionPayload]
