from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import logging

from quickadd.services.date_resolver import DateResolver
from quickadd.services.field_extractors import TagExtractor, UserFieldExtractor
from quickadd.services.nlp_vocabulary import EN_VOCABULARY, BoundaryConfig, LanguageVocabulary
from quickadd.services.recurrence_compiler import RecurrenceCompiler
from quickadd.services.recurrence_text import describe_recurrence
from quickadd.services.result_validator import validate_and_cleanup
from quickadd.services.status_matcher import StatusMatcher
from quickadd.services.task_models import (
    NLPTriggersConfig,
    ParsedTaskData,
    PreviewPart,
    StatusConfig,
    StatusSuggestion,
    TaskCreationData,
    UserMappedField,
)
from quickadd.services.trigger_config import TriggerConfigService

logger = logging.getLogger(__name__)

ParseStage = Callable[[str, ParsedTaskData], str]

_DETAILS_PREVIEW_LENGTH = 50
_PREVIEW_SEPARATOR = " • "


class NaturalLanguageParser:
    def __init__(
        self,
        status_configs: Sequence[StatusConfig],
        default_to_due: bool,
        nlp_triggers: NLPTriggersConfig,
        user_fields: Iterable[UserMappedField] = (),
        *,
        vocabulary: LanguageVocabulary = EN_VOCABULARY,
        date_resolver: DateResolver | None = None,
        boundaries: BoundaryConfig | None = None,
    ) -> None:
        self.status_configs = tuple(status_configs)
        self.default_to_due = default_to_due
        self.vocabulary = vocabulary
        self.boundaries = boundaries or BoundaryConfig()
        self.trigger_config = TriggerConfigService(nlp_triggers, user_fields)

        self.tag_extractor = TagExtractor(self.trigger_config.get_tag_trigger())
        self.status_matcher = StatusMatcher(
            status_configs=self.status_configs,
            status_trigger=self.trigger_config.get_status_trigger(),
            fallback_vocabulary=vocabulary.fallback_status,
            boundaries=self.boundaries,
        )
        self.recurrence_compiler = RecurrenceCompiler(vocabulary.recurrence, self.boundaries)
        self.user_field_extractor = UserFieldExtractor(self.trigger_config)
        self.date_resolver = date_resolver or DateResolver(
            vocabulary,
            default_to_due=default_to_due,
        )

        self._stages: tuple[tuple[str, ParseStage], ...] = (
            ("tags", self._apply_tags),
            ("status", self._apply_status),
            ("recurrence", self._apply_recurrence),
            ("user_fields", self._apply_user_fields),
            ("date_time", self._apply_date_time),
        )

    def parse(self, text: str) -> ParsedTaskData:
        trimmed = text.strip() if isinstance(text, str) else ""
        title_line, separator, details = trimmed.partition("\n")
        result = ParsedTaskData(details=(details.strip() or None) if separator else None)

        working_text = title_line.strip()
        for stage_name, stage in self._stages:
            try:
                working_text = stage(working_text, result)
            except Exception:
                logger.warning(
                    "Parse stage failed stage=%s; continuing with previous text",
                    stage_name,
                    exc_info=True,
                )

        result.title = working_text.strip()
        return validate_and_cleanup(result)

    def _apply_tags(self, text: str, result: ParsedTaskData) -> str:
        residue, tags = self.tag_extractor.extract(text)
        result.tags.extend(tags)
        return residue

    def _apply_status(self, text: str, result: ParsedTaskData) -> str:
        residue, status = self.status_matcher.extract(text)
        if status is not None:
            result.status = status
        return residue

    def _apply_recurrence(self, text: str, result: ParsedTaskData) -> str:
        residue, rule = self.recurrence_compiler.extract(text)
        if rule is not None:
            result.recurrence = rule
        return residue

    def _apply_user_fields(self, text: str, result: ParsedTaskData) -> str:
        residue, values = self.user_field_extractor.extract(text)
        if values:
            result.user_fields = values
        return residue

    def _apply_date_time(self, text: str, result: ParsedTaskData) -> str:
        residue, resolved = self.date_resolver.extract(text)
        if resolved is not None:
            result.due_date = resolved.due_date
            result.due_time = resolved.due_time
        return residue

    def get_preview_data(self, parsed: ParsedTaskData) -> list[PreviewPart]:
        parts: list[PreviewPart] = []

        if parsed.title:
            parts.append(PreviewPart(icon="edit-3", text=f'"{parsed.title}"'))
        if parsed.details:
            snippet = parsed.details[:_DETAILS_PREVIEW_LENGTH]
            if len(parsed.details) > _DETAILS_PREVIEW_LENGTH:
                snippet = f"{snippet}..."
            parts.append(PreviewPart(icon="file-text", text=f'Details: "{snippet}"'))
        if parsed.due_date:
            date_text = (
                f"{parsed.due_date} at {parsed.due_time}" if parsed.due_time else parsed.due_date
            )
            parts.append(PreviewPart(icon="calendar", text=f"Date: {date_text}"))
        if parsed.status:
            parts.append(PreviewPart(icon="activity", text=f"Status: {parsed.status}"))
        if parsed.tags:
            tags_text = ", ".join(f"#{tag}" for tag in parsed.tags)
            parts.append(PreviewPart(icon="tag", text=f"Tags: {tags_text}"))
        if parsed.recurrence:
            recurrence_text = describe_recurrence(parsed.recurrence) or "Invalid recurrence"
            parts.append(PreviewPart(icon="repeat", text=f"Recurrence: {recurrence_text}"))

        for field_id, value in (parsed.user_fields or {}).items():
            user_field = self.trigger_config.get_user_field(field_id)
            display_name = (user_field.display_name if user_field else "") or field_id
            display_value = ", ".join(value) if isinstance(value, list) else value
            parts.append(PreviewPart(icon="box", text=f"{display_name}: {display_value}"))

        return parts

    def get_preview_text(self, parsed: ParsedTaskData) -> str:
        return _PREVIEW_SEPARATOR.join(part.text for part in self.get_preview_data(parsed))

    def get_status_suggestions(self, query: str, limit: int = 10) -> list[StatusSuggestion]:
        normalized_query = (query or "").lower()
        suggestions: list[StatusSuggestion] = []
        for config in self.status_configs:
            if len(suggestions) >= limit:
                break
            if not config.value.strip() or not config.label.strip():
                continue
            if (
                normalized_query not in config.value.lower()
                and normalized_query not in config.label.lower()
            ):
                continue
            suggestions.append(
                StatusSuggestion(value=config.value, label=config.label, display=config.label),
            )
        return suggestions

    def to_task_creation_data(
        self,
        parsed: ParsedTaskData,
        default_status: str,
    ) -> TaskCreationData:
        due = parsed.due_date
        if due and parsed.due_time:
            due = f"{due} {parsed.due_time}"
        return TaskCreationData(
            title=parsed.title,
            details=parsed.details,
            status=parsed.status or default_status,
            tags=list(parsed.tags),
            due=due,
            recurrence=parsed.recurrence,
            user_fields=dict(parsed.user_fields) if parsed.user_fields else None,
        )
