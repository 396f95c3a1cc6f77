from __future__ import annotations

from dataclasses import asdict
import logging

from quickadd.core.config import Settings
from quickadd.schemas.nlp import (
    NLPParseResponse,
    NLPPreviewResponse,
    ParsedTaskPayload,
    PreviewPartPayload,
    StatusSuggestionPayload,
    StatusSuggestionsResponse,
    TaskCreationPayload,
)
from quickadd.services.natural_language_parser import NaturalLanguageParser
from quickadd.services.parser_factory import get_natural_language_parser

logger = logging.getLogger(__name__)

_MAX_SUGGESTIONS = 50


class NLPService:
    def __init__(
        self,
        settings: Settings,
        parser: NaturalLanguageParser | None = None,
    ) -> None:
        self.settings = settings
        self.parser = parser or get_natural_language_parser(settings)

    def parse_text(self, text: str) -> NLPParseResponse:
        parsed = self.parser.parse(text)
        task_data = self.parser.to_task_creation_data(
            parsed,
            default_status=self.settings.default_task_status,
        )
        logger.info(
            "Parsed quick-add text length=%s has_due_date=%s has_recurrence=%s tags=%s",
            len(text),
            bool(parsed.due_date),
            bool(parsed.recurrence),
            len(parsed.tags),
        )
        return NLPParseResponse(
            parsed=ParsedTaskPayload(**parsed.to_dict()),
            task_data=TaskCreationPayload(**task_data.to_dict()),
        )

    def preview_text(self, text: str) -> NLPPreviewResponse:
        parsed = self.parser.parse(text)
        parts = self.parser.get_preview_data(parsed)
        return NLPPreviewResponse(
            parts=[PreviewPartPayload(**asdict(part)) for part in parts],
            text=self.parser.get_preview_text(parsed),
        )

    def status_suggestions(self, query: str, limit: int = 10) -> StatusSuggestionsResponse:
        normalized_limit = min(max(limit, 0), _MAX_SUGGESTIONS)
        suggestions = self.parser.get_status_suggestions(query, limit=normalized_limit)
        return StatusSuggestionsResponse(
            items=[StatusSuggestionPayload(**asdict(suggestion)) for suggestion in suggestions],
        )
