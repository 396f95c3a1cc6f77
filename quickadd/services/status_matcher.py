from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import re

from quickadd.services.nlp_vocabulary import BoundaryConfig, StatusVocabulary
from quickadd.services.task_models import StatusConfig
from quickadd.services.text_matching import (
    alternation,
    find_boundary_match,
    remove_span,
)


@dataclass(frozen=True)
class FallbackStatusPattern:
    regex: re.Pattern[str]
    value: str


class StatusMatcher:
    def __init__(
        self,
        *,
        status_configs: Sequence[StatusConfig],
        status_trigger: str | None,
        fallback_vocabulary: StatusVocabulary,
        boundaries: BoundaryConfig,
    ) -> None:
        self.status_configs = tuple(status_configs)
        self.status_trigger = status_trigger or ""
        # Longest labels first so "In Progress" wins over "Progress".
        self._ordered_configs = tuple(
            sorted(self.status_configs, key=lambda config: len(config.label), reverse=True),
        )
        self._fallback_patterns = (
            ()
            if self.status_configs
            else _build_fallback_patterns(fallback_vocabulary, boundaries)
        )

    def extract(self, text: str) -> tuple[str, str | None]:
        if self.status_configs:
            return self._extract_configured(text)
        return self._extract_fallback(text)

    def _extract_configured(self, text: str) -> tuple[str, str | None]:
        for config in self._ordered_configs:
            for search_text in self._search_candidates(config):
                span = find_boundary_match(text, search_text)
                if span:
                    return remove_span(text, *span), config.value
        return text, None

    def _search_candidates(self, config: StatusConfig) -> list[str]:
        candidates = [
            candidate for candidate in (config.label, config.value) if candidate and candidate.strip()
        ]
        searches: list[str] = []
        if self.status_trigger:
            searches.extend(f"{self.status_trigger}{candidate}" for candidate in candidates)
        searches.extend(candidates)
        return searches

    def _extract_fallback(self, text: str) -> tuple[str, str | None]:
        for pattern in self._fallback_patterns:
            match = pattern.regex.search(text)
            if match:
                return remove_span(text, match.start(), match.end()), pattern.value
        return text, None


def _build_fallback_patterns(
    vocabulary: StatusVocabulary,
    boundaries: BoundaryConfig,
) -> tuple[FallbackStatusPattern, ...]:
    return (
        FallbackStatusPattern(
            regex=re.compile(
                rf"{boundaries.boundary}({alternation(vocabulary.open)}){boundaries.end_boundary}",
                re.IGNORECASE,
            ),
            value="open",
        ),
        FallbackStatusPattern(
            regex=re.compile(
                rf"{boundaries.boundary}({alternation(vocabulary.done)}){boundaries.end_boundary}",
                re.IGNORECASE,
            ),
            value="done",
        ),
    )
