from __future__ import annotations

from collections.abc import Iterable
import re

# Letters, digits, combining marks, underscore and path separators. Needs the `regex` module.
TOKEN_CHARACTER_CLASS = r"[\p{L}\p{N}\p{M}_/\-]"

_WHITESPACE_PATTERN = re.compile(r"\s+")


def escape_phrase(phrase: str) -> str:
    parts = phrase.split()
    if not parts:
        return re.escape(phrase)
    return r"\s+".join(re.escape(part) for part in parts)


def alternation(phrases: Iterable[str]) -> str:
    unique_phrases: list[str] = []
    for phrase in phrases:
        if phrase and phrase not in unique_phrases:
            unique_phrases.append(phrase)
    return "|".join(escape_phrase(phrase) for phrase in unique_phrases)


def cleanup_whitespace(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def remove_span(text: str, start: int, end: int) -> str:
    return cleanup_whitespace(f"{text[:start]} {text[end:]}")


def find_boundary_match(text: str, search_text: str) -> tuple[int, int] | None:
    if not search_text or not search_text.strip():
        return None

    lower_text = text.lower()
    lower_search = search_text.lower()
    search_index = 0
    while True:
        index = lower_text.find(lower_search, search_index)
        if index == -1:
            return None

        end_index = index + len(lower_search)
        valid_before = index == 0 or text[index - 1].isspace()
        valid_after = end_index >= len(text) or text[end_index].isspace()
        if valid_before and valid_after:
            return index, end_index

        search_index = index + 1
