from __future__ import annotations

from functools import lru_cache
import logging

from quickadd.core.config import Settings, get_settings
from quickadd.services.natural_language_parser import NaturalLanguageParser
from quickadd.services.nlp_vocabulary import get_vocabulary
from quickadd.services.task_models import (
    STATUS_PROPERTY_ID,
    TAGS_PROPERTY_ID,
    NLPTriggersConfig,
    PropertyTriggerConfig,
    StatusConfig,
    UserMappedField,
)

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> NaturalLanguageParser:
    return _build_parser(
        language=settings.nlp_language,
        default_to_due=settings.nlp_default_to_due,
        status_configs=_status_configs_from_settings(settings),
        nlp_triggers=_triggers_from_settings(settings),
        user_fields=_user_fields_from_settings(settings),
    )


def get_natural_language_parser(settings: Settings | None = None) -> NaturalLanguageParser:
    resolved_settings = settings or get_settings()
    return _get_parser_cached(
        language=resolved_settings.nlp_language,
        default_to_due=resolved_settings.nlp_default_to_due,
        status_configs=_status_configs_from_settings(resolved_settings),
        nlp_triggers=_triggers_from_settings(resolved_settings),
        user_fields=_user_fields_from_settings(resolved_settings),
    )


@lru_cache
def _get_parser_cached(
    *,
    language: str,
    default_to_due: bool,
    status_configs: tuple[StatusConfig, ...],
    nlp_triggers: NLPTriggersConfig,
    user_fields: tuple[UserMappedField, ...],
) -> NaturalLanguageParser:
    return _build_parser(
        language=language,
        default_to_due=default_to_due,
        status_configs=status_configs,
        nlp_triggers=nlp_triggers,
        user_fields=user_fields,
    )


def clear_parser_cache() -> None:
    _get_parser_cached.cache_clear()


def _build_parser(
    *,
    language: str,
    default_to_due: bool,
    status_configs: tuple[StatusConfig, ...],
    nlp_triggers: NLPTriggersConfig,
    user_fields: tuple[UserMappedField, ...],
) -> NaturalLanguageParser:
    vocabulary = get_vocabulary(language)
    logger.info(
        "Building natural language parser language=%s statuses=%s user_fields=%s",
        vocabulary.code,
        len(status_configs),
        len(user_fields),
    )
    return NaturalLanguageParser(
        status_configs,
        default_to_due,
        nlp_triggers,
        user_fields,
        vocabulary=vocabulary,
    )


def _status_configs_from_settings(settings: Settings) -> tuple[StatusConfig, ...]:
    configs = (StatusConfig.from_payload(status.model_dump()) for status in settings.nlp_statuses)
    return tuple(config for config in configs if config is not None)


def _user_fields_from_settings(settings: Settings) -> tuple[UserMappedField, ...]:
    fields = (
        UserMappedField.from_payload(user_field.model_dump())
        for user_field in settings.nlp_user_fields
    )
    return tuple(user_field for user_field in fields if user_field is not None)


def _triggers_from_settings(settings: Settings) -> NLPTriggersConfig:
    triggers = [
        PropertyTriggerConfig(
            property_id=TAGS_PROPERTY_ID,
            trigger=settings.nlp_tag_trigger,
            enabled=settings.nlp_tag_trigger_enabled,
        ),
        PropertyTriggerConfig(
            property_id=STATUS_PROPERTY_ID,
            trigger=settings.nlp_status_trigger,
            enabled=settings.nlp_status_trigger_enabled,
        ),
    ]
    for user_field in settings.nlp_user_fields:
        trigger = user_field.trigger.strip()
        if trigger:
            triggers.append(
                PropertyTriggerConfig(property_id=user_field.id.strip(), trigger=trigger),
            )
    return NLPTriggersConfig(triggers=tuple(triggers))
