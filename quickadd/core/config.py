import json
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ALLOWED_ENV_FIELD_NAMES = frozenset(
    {
        "app_name",
        "app_env",
        "app_version",
        "api_prefix",
        "allowed_origins",
        "nlp_language",
        "nlp_default_to_due",
        "nlp_tag_trigger",
        "nlp_tag_trigger_enabled",
        "nlp_status_trigger",
        "nlp_status_trigger_enabled",
        "nlp_statuses",
        "nlp_user_fields",
        "default_task_status",
    },
)


class StatusSetting(BaseModel):
    value: str
    label: str = ""


class UserFieldSetting(BaseModel):
    id: str
    key: str = ""
    type: Literal["text", "number", "date", "boolean", "list"] = "text"
    display_name: str = ""
    trigger: str = ""


class Settings(BaseSettings):
    app_name: str = "Quick Add Task Parser API"
    app_env: str = "development"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    nlp_language: str = "en"
    nlp_default_to_due: bool = True
    nlp_tag_trigger: str = "#"
    nlp_tag_trigger_enabled: bool = True
    nlp_status_trigger: str = "*"
    nlp_status_trigger_enabled: bool = True
    nlp_statuses: Annotated[list[StatusSetting], NoDecode] = []
    nlp_user_fields: Annotated[list[UserFieldSetting], NoDecode] = []
    default_task_status: str = "open"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def _filter_allowed_env_fields(source):
            return {
                field_name: raw_value
                for field_name, raw_value in source().items()
                if field_name in ALLOWED_ENV_FIELD_NAMES
            }

        return (
            init_settings,
            lambda: _filter_allowed_env_fields(env_settings),
            lambda: _filter_allowed_env_fields(dotenv_settings),
            file_secret_settings,
        )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("nlp_language", mode="before")
    @classmethod
    def normalize_nlp_language(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("default_task_status", mode="before")
    @classmethod
    def normalize_default_task_status(cls, value: str) -> str:
        normalized = value.strip()
        return normalized or "open"

    @field_validator("nlp_statuses", "nlp_user_fields", mode="before")
    @classmethod
    def parse_json_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            if not value.strip():
                return []
            return json.loads(value)
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
