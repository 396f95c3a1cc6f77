from datetime import UTC, datetime

from quickadd.core.config import Settings
from quickadd.schemas.health import HealthResponse
from quickadd.services.nlp_vocabulary import supported_languages


class HealthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def get_status(self) -> HealthResponse:
        languages = list(supported_languages())
        # A misconfigured language only fails when the parser is built, so surface it here.
        status = "ok" if self.settings.nlp_language in languages else "degraded"
        return HealthResponse(
            status=status,
            service=self.settings.app_name,
            version=self.settings.app_version,
            nlp_language=self.settings.nlp_language,
            supported_languages=languages,
            timestamp=datetime.now(UTC),
        )
