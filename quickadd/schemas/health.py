from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    nlp_language: str
    supported_languages: list[str]
    timestamp: datetime
