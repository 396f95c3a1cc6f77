from fastapi import APIRouter

from quickadd.core.config import get_settings
from quickadd.schemas.nlp import (
    NLPParseResponse,
    NLPPreviewResponse,
    NLPTextRequest,
    StatusSuggestionsResponse,
)
from quickadd.services.nlp_service import NLPService

router = APIRouter(prefix="/nlp", tags=["nlp"])


@router.post("/parse", response_model=NLPParseResponse)
def parse_task_text(payload: NLPTextRequest) -> NLPParseResponse:
    service = NLPService(get_settings())
    return service.parse_text(payload.text)


@router.post("/preview", response_model=NLPPreviewResponse)
def preview_task_text(payload: NLPTextRequest) -> NLPPreviewResponse:
    service = NLPService(get_settings())
    return service.preview_text(payload.text)


@router.get("/status-suggestions", response_model=StatusSuggestionsResponse)
def get_status_suggestions(query: str = "", limit: int = 10) -> StatusSuggestionsResponse:
    service = NLPService(get_settings())
    return service.status_suggestions(query, limit=limit)
