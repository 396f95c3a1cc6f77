from fastapi import APIRouter

from quickadd.api.routes.health import router as health_router
from quickadd.api.routes.nlp import router as nlp_router

api_router = APIRouter()
v1_router = APIRouter(prefix="/v1")

api_router.include_router(health_router)
api_router.include_router(nlp_router)

# Versioned routes for long-term API evolution.
v1_router.include_router(nlp_router)
api_router.include_router(v1_router)
