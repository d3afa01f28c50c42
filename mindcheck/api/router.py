from fastapi import APIRouter

from mindcheck.api.routes import conversation, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(conversation.router, prefix="/conversation", tags=["conversation"])
