"""API v1 router."""
from fastapi import APIRouter

from app.api.v1 import results

api_router = APIRouter()

api_router.include_router(results.router, prefix="/assessment", tags=["Assessment Results"])
