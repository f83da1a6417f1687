"""
Main API v1 router for CorpHub.
"""

from fastapi import APIRouter

from corphub.api.v1 import companies, health

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(companies.router, prefix="/company", tags=["company"])
