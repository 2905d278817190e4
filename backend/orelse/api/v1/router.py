"""API router."""

from fastapi import APIRouter

from orelse.api.v1.endpoints import goals, suggestions, users, votes

api_router = APIRouter()

api_router.include_router(goals.router, prefix="/goal", tags=["Goals"])
api_router.include_router(suggestions.router, prefix="/suggestions", tags=["Suggestions"])
api_router.include_router(votes.router, prefix="/votes", tags=["Votes"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
