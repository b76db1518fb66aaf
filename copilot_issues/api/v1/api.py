# The module is to define the API router for the agent.
# Date: 2026-10-19
# Version: 0.1.0

from fastapi import APIRouter
from copilot_issues.api.v1.endpoints import agent, callback

api_router = APIRouter()

# The Copilot agent itself
api_router.include_router(agent.router, prefix="/agent", tags=["Agent"])

# Page shown after the OAuth flow of the extension
api_router.include_router(callback.router, prefix="/callback", tags=["Authorization"])
