# The module provides the FastAPI application serving the Copilot issue agent.
# Date: 2026-10-19
# Version: 0.1.0

import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from copilot_issues.api.v1.api import api_router
from copilot_issues.core.config import get_settings
from copilot_issues.core.tool_registry import tool_registry
from copilot_issues.utils.logger import console

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    console.display_data_as_table({
        "Completion API": settings.COPILOT_API_BASE_URL,
        "Model": settings.COPILOT_MODEL,
        "GitHub API": settings.GITHUB_API_BASE_URL,
        "Signature check": settings.SIGNATURE_VERIFICATION,
        "Tools": tool_registry.names,
    }, title="Copilot issue agent configuration")
    yield

app = FastAPI(
    title="Copilot Issue Agent",
    version="0.1.0",
    description="A Copilot agent that lists GitHub issues and creates them after user confirmation.",
    lifespan=lifespan,
)

@app.get("/", summary="Health Check", tags=["Status"], response_class=PlainTextResponse)
def read_root():
    """Root endpoint to check if the service is alive."""
    console.info("Health check endpoint was hit.")
    return "Hello Copilot!"

# Include the v1 router with a global '/v1' prefix
app.include_router(api_router, prefix="/v1")


def serve():
    """Runs the agent with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run("copilot_issues.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    serve()
