# Shared FastAPI dependencies for the agent endpoints.
# Date: 2026-10-19
# Version: 0.1.0

import httpx
from fastapi import Depends
from functools import lru_cache
from typing import Optional
from copilot_issues.core.config import Settings, get_settings
from copilot_issues.core.security import SignatureVerifier
from copilot_issues.core.tool_registry import ToolRegistry, tool_registry
from copilot_issues.services.github_connector import GitHubConnector
from copilot_issues.services.llm_connector import CompletionGateway
from copilot_issues.utils.logger import console

class ClientFactory:
    """Builds the per-request clients that act with the caller's token."""
    def __init__(self, settings: Settings):
        self.settings = settings

    def gateway(self, api_token: str, integration_id: Optional[str]) -> CompletionGateway:
        return CompletionGateway(api_token, integration_id, settings=self.settings)

    def github(self, api_token: str) -> GitHubConnector:
        return GitHubConnector(api_token, base_url=self.settings.GITHUB_API_BASE_URL,
                               timeout=self.settings.REQUEST_TIMEOUT)


def get_client_factory(settings: Settings = Depends(get_settings)) -> ClientFactory:
    return ClientFactory(settings)


def get_tool_registry() -> ToolRegistry:
    return tool_registry


@lru_cache
def get_signature_verifier() -> Optional[SignatureVerifier]:
    """
    Returns the verifier for payload signatures, or None when verification is
    disabled. Without a configured PEM key the keys are fetched from GitHub once.
    """
    settings = get_settings()
    if not settings.SIGNATURE_VERIFICATION:
        console.warning("Payload signature verification is DISABLED.")
        return None
    if settings.COPILOT_PUBLIC_KEY:
        return SignatureVerifier.from_pem(settings.COPILOT_PUBLIC_KEY)
    try:
        return SignatureVerifier.from_github(settings.GITHUB_PUBLIC_KEYS_URL)
    except httpx.HTTPError:
        console.exception(f"Could not load payload signing keys from {settings.GITHUB_PUBLIC_KEYS_URL}")
        raise
