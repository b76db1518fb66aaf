# The module wraps the Copilot chat completion API.
# Date: 2026-10-19
# Version: 0.1.0

import httpx
from openai import AsyncOpenAI, APIError
from pydantic import ValidationError
from typing import Any, Dict, Optional, Sequence
from copilot_issues.core.config import Settings, get_settings
from copilot_issues.core.errors import GatewayError
from copilot_issues.models.common import CompletionResult, FunctionCall, Message, ToolDeclaration
from copilot_issues.utils.logger import console


class CompletionGateway:
    """
    Sends one conversation to the Copilot completion API per call.

    The gateway authenticates as the Copilot user with their token and the
    integration ID of the calling extension. It never retries: any failure
    is raised as GatewayError.
    """
    def __init__(self, api_token: str, integration_id: Optional[str] = None,
                 settings: Optional[Settings] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        settings = settings or get_settings()
        self.model = settings.COPILOT_MODEL
        default_headers = {}
        if integration_id:
            default_headers["Copilot-Integration-Id"] = integration_id
        self._client = AsyncOpenAI(
            api_key=api_token,
            base_url=settings.COPILOT_API_BASE_URL,
            default_headers=default_headers,
            timeout=settings.REQUEST_TIMEOUT,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, messages: Sequence[Message],
                       tools: Optional[Sequence[ToolDeclaration]] = None) -> CompletionResult:
        request_params: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.model_dump(include={"role", "content"}) for message in messages],
        }
        if tools:
            request_params["tools"] = [tool.to_openai() for tool in tools]
            request_params["tool_choice"] = "auto"

        try:
            response = await self._client.chat.completions.create(**request_params)
        except APIError as e:
            message = str(e.body) if e.body is not None else e.message
            if isinstance(e.body, dict):
                message = e.body.get("message", e.message)
            console.error(f"An API error occurred while calling the completion API: {message}")
            raise GatewayError(f"Error from completion API: {message}") from e

        try:
            return CompletionResult.model_validate(response.model_dump())
        except ValidationError as e:
            console.error(f"Completion API returned an unexpected response: {e.error_count()} validation error(s)")
            raise GatewayError("Completion API returned an unexpected response") from e

    async def aclose(self):
        await self._client.close()


def get_function_call(result: CompletionResult) -> Optional[FunctionCall]:
    """Returns the first function call of the first choice, or None."""
    if not result.choices:
        return None
    message = result.choices[0].message
    if message is None:
        return None
    tool_calls = message.tool_calls
    if not tool_calls:
        return None
    return tool_calls[0].function
