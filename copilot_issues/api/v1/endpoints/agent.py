# The module is to define the Copilot agent endpoint.
# Date: 2026-10-19
# Version: 0.1.0

import anyio
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from pydantic import ValidationError
from typing import AsyncIterator, Optional
from copilot_issues.api.deps import ClientFactory, get_client_factory, get_signature_verifier, get_tool_registry
from copilot_issues.core.config import Settings, get_settings
from copilot_issues.core.errors import AgentError, MalformedRequestBody, SignatureInvalid
from copilot_issues.core.orchestrator import generate_completion
from copilot_issues.core.security import SignatureVerifier
from copilot_issues.core.tool_registry import ToolRegistry
from copilot_issues.models.api_models import ChatRequest
from copilot_issues.services.llm_connector import CompletionGateway
from copilot_issues.services.sse_writer import SSEWriter
from copilot_issues.utils.logger import console

router = APIRouter()

async def _relay(first: str, frames: AsyncIterator[str], writer: SSEWriter,
                 gateway: CompletionGateway) -> AsyncIterator[str]:
    try:
        yield first
        try:
            async for frame in frames:
                yield frame
        except AgentError as e:
            # Headers are already sent; report the failure in-band
            console.error(f"Agent failed after streaming started: {e}")
            yield writer.error(e.code, e.public_message)
        except Exception:
            console.exception("Unexpected failure after streaming started.")
            yield writer.error(AgentError.code, AgentError.public_message)
    finally:
        # Runs on client disconnect too, so keep the cleanup out of cancellation
        with anyio.CancelScope(shield=True):
            await frames.aclose()
            await gateway.aclose()


@router.post("")
async def run_agent(request: Request,
                    x_github_token: Optional[str] = Header(default=None),
                    copilot_integration_id: Optional[str] = Header(default=None),
                    github_public_key_signature: Optional[str] = Header(default=None),
                    github_public_key_identifier: Optional[str] = Header(default=None),
                    settings: Settings = Depends(get_settings),
                    verifier: Optional[SignatureVerifier] = Depends(get_signature_verifier),
                    clients: ClientFactory = Depends(get_client_factory),
                    registry: ToolRegistry = Depends(get_tool_registry)):
    """
    Handles one Copilot agent request and streams the answer as server-sent events.
    """
    body = await request.body()

    if verifier is not None and not verifier.verify(body, github_public_key_signature,
                                                     github_public_key_identifier):
        console.error("Rejected agent request with an invalid payload signature.")
        return PlainTextResponse(SignatureInvalid.public_message, status_code=SignatureInvalid.status_code)

    if not x_github_token:
        console.error("Rejected agent request without a GitHub token.")
        return PlainTextResponse("missing GitHub token", status_code=401)

    try:
        chat_request = ChatRequest.model_validate_json(body)
    except ValidationError as e:
        console.error(f"Could not parse agent request: {e.error_count()} validation error(s)")
        return PlainTextResponse(MalformedRequestBody.public_message, status_code=MalformedRequestBody.status_code)

    console.info(f"Received agent request with {len(chat_request.messages)} message(s) "
                 f"from integration '{copilot_integration_id}'")

    writer = SSEWriter()
    gateway = clients.gateway(x_github_token, copilot_integration_id)
    frames = generate_completion(
        chat_request,
        gateway=gateway,
        github=clients.github(x_github_token),
        registry=registry,
        writer=writer,
        system_prompt=settings.AGENT_SYSTEM_PROMPT,
    )

    # Pull the first frame before committing to a 200 so early failures get a status code
    try:
        first = await frames.__anext__()
    except StopAsyncIteration:
        await gateway.aclose()
        return Response(status_code=200, media_type="text/event-stream")
    except AgentError as e:
        console.display_error_panel(type(e).__name__, str(e))
        await frames.aclose()
        await gateway.aclose()
        return PlainTextResponse(e.public_message, status_code=e.status_code)
    except Exception:
        console.exception("Unexpected failure before streaming started.")
        await frames.aclose()
        await gateway.aclose()
        return PlainTextResponse(AgentError.public_message, status_code=AgentError.status_code)

    return StreamingResponse(_relay(first, frames, writer, gateway), media_type="text/event-stream")
