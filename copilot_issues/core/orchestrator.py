# copilot_issues/core/orchestrator.py
# The bounded tool-calling loop between the Copilot completion API and GitHub.
# Date: 2026-10-19
# Version: 0.1.0

from typing import AsyncIterator, List, Optional
from copilot_issues.core.dedup import ConfirmationDeduplicator
from copilot_issues.core.tool_registry import ToolRegistry
from copilot_issues.models.api_models import ChatRequest
from copilot_issues.models.common import ConfirmationDecision, Message
from copilot_issues.services.github_connector import GitHubConnector
from copilot_issues.services.llm_connector import CompletionGateway, get_function_call
from copilot_issues.services.sse_writer import SSEWriter
from copilot_issues.tools.create_issue import create_issue
from copilot_issues.utils.logger import console

MAX_TURNS = 5

TIMEOUT_MESSAGE = "I have reached the maximum number of steps without finding a final answer. " \
    "Please try reformulating your request."


async def _execute_confirmed(decision: ConfirmationDecision, github: GitHubConnector,
                             writer: SSEWriter) -> AsyncIterator[str]:
    console.info(f"Request carries an accepted confirmation for {decision.confirmation.owner}/"
                 f"{decision.confirmation.repo}; skipping the tool loop.")
    summary = await create_issue(github, decision.confirmation)
    yield writer.text(summary.content)
    writer.done()


async def _prepend_system_prompt(messages: List[Message], system_prompt: str,
                                 github: GitHubConnector) -> List[Message]:
    if "{login}" in system_prompt:
        user = await github.get_authenticated_user()
        system_prompt = system_prompt.replace("{login}", str(user.get("login", "")))
    return [Message(role="system", content=system_prompt), *messages]


async def generate_completion(chat_request: ChatRequest, *,
                              gateway: CompletionGateway,
                              github: GitHubConnector,
                              registry: ToolRegistry,
                              writer: Optional[SSEWriter] = None,
                              system_prompt: Optional[str] = None) -> AsyncIterator[str]:
    """
    Runs one agent request and yields the SSE frames of the response.

    An accepted confirmation on the last message creates the issue directly.
    Otherwise the completion API is queried up to MAX_TURNS times; tools are
    offered on every turn but the last, so the final turn must answer in text.
    Failures are raised as AgentError subclasses and end the request.
    """
    writer = writer or SSEWriter()

    decision = chat_request.accepted_confirmation()
    if decision is not None:
        async for frame in _execute_confirmed(decision, github, writer):
            yield frame
        return

    messages = chat_request.history()
    if system_prompt:
        messages = await _prepend_system_prompt(messages, system_prompt, github)
    confirmations = ConfirmationDeduplicator()

    for turn in range(MAX_TURNS):
        console.rule(f"Agent Turn {turn + 1}")

        tools = registry.definitions if turn < MAX_TURNS - 1 else None
        result = await gateway.complete(messages, tools)

        function_call = get_function_call(result)
        if function_call is None:
            console.success(f"Model answered in text after {turn + 1} turn(s).")
            yield writer.text_deltas(result.choices)
            writer.done()
            return

        console.info(f"Model requested tool '{function_call.name}' with arguments {function_call.arguments}")
        tool_result = await registry.execute(function_call, github)

        if tool_result.confirmation is None:
            messages.append(tool_result.message)
        elif confirmations.claim(tool_result.confirmation.confirmation):
            yield writer.confirmation(tool_result.confirmation)
            messages.append(tool_result.message)
        else:
            console.warning("Skipping duplicate confirmation dialog.")

    console.warning(f"No final answer after {MAX_TURNS} turns.")
    yield writer.text(TIMEOUT_MESSAGE)
    writer.done()
