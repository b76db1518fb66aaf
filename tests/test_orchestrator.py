"""Tool-calling loop tests."""

from __future__ import annotations

import json

import pytest
from conftest import FakeGateway, FakeGitHub, call_result, parse_frames, text_result
from copilot_issues.core.errors import (
    GatewayError,
    MalformedArguments,
    ToolExecutionError,
    UnknownFunctionCall,
)
from copilot_issues.core.orchestrator import MAX_TURNS, TIMEOUT_MESSAGE, generate_completion
from copilot_issues.core.tool_registry import ToolRegistry
from copilot_issues.models.api_models import ChatRequest
from copilot_issues.services.sse_writer import SSEWriter

LIST_ARGS = {"repository_owner": "acme", "repository_name": "widgets"}
DIALOG_ARGS = {
    "repository_owner": "acme",
    "repository_name": "widgets",
    "issue_title": "Bug",
    "issue_body": "desc",
}


def _request(content: str = "show issues for acme/widgets", confirmations=None) -> ChatRequest:
    message = {"role": "user", "content": content}
    if confirmations is not None:
        message["confirmations"] = confirmations
    return ChatRequest.model_validate({"messages": [message]})


async def _run(request, gateway, github, **kwargs) -> list[str]:
    return [
        frame
        async for frame in generate_completion(
            request, gateway=gateway, github=github, registry=ToolRegistry.default(), **kwargs
        )
    ]


@pytest.mark.asyncio
async def test_plain_answer_is_streamed_as_text_deltas() -> None:
    gateway = FakeGateway([text_result("Hello", "Hi there")])

    frames = await _run(_request("hello"), gateway, FakeGitHub())

    assert parse_frames(frames) == [(None, {"choices": [
        {"index": 0, "delta": {"role": "assistant", "content": "Hello"}},
        {"index": 1, "delta": {"role": "assistant", "content": "Hi there"}},
    ]})]
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_list_issues_appends_one_system_message_and_continues(widget_issues) -> None:
    gateway = FakeGateway([call_result("list_issues", LIST_ARGS), text_result("There are 2 issues.")])
    github = FakeGitHub(issues={"acme/widgets": widget_issues})

    frames = await _run(_request(), gateway, github)

    assert github.listed == [("acme", "widgets")]
    assert len(gateway.calls) == 2
    history = gateway.calls[1]["messages"]
    assert len(history) == 2
    appended = history[-1]
    prefix = "The issues for the repository acme/widgets are: "
    assert appended.role == "system"
    assert appended.content.startswith(prefix)
    assert json.loads(appended.content[len(prefix):]) == widget_issues
    assert parse_frames(frames)[-1][1]["choices"][0]["delta"]["content"] == "There are 2 issues."


@pytest.mark.asyncio
async def test_gateway_is_called_at_most_five_times_and_last_call_has_no_tools() -> None:
    gateway = FakeGateway([call_result("list_issues", LIST_ARGS)])
    registry = ToolRegistry.default()

    frames = [
        frame
        async for frame in generate_completion(
            _request(), gateway=gateway, github=FakeGitHub(), registry=registry
        )
    ]

    assert len(gateway.calls) == MAX_TURNS == 5
    assert all(call["tools"] == registry.definitions for call in gateway.calls[:-1])
    assert gateway.calls[-1]["tools"] is None
    assert parse_frames(frames) == [(None, {"choices": [
        {"index": 0, "delta": {"role": "assistant", "content": TIMEOUT_MESSAGE}},
    ]})]


@pytest.mark.asyncio
async def test_duplicate_confirmation_dialog_is_emitted_once() -> None:
    gateway = FakeGateway([
        call_result("create_issue_dialog", DIALOG_ARGS),
        call_result("create_issue_dialog", DIALOG_ARGS),
        text_result("Please confirm the dialog."),
    ])

    frames = await _run(_request("file a bug"), gateway, FakeGitHub())

    events = parse_frames(frames)
    confirmations = [data for event, data in events if event == "copilot_confirmation"]
    assert confirmations == [{
        "type": "action",
        "title": "Create Issue",
        "message": 'Are you sure you want to create an issue in repository acme/widgets '
                   'with the title "Bug" and the content "desc"',
        "confirmation": {"owner": "acme", "repo": "widgets", "title": "Bug", "body": "desc"},
    }]
    final_history = gateway.calls[-1]["messages"]
    dialog_records = [m for m in final_history if m.content.startswith("Issue dialog created: ")]
    assert len(dialog_records) == 1
    assert dialog_records[0].role == "system"
    assert json.loads(dialog_records[0].content[len("Issue dialog created: "):]) == {
        "issue_title": "Bug",
        "issue_body": "desc",
        "repository_owner": "acme",
        "repository_name": "widgets",
    }


@pytest.mark.asyncio
async def test_distinct_confirmation_dialogs_are_all_emitted() -> None:
    other = dict(DIALOG_ARGS, issue_title="Another bug")
    gateway = FakeGateway([
        call_result("create_issue_dialog", DIALOG_ARGS),
        call_result("create_issue_dialog", other),
        text_result("Two dialogs."),
    ])

    frames = await _run(_request("file two bugs"), gateway, FakeGitHub())

    titles = [data["confirmation"]["title"] for event, data in parse_frames(frames)
              if event == "copilot_confirmation"]
    assert titles == ["Bug", "Another bug"]


@pytest.mark.asyncio
async def test_accepted_confirmation_creates_issue_without_calling_the_model() -> None:
    gateway = FakeGateway([text_result("unused")])
    github = FakeGitHub()
    request = _request("", confirmations=[{
        "state": "accepted",
        "confirmation": {"owner": "acme", "repo": "widgets", "title": "Bug", "body": "desc"},
    }])

    frames = await _run(request, gateway, github)

    assert gateway.calls == []
    assert github.created == [("acme", "widgets", "Bug", "desc")]
    assert parse_frames(frames) == [(None, {"choices": [{
        "index": 0,
        "delta": {"role": "assistant", "content": "Created issue Bug on repository acme/widgets"},
    }]})]


@pytest.mark.asyncio
async def test_rejected_confirmation_enters_the_loop() -> None:
    gateway = FakeGateway([text_result("Okay, I won't create it.")])
    github = FakeGitHub()
    request = _request("", confirmations=[{
        "state": "dismissed",
        "confirmation": {"owner": "acme", "repo": "widgets", "title": "Bug", "body": "desc"},
    }])

    await _run(request, gateway, github)

    assert github.created == []
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_failed_issue_creation_is_raised() -> None:
    github = FakeGitHub(fail=True)
    request = _request("", confirmations=[{
        "state": "accepted",
        "confirmation": {"owner": "acme", "repo": "widgets", "title": "Bug", "body": "desc"},
    }])

    with pytest.raises(ToolExecutionError):
        await _run(request, FakeGateway([text_result("unused")]), github)
    assert len(github.created) == 1


@pytest.mark.asyncio
async def test_unknown_function_call_aborts_without_touching_github() -> None:
    gateway = FakeGateway([call_result("delete_repository", LIST_ARGS)])
    github = FakeGitHub()

    with pytest.raises(UnknownFunctionCall) as exc_info:
        await _run(_request(), gateway, github)

    assert exc_info.value.name == "delete_repository"
    assert github.listed == [] and github.created == []
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_missing_arguments_are_rejected() -> None:
    gateway = FakeGateway([call_result("list_issues", {"repository_owner": "acme"})])
    github = FakeGitHub()

    with pytest.raises(MalformedArguments):
        await _run(_request(), gateway, github)
    assert github.listed == []


@pytest.mark.asyncio
async def test_tool_failure_is_not_retried() -> None:
    gateway = FakeGateway([call_result("list_issues", LIST_ARGS), text_result("unused")])
    github = FakeGitHub(fail=True)

    with pytest.raises(ToolExecutionError):
        await _run(_request(), gateway, github)
    assert github.listed == [("acme", "widgets")]
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_gateway_failure_ends_the_request() -> None:
    gateway = FakeGateway([GatewayError("Error from completion API: boom")])

    with pytest.raises(GatewayError):
        await _run(_request(), gateway, FakeGitHub())


@pytest.mark.asyncio
async def test_system_prompt_is_prepended_with_login() -> None:
    gateway = FakeGateway([text_result("Hi @mona")])

    await _run(_request("hello"), gateway, FakeGitHub(login="mona"),
               system_prompt="You talk like an astrologer. The user is @{login}.")

    history = gateway.calls[0]["messages"]
    assert history[0].role == "system"
    assert history[0].content == "You talk like an astrologer. The user is @mona."
    assert history[1].content == "hello"


@pytest.mark.asyncio
async def test_writer_is_closed_after_the_answer() -> None:
    writer = SSEWriter()

    await _run(_request("hello"), FakeGateway([text_result("Hi")]), FakeGitHub(), writer=writer)

    assert writer.closed
