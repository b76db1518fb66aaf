"""Shared fakes for the agent's collaborators."""

from __future__ import annotations

import json

import pytest
from copilot_issues.core.errors import ToolExecutionError
from copilot_issues.models.common import CompletionResult


def text_result(*contents: str) -> CompletionResult:
    return CompletionResult.model_validate({
        "choices": [
            {"index": i, "message": {"role": "assistant", "content": content}}
            for i, content in enumerate(contents)
        ]
    })


def call_result(name: str, arguments: dict | str) -> CompletionResult:
    raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return CompletionResult.model_validate({
        "choices": [{
            "index": 0,
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [{"id": "call_1", "type": "function", "function": {"name": name, "arguments": raw}}],
            },
        }]
    })


def parse_frames(frames: list[str]) -> list[tuple[str | None, object]]:
    """Splits SSE frames into (event name, decoded data) pairs."""
    parsed = []
    for frame in "".join(frames).split("\n\n"):
        if not frame:
            continue
        event = None
        data = None
        for line in frame.split("\n"):
            if line.startswith("event: "):
                event = line[len("event: "):]
            elif line.startswith("data: "):
                data = json.loads(line[len("data: "):])
        parsed.append((event, data))
    return parsed


class FakeGateway:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    async def complete(self, messages, tools=None):
        self.calls.append({"messages": list(messages), "tools": tools})
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self):
        self.closed = True


class FakeGitHub:
    def __init__(self, issues=None, fail: bool = False, login: str = "octocat"):
        self.issues = issues if issues is not None else {}
        self.fail = fail
        self.login = login
        self.listed: list[tuple[str, str]] = []
        self.created: list[tuple[str, str, str, str]] = []

    async def list_issues(self, owner, repo):
        self.listed.append((owner, repo))
        if self.fail:
            raise ToolExecutionError(f"GitHub API returned 404 for GET /repos/{owner}/{repo}/issues")
        return self.issues.get(f"{owner}/{repo}", [])

    async def create_issue(self, owner, repo, title, body):
        self.created.append((owner, repo, title, body))
        if self.fail:
            raise ToolExecutionError(f"GitHub API returned 403 for POST /repos/{owner}/{repo}/issues")
        return {"number": 1, "title": title}

    async def get_authenticated_user(self):
        return {"login": self.login}


@pytest.fixture
def widget_issues() -> list[dict]:
    return [
        {"number": 1, "title": "Crash on start", "state": "open"},
        {"number": 2, "title": "Typo in README", "state": "open"},
    ]
