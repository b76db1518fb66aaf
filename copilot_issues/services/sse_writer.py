# Frames agent output as server-sent events for the Copilot client.
# Date: 2026-10-19
# Version: 0.1.0

import json
from typing import Any, Iterable, Optional
from uuid import uuid4
from copilot_issues.models.common import Choice, ConfirmationRequest

CONFIRMATION_EVENT = "copilot_confirmation"
ERROR_EVENT = "copilot_errors"


class SSEWriter:
    """
    Builds the frames of one response stream. Every method returns the text of
    a single write; the caller is responsible for sending it.

    Once done() has been called the stream is closed and any further write
    raises RuntimeError.
    """
    def __init__(self):
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise RuntimeError("response stream is already closed")

    def event(self, name: str) -> str:
        self._check_open()
        return f"event: {name}\n"

    def data(self, payload: Any) -> str:
        self._check_open()
        return f"data: {json.dumps(payload, separators=(',', ':'))}\n\n"

    def confirmation(self, request: ConfirmationRequest) -> str:
        return self.event(CONFIRMATION_EVENT) + self.data(request.model_dump())

    def text_deltas(self, choices: Iterable[Choice]) -> str:
        """Reframes complete assistant choices as incremental text deltas."""
        return self.data({
            "choices": [
                {
                    "index": choice.index,
                    "delta": {"role": "assistant", "content": choice.message.content or ""},
                }
                for choice in choices
                if choice.message is not None
            ]
        })

    def text(self, content: str) -> str:
        return self.data({
            "choices": [{"index": 0, "delta": {"role": "assistant", "content": content}}]
        })

    def error(self, code: str, message: str, identifier: Optional[str] = None) -> str:
        """An error event the client can show after streaming has already started."""
        return self.event(ERROR_EVENT) + self.data([{
            "type": "agent",
            "code": code,
            "message": message,
            "identifier": identifier or str(uuid4()),
        }])

    def done(self):
        self._closed = True
