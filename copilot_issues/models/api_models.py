# The module is to define the API models for the agent endpoint.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import BaseModel, Field
from typing import List, Optional
from copilot_issues.models.common import ConfirmationDecision, Message

class InboundMessage(Message):
    """
    A message as sent by the Copilot client. The last message of a request may
    carry the user's decisions on previously emitted confirmation dialogs.
    Attributes:
        confirmations (List[ConfirmationDecision]): Decisions attached to the message.
    """
    confirmations: List[ConfirmationDecision] = Field(default_factory=list)

    def to_message(self) -> Message:
        return Message(role=self.role, content=self.content)


class ChatRequest(BaseModel):
    """
    Defines the request body for the /v1/agent endpoint.
    Attributes:
        messages (List[InboundMessage]): The conversation so far, oldest first.
    """
    messages: List[InboundMessage] = Field(..., min_length=1, description="The conversation so far.")

    def accepted_confirmation(self) -> Optional[ConfirmationDecision]:
        """Returns the first accepted decision attached to the last message, if any."""
        for decision in self.messages[-1].confirmations:
            if decision.accepted:
                return decision
        return None

    def history(self) -> List[Message]:
        return [message.to_message() for message in self.messages]
