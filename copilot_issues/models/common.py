# The module is to define the common models shared by the agent's components.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Literal, Optional, Tuple

Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """
    A single conversation turn.
    Attributes:
        role (Role): The role of the message sender (system, user or assistant).
        content (str): The text of the message.
    """
    role: Role = Field(..., description="The role of the message sender.")
    content: str = Field(default="", description="The content of the message.")

    @field_validator("content", mode="before")
    @classmethod
    def _null_content_is_empty(cls, value):
        return "" if value is None else value


class ParameterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    description: str


class ToolDeclaration(BaseModel):
    """
    The declaration of a callable tool as offered to the completion API.
    Attributes:
        name (str): The function name the model uses to call the tool.
        description (str): What the tool does, as read by the model.
        parameters (Dict[str, ParameterSpec]): Ordered parameter name to type/description.
        required (Tuple[str, ...]): Names of the parameters the model must supply.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, ParameterSpec]
    required: Tuple[str, ...] = ()

    def to_openai(self) -> dict:
        """Renders the declaration in OpenAI's function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {name: spec.model_dump() for name, spec in self.parameters.items()},
                    "required": list(self.required),
                },
            },
        }


class FunctionCall(BaseModel):
    """A function requested by the model. 'arguments' is raw JSON text."""
    name: str
    arguments: str = "{}"


class ToolCall(BaseModel):
    """
    Represents a tool call made by the assistant.
    Attributes:
        id (Optional[str]): The ID of the tool call, when the API provides one.
        type (str): The type of the tool call, always 'function' for this agent.
        function (FunctionCall): The function name and raw arguments.
    """
    id: Optional[str] = None
    type: str = "function"
    function: FunctionCall


class AssistantTurn(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class Choice(BaseModel):
    index: int = 0
    message: Optional[AssistantTurn] = None
    finish_reason: Optional[str] = None


class CompletionResult(BaseModel):
    """One response of the completion API: a list of assistant choices."""
    choices: List[Choice] = Field(default_factory=list)

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices_are_empty(cls, value):
        return [] if value is None else value


class Confirmation(BaseModel):
    """
    The issue an accepted confirmation dialog will create.
    The JSON form of this model (fields in declaration order) identifies a dialog.
    """
    owner: str
    repo: str
    title: str
    body: str

    def key(self) -> str:
        return self.model_dump_json()


class ConfirmationRequest(BaseModel):
    """
    The payload of a 'copilot_confirmation' event, rendered by the client as a dialog.
    Attributes:
        type (str): Always 'action'.
        title (str): Dialog title.
        message (str): The question shown to the user.
        confirmation (Confirmation): Echoed back by the client with the user's decision.
    """
    type: Literal["action"] = "action"
    title: str
    message: str
    confirmation: Confirmation


class ConfirmationDecision(BaseModel):
    """A confirmation echoed back by the client, with 'accepted' or another state."""
    state: str
    confirmation: Confirmation

    @property
    def accepted(self) -> bool:
        return self.state == "accepted"
