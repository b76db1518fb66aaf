# The module is to define the base class for the agent's tools.
# Date: 2026-10-19
# Version: 0.1.0

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pydantic import BaseModel
from typing import Optional, Type
from copilot_issues.models.common import ConfirmationRequest, Message, ParameterSpec, ToolDeclaration
from copilot_issues.services.github_connector import GitHubConnector


@dataclass(frozen=True)
class ToolResult:
    """
    The outcome of a tool call.
    Attributes:
        message (Message): The message to append to the conversation history.
        confirmation (Optional[ConfirmationRequest]): A dialog to show the user, if any.
    """
    message: Message
    confirmation: Optional[ConfirmationRequest] = None


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (str): The name of the tool, used by the model to call it.
        description (str): A description of what the tool does, read by the model.
        args_schema (Type[BaseModel]): A Pydantic model defining the arguments
            that the tool accepts, which will be validated before execution.
    """
    name: str
    description: str
    args_schema: Type[BaseModel]

    @abstractmethod
    async def execute(self, github: GitHubConnector, args: BaseModel) -> ToolResult:
        """
        The core logic of the tool.

        Args:
            github: The GitHub client acting on behalf of the current user.
            args: An instance of args_schema decoded from the function call.

        Returns:
            A ToolResult holding the history message and an optional dialog.
        """

    def get_definition(self) -> ToolDeclaration:
        """
        Builds the tool's declaration from the JSON schema of args_schema.
        """
        schema = self.args_schema.model_json_schema()
        parameters = {
            name: ParameterSpec(type=prop.get("type", "string"), description=prop.get("description", ""))
            for name, prop in schema.get("properties", {}).items()
        }
        return ToolDeclaration(
            name=self.name,
            description=self.description,
            parameters=parameters,
            required=tuple(schema.get("required", ())),
        )
