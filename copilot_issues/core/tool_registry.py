# The registry of the tools the model may call.
# Date: 2026-10-19
# Version: 0.1.0

import json
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple
from pydantic import BaseModel, ValidationError
from copilot_issues.core.errors import MalformedArguments, UnknownFunctionCall
from copilot_issues.models.common import FunctionCall, ToolDeclaration
from copilot_issues.services.github_connector import GitHubConnector
from copilot_issues.tools.base_tool import BaseTool, ToolResult
from copilot_issues.tools.create_issue_dialog_tool import CreateIssueDialogTool
from copilot_issues.tools.list_issues_tool import ListIssuesTool
from copilot_issues.utils.logger import console

class ToolRegistry:
    """
    An ordered, read-only set of tools. Built once at start-up and shared by
    every request; nothing in it changes after construction.
    """
    def __init__(self, tools: Iterable[BaseTool]):
        tools = tuple(tools)
        self._tools: Mapping[str, BaseTool] = MappingProxyType({tool.name: tool for tool in tools})
        self._definitions: Tuple[ToolDeclaration, ...] = tuple(tool.get_definition() for tool in tools)

    @classmethod
    def default(cls) -> "ToolRegistry":
        registry = cls([ListIssuesTool(), CreateIssueDialogTool()])
        console.success(f"Tool registry ready with {len(registry)} tools: {registry.names}")
        return registry

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._tools)

    @property
    def definitions(self) -> Tuple[ToolDeclaration, ...]:
        """Returns the declarations offered to the model, in registration order."""
        return self._definitions

    def get(self, name: str) -> BaseTool:
        tool = self._tools.get(name)
        if tool is None:
            console.error(f"Model requested unknown tool: {name}")
            raise UnknownFunctionCall(name)
        return tool

    def parse_arguments(self, name: str, raw_arguments: str) -> BaseModel:
        """
        Decodes the raw JSON arguments of a function call into the tool's
        argument model. Raises MalformedArguments if they do not fit.
        """
        tool = self.get(name)
        try:
            return tool.args_schema.model_validate_json(raw_arguments or "{}")
        except ValidationError as e:
            console.error(f"Rejected arguments for '{name}': {raw_arguments}")
            raise MalformedArguments(name, json.dumps(e.errors(include_url=False), default=str)) from e

    async def execute(self, function_call: FunctionCall, github: GitHubConnector) -> ToolResult:
        tool = self.get(function_call.name)
        args = self.parse_arguments(function_call.name, function_call.arguments)
        return await tool.execute(github, args)


# Create a singleton instance for global use throughout the application.
tool_registry = ToolRegistry.default()
