# A tool to fetch the issues of a GitHub repository.
# Date: 2026-10-19
# Version: 0.1.0

import json
from pydantic import BaseModel, Field
from typing import Type
from .base_tool import BaseTool, ToolResult
from copilot_issues.models.common import Message
from copilot_issues.services.github_connector import GitHubConnector
from copilot_issues.utils.logger import console

class ListIssuesInput(BaseModel):
    """Input model for the ListIssuesTool."""
    repository_owner: str = Field(..., description="The owner of the repository")
    repository_name: str = Field(..., description="The name of the repository")

class ListIssuesTool(BaseTool):
    """
    Lists the issues of a repository and hands them to the model as a system message.
    """
    name: str = "list_issues"
    description: str = "Fetch a list of issues from github.com for a given repository. " \
    "Users may specify the repository owner and the repository name separately, " \
    "or they may specify it in the form {repository_owner}/{repository_name}, " \
    "or in the form github.com/{repository_owner}/{repository_name}."
    args_schema: Type[BaseModel] = ListIssuesInput

    async def execute(self, github: GitHubConnector, args: ListIssuesInput) -> ToolResult:
        owner, repo = args.repository_owner, args.repository_name
        console.info(f"Executing tool '{self.name}' for {owner}/{repo}")

        issues = await github.list_issues(owner, repo)

        console.success(f"Tool '{self.name}' fetched {len(issues)} issues.")
        return ToolResult(message=Message(
            role="system",
            content=f"The issues for the repository {owner}/{repo} are: {json.dumps(issues)}",
        ))
