# A tool that asks the user to confirm the creation of a GitHub issue.
# Date: 2026-10-19
# Version: 0.1.0

import json
from pydantic import BaseModel, Field
from typing import Type
from .base_tool import BaseTool, ToolResult
from copilot_issues.models.common import Confirmation, ConfirmationRequest, Message
from copilot_issues.services.github_connector import GitHubConnector

class CreateIssueDialogInput(BaseModel):
    """Input model for the CreateIssueDialogTool."""
    repository_owner: str = Field(..., description="The owner of the repository")
    repository_name: str = Field(..., description="The name of the repository")
    issue_title: str = Field(..., description="The title of the issue being created")
    issue_body: str = Field(..., description="The content of the issue being created")

class CreateIssueDialogTool(BaseTool):
    """
    Builds a confirmation dialog for a new issue. Nothing is created on GitHub
    until the user accepts the dialog in a later request.
    """
    name: str = "create_issue_dialog"
    description: str = "Creates a confirmation dialog in which the user can interact with in order " \
    "to create an issue on a github.com repository. Only one dialog should be created for each " \
    "issue/repository combination. Users may specify the repository owner and the repository name " \
    "separately, or they may specify it in the form {repository_owner}/{repository_name}, " \
    "or in the form github.com/{repository_owner}/{repository_name}."
    args_schema: Type[BaseModel] = CreateIssueDialogInput

    async def execute(self, github: GitHubConnector, args: CreateIssueDialogInput) -> ToolResult:
        return build_issue_confirmation(
            args.repository_owner, args.repository_name, args.issue_title, args.issue_body
        )


def build_issue_confirmation(owner: str, repo: str, title: str, body: str) -> ToolResult:
    request = ConfirmationRequest(
        title="Create Issue",
        message=f'Are you sure you want to create an issue in repository {owner}/{repo} '
                f'with the title "{title}" and the content "{body}"',
        confirmation=Confirmation(owner=owner, repo=repo, title=title, body=body),
    )
    record = json.dumps({
        "issue_title": title,
        "issue_body": body,
        "repository_owner": owner,
        "repository_name": repo,
    })
    return ToolResult(
        message=Message(role="system", content=f"Issue dialog created: {record}"),
        confirmation=request,
    )
