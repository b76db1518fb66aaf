# Creates the issue described by an accepted confirmation dialog.
# Date: 2026-10-19
# Version: 0.1.0

from copilot_issues.models.common import Confirmation, Message
from copilot_issues.services.github_connector import GitHubConnector
from copilot_issues.utils.logger import console

async def create_issue(github: GitHubConnector, confirmation: Confirmation) -> Message:
    """
    Creates the issue on GitHub in a single attempt and returns the summary
    shown to the user. Failures propagate as ToolExecutionError.
    """
    await github.create_issue(
        confirmation.owner, confirmation.repo, confirmation.title, confirmation.body
    )
    console.success(f"Created issue '{confirmation.title}' on {confirmation.owner}/{confirmation.repo}")
    return Message(
        role="assistant",
        content=f"Created issue {confirmation.title} on repository {confirmation.owner}/{confirmation.repo}",
    )
