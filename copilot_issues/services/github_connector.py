# The module wraps the GitHub REST calls the agent's tools need.
# Date: 2026-10-19
# Version: 0.1.0

import httpx
from typing import Any, Dict, List, Optional
from copilot_issues.core.errors import ToolExecutionError
from copilot_issues.utils.logger import console

class GitHubConnector:
    """
    A small async GitHub REST client acting on behalf of the Copilot user.

    Every call is a single attempt: failures are logged and raised as
    ToolExecutionError, nothing is retried.
    Attributes:
        api_token (str): The user's token, forwarded by Copilot in 'X-GitHub-Token'.
        base_url (str): Base URL of the GitHub REST API.
        timeout (float): Per-request timeout in seconds.
    """
    def __init__(self, api_token: str, base_url: str = "https://api.github.com",
                 timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Injected by tests; None means the default network transport
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, headers=self._headers(),
                                         timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            error_message = f"GitHub API returned {e.response.status_code} for {method} {path}"
            console.error(error_message)
            raise ToolExecutionError(error_message) from e
        except httpx.RequestError as e:
            error_message = f"HTTP request to GitHub failed for {method} {path}: {e}"
            console.error(error_message)
            raise ToolExecutionError(error_message) from e
        except ValueError as e:
            error_message = f"GitHub returned a non-JSON body for {method} {path}"
            console.error(error_message)
            raise ToolExecutionError(error_message) from e

    async def list_issues(self, owner: str, repo: str) -> List[Dict[str, Any]]:
        console.info(f"Listing issues for {owner}/{repo}")
        return await self._request("GET", f"/repos/{owner}/{repo}/issues")

    async def create_issue(self, owner: str, repo: str, title: str, body: str) -> Dict[str, Any]:
        console.info(f"Creating issue '{title}' on {owner}/{repo}")
        return await self._request("POST", f"/repos/{owner}/{repo}/issues",
                                   json={"title": title, "body": body})

    async def get_authenticated_user(self) -> Dict[str, Any]:
        return await self._request("GET", "/user")
