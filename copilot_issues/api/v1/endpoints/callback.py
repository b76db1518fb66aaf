# The module is to define the OAuth callback page of the Copilot extension.
# Date: 2026-10-19
# Version: 0.1.0

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

CALLBACK_MESSAGE = "You may close this tab and return to GitHub.com " \
    "(where you should refresh the page and start a fresh chat). " \
    "If you're using VS Code or Visual Studio, return there."

@router.get("", response_class=PlainTextResponse)
def oauth_callback():
    """Shown to the user after they authorize the extension."""
    return CALLBACK_MESSAGE
