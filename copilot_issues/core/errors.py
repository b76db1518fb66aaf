# The module defines the error taxonomy raised by the agent.
# Date: 2026-10-19
# Version: 0.1.0

class AgentError(Exception):
    """
    Base class for every failure that terminates an agent request.
    Attributes:
        code (str): Machine readable error code, sent in 'copilot_errors' events.
        status_code (int): HTTP status used when the failure happens before streaming.
        public_message (str): Short plain-text body returned to the caller.
    """
    code: str = "agent_error"
    status_code: int = 500
    public_message: str = "failed to execute agent"


class SignatureInvalid(AgentError):
    code = "invalid_signature"
    status_code = 401
    public_message = "invalid payload signature"


class MalformedRequestBody(AgentError):
    code = "malformed_request"
    status_code = 400
    public_message = "failed to unmarshal request"


class GatewayError(AgentError):
    """The upstream completion call failed."""
    code = "completion_failed"


class ToolExecutionError(AgentError):
    """A GitHub API call made on behalf of a tool failed."""
    code = "tool_failed"


class UnknownFunctionCall(AgentError):
    """The model requested a tool that is not declared in the registry."""
    code = "unknown_function"

    def __init__(self, name: str):
        super().__init__(f"unknown function call: {name}")
        self.name = name


class MalformedArguments(AgentError):
    """The arguments of a function call did not match the tool's schema."""
    code = "malformed_arguments"

    def __init__(self, name: str, detail: str):
        super().__init__(f"malformed arguments for '{name}': {detail}")
        self.name = name
        self.detail = detail
