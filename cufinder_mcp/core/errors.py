# =============================================================================
# core/errors.py  —  Gateway Error Types
# =============================================================================
#
# Every failure the gateway can report derives from GatewayError.  The
# dispatcher (core/gateway.py) turns any of them into an error result of the
# form "Error: <message>"; none of them stop the server.
#
#   UnknownToolError       the host asked for a tool the catalog doesn't have
#   InvalidArgumentsError  arguments don't match the tool's input contract
#   TransportError         network failure or timeout talking to CUFinder
#   ProviderError          CUFinder answered, but not with a usable 2xx JSON
#   OperationError         a handler failed; wraps one of the two above
#
# A "no match" answer from the provider (status -1) is NOT an error.
# =============================================================================


class GatewayError(Exception):
    """Base class for every error the gateway reports to the host."""


class UnknownToolError(GatewayError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(GatewayError):
    def __init__(self, tool_name: str, problems: list[str]):
        self.tool_name = tool_name
        self.problems = list(problems)
        super().__init__(f"Invalid arguments for {tool_name}: {'; '.join(self.problems)}")


class TransportError(GatewayError):
    """Raised when the provider could not be reached or timed out."""


class ProviderError(GatewayError):
    """Raised when the provider returns a non-2xx status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"HTTP {status_code}: {message}"
        super().__init__(message)


class OperationError(GatewayError):
    """A handler failure, reported as 'Failed to <action>: <cause>'."""

    def __init__(self, action: str, cause: Exception):
        self.action = action
        self.cause = cause
        super().__init__(f"Failed to {action}: {cause}")
