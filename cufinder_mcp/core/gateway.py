# =============================================================================
# core/gateway.py  —  Tool Gateway (dispatch + uniform error results)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Receives an invocation (tool name + arguments), routes it to the
#   matching handler and wraps the outcome as a ToolResult:
#
#     success            → ToolResult(text, is_error=False)
#     unknown tool       → "Error: Unknown tool: <name>"
#     bad arguments      → "Error: Invalid arguments for <tool>: ..."
#     handler failure    → "Error: Failed to <action>: <cause>"
#
#   Nothing raised by a handler escapes call_tool(); the server keeps
#   running after any failed invocation.
# =============================================================================

import logging
from typing import Any, Optional

from cufinder_mcp.core import catalog, handlers
from cufinder_mcp.core.client import CufinderClient
from cufinder_mcp.core.errors import GatewayError
from cufinder_mcp.core.models import InvocationRequest, ToolDefinition, ToolResult

logger = logging.getLogger(__name__)


def error_result(message: str) -> ToolResult:
    return ToolResult(text=f"Error: {message}", is_error=True)


class ToolGateway:
    """Dispatches tool invocations to handlers over one CufinderClient."""

    def __init__(self, client: CufinderClient):
        self.client = client

    def list_tools(self) -> tuple[ToolDefinition, ...]:
        return catalog.list_tools()

    def invoke(self, request: InvocationRequest) -> ToolResult:
        return self.call_tool(request.tool_name, request.arguments)

    def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Run one tool and return its text, or a uniform error result."""
        try:
            definition = catalog.get_definition(name)
            validated = catalog.validate_arguments(definition, arguments)
            logger.info("Invoking %s with fields %s", name, sorted(validated))
            result = handlers.handle(definition.operation, validated, self.client)
        except GatewayError as exc:
            logger.warning("%s failed: %s", name, exc)
            return error_result(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while running %s", name)
            return error_result(str(exc) or exc.__class__.__name__)
        return ToolResult(text=result.text)
