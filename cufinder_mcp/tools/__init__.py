# =============================================================================
# cufinder_mcp/tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP host and core/.  The
#   server module:
#     1. Registers one FastMCP tool per catalog entry (same name, same
#        description, same parameters)
#     2. Forwards each call to the core ToolGateway
#     3. Returns the formatted text, or raises ToolError so the host sees
#        isError=true with the gateway's message
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to the CUFinder API (that's core/client.py)
#   - They do NOT format results (that's core/formatters.py)
#   - They do NOT validate arguments beyond what FastMCP's typing does
#     (structural validation happens in core/gateway.py)
# =============================================================================
