# =============================================================================
# cufinder_mcp/core/__init__.py
# =============================================================================
# This package contains ALL the logic of the CUFinder gateway: configuration,
# the HTTP client for the provider, the tool catalog, one handler per tool,
# the text formatters and the dispatcher that ties them together.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any MCP SDK.  The tools/
#   package is the only place that knows about the protocol; everything here
#   can be driven from a plain Python REPL (or a test) with a stubbed HTTP
#   session.
# =============================================================================
