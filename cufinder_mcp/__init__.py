"""CUFinder B2B data enrichment exposed as MCP tools."""

__version__ = "1.0.0"
