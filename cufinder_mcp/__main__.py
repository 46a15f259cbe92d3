# =============================================================================
# cufinder_mcp/__main__.py  —  `python -m cufinder_mcp`
# =============================================================================

from cufinder_mcp.tools.mcp_server import main

if __name__ == "__main__":
    main()
