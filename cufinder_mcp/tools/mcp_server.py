# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL CUFinder tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five CUFinder tools over MCP.  Each tool is a thin wrapper
#   that forwards its arguments to the core ToolGateway and hands the
#   formatted text back to the host.
#
# HOW IT WORKS (the flow):
#   1. The host agent lists tools and picks one (e.g. "find_business")
#   2. CatalogGuard rejects unknown names and malformed arguments with the
#      gateway's error text; otherwise FastMCP calls the wrapper below
#   3. The wrapper drops unset (None) arguments and calls the gateway
#   4. The gateway validates, calls CUFinder, formats the result
#   5. On success the text is returned; on failure ToolError is raised with
#      the gateway's "Error: ..." message, which the host sees as isError
#
# ONE SOURCE OF TRUTH:
#   Tool names, tool descriptions and parameter descriptions all come from
#   core/catalog.py.  Each wrapper's parameter list must mirror its catalog
#   entry (required fields have no default); tests/test_mcp_server.py checks
#   this.
#
# RUNNING THIS SERVER:
#   cufinder-mcp                  (console script)
#   python -m cufinder_mcp        (same thing)
#   Transport is stdio, so stdout belongs to the protocol and all logging
#   goes to stderr.
# =============================================================================

import logging
import sys
from functools import lru_cache
from typing import Annotated, Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from pydantic import Field

from cufinder_mcp.core.catalog import (
    FIND_BUSINESS,
    FIND_PERSON,
    SEARCH_BUSINESSES,
    SEARCH_LOCAL_BUSINESSES,
    SEARCH_PERSONS,
    get_definition,
    list_tools,
    validate_arguments,
)
from cufinder_mcp.core.client import CufinderClient
from cufinder_mcp.core.config import get_settings
from cufinder_mcp.core.errors import GatewayError
from cufinder_mcp.core.gateway import ToolGateway, error_result
from cufinder_mcp.core.models import ToolDefinition, ToolResult

logger = logging.getLogger("cufinder_mcp.server")

# =============================================================================
# Logging helpers
# =============================================================================
# ANSI colours make tool calls easy to scan in the terminal:
#   CYAN for incoming requests, GREEN for successful responses,
#   YELLOW for status messages, RED for error results.
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

_LOG_FORMAT = "%(asctime)s [MCP] %(levelname)s %(name)s: %(message)s"


def _log_request(tool_name: str, **params: Any) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the first line of the result (GREEN, or RED for errors), then return it."""
    first_line = result.text.splitlines()[0] if result.text else ""
    colour = _RED if result.is_error else _GREEN
    logger.info(f"{colour}  ← {tool_name} response ({len(result.text)} chars): {first_line}{_RESET}")
    return result


# =============================================================================
# Server instance and gateway
# =============================================================================
mcp = FastMCP("cufinder-mcp")


@lru_cache(maxsize=1)
def get_gateway() -> ToolGateway:
    """Build the gateway on first use from the process settings."""
    settings = get_settings()
    _log_status(f"Using CUFinder API at {settings.base_url}")
    return ToolGateway(CufinderClient(settings))


def _invoke(tool_name: str, **arguments: Any) -> str:
    """Forward a call to the gateway; raise ToolError for error results."""
    arguments = {key: value for key, value in arguments.items() if value is not None}
    _log_request(tool_name, **arguments)
    result = _log_response(tool_name, get_gateway().call_tool(tool_name, arguments))
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def _describe(definition: ToolDefinition, name: str) -> Any:
    """Pydantic Field carrying the catalog's description for one parameter."""
    return Field(description=definition.field(name).description)


# =============================================================================
# TOOL 1: find_business  (POST /enc, form-encoded)
# =============================================================================
def find_business(
    query: Annotated[str, _describe(FIND_BUSINESS, "query")],
) -> str:
    return _invoke("find_business", query=query)


# =============================================================================
# TOOL 2: find_person  (POST /tep, form-encoded)
# =============================================================================
def find_person(
    full_name: Annotated[str, _describe(FIND_PERSON, "full_name")],
    company: Annotated[str, _describe(FIND_PERSON, "company")],
) -> str:
    return _invoke("find_person", full_name=full_name, company=company)


# =============================================================================
# TOOL 3: search_businesses  (POST /cse, JSON body)
# =============================================================================
def search_businesses(
    name: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "name")] = None,
    country: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "country")] = None,
    state: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "state")] = None,
    city: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "city")] = None,
    industry: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "industry")] = None,
    employee_size: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "employee_size")] = None,
    followers_count_min: Annotated[Optional[int], _describe(SEARCH_BUSINESSES, "followers_count_min")] = None,
    followers_count_max: Annotated[Optional[int], _describe(SEARCH_BUSINESSES, "followers_count_max")] = None,
    founded_after_year: Annotated[Optional[int], _describe(SEARCH_BUSINESSES, "founded_after_year")] = None,
    founded_before_year: Annotated[Optional[int], _describe(SEARCH_BUSINESSES, "founded_before_year")] = None,
    funding_amount_min: Annotated[Optional[int | float], _describe(SEARCH_BUSINESSES, "funding_amount_min")] = None,
    funding_amount_max: Annotated[Optional[int | float], _describe(SEARCH_BUSINESSES, "funding_amount_max")] = None,
    annual_revenue_min: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "annual_revenue_min")] = None,
    annual_revenue_max: Annotated[Optional[str], _describe(SEARCH_BUSINESSES, "annual_revenue_max")] = None,
    products_services: Annotated[Optional[list[str]], _describe(SEARCH_BUSINESSES, "products_services")] = None,
    is_school: Annotated[Optional[bool], _describe(SEARCH_BUSINESSES, "is_school")] = None,
    page: Annotated[Optional[int], _describe(SEARCH_BUSINESSES, "page")] = None,
) -> str:
    return _invoke(
        "search_businesses",
        name=name,
        country=country,
        state=state,
        city=city,
        industry=industry,
        employee_size=employee_size,
        followers_count_min=followers_count_min,
        followers_count_max=followers_count_max,
        founded_after_year=founded_after_year,
        founded_before_year=founded_before_year,
        funding_amount_min=funding_amount_min,
        funding_amount_max=funding_amount_max,
        annual_revenue_min=annual_revenue_min,
        annual_revenue_max=annual_revenue_max,
        products_services=products_services,
        is_school=is_school,
        page=page,
    )


# =============================================================================
# TOOL 4: search_persons  (POST /pse, JSON body)
# =============================================================================
def search_persons(
    full_name: Annotated[Optional[str], _describe(SEARCH_PERSONS, "full_name")] = None,
    country: Annotated[Optional[str], _describe(SEARCH_PERSONS, "country")] = None,
    state: Annotated[Optional[str], _describe(SEARCH_PERSONS, "state")] = None,
    city: Annotated[Optional[str], _describe(SEARCH_PERSONS, "city")] = None,
    job_title_role: Annotated[Optional[str], _describe(SEARCH_PERSONS, "job_title_role")] = None,
    job_title_level: Annotated[Optional[str], _describe(SEARCH_PERSONS, "job_title_level")] = None,
    company_name: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_name")] = None,
    company_linkedin_url: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_linkedin_url")] = None,
    company_country: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_country")] = None,
    company_state: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_state")] = None,
    company_city: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_city")] = None,
    company_industry: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_industry")] = None,
    company_employee_size: Annotated[Optional[str], _describe(SEARCH_PERSONS, "company_employee_size")] = None,
    company_products_services: Annotated[
        Optional[list[str]], _describe(SEARCH_PERSONS, "company_products_services")
    ] = None,
    company_annual_revenue_min: Annotated[
        Optional[str], _describe(SEARCH_PERSONS, "company_annual_revenue_min")
    ] = None,
    company_annual_revenue_max: Annotated[
        Optional[str], _describe(SEARCH_PERSONS, "company_annual_revenue_max")
    ] = None,
    page: Annotated[Optional[int], _describe(SEARCH_PERSONS, "page")] = None,
) -> str:
    return _invoke(
        "search_persons",
        full_name=full_name,
        country=country,
        state=state,
        city=city,
        job_title_role=job_title_role,
        job_title_level=job_title_level,
        company_name=company_name,
        company_linkedin_url=company_linkedin_url,
        company_country=company_country,
        company_state=company_state,
        company_city=company_city,
        company_industry=company_industry,
        company_employee_size=company_employee_size,
        company_products_services=company_products_services,
        company_annual_revenue_min=company_annual_revenue_min,
        company_annual_revenue_max=company_annual_revenue_max,
        page=page,
    )


# =============================================================================
# TOOL 5: search_local_businesses  (POST /lbs, JSON body)
# =============================================================================
def search_local_businesses(
    name: Annotated[Optional[str], _describe(SEARCH_LOCAL_BUSINESSES, "name")] = None,
    country: Annotated[Optional[str], _describe(SEARCH_LOCAL_BUSINESSES, "country")] = None,
    state: Annotated[Optional[str], _describe(SEARCH_LOCAL_BUSINESSES, "state")] = None,
    city: Annotated[Optional[str], _describe(SEARCH_LOCAL_BUSINESSES, "city")] = None,
    industry: Annotated[Optional[str], _describe(SEARCH_LOCAL_BUSINESSES, "industry")] = None,
    page: Annotated[Optional[int], _describe(SEARCH_LOCAL_BUSINESSES, "page")] = None,
) -> str:
    return _invoke(
        "search_local_businesses",
        name=name,
        country=country,
        state=state,
        city=city,
        industry=industry,
        page=page,
    )


# =============================================================================
# Registration — catalog order, catalog names, catalog descriptions
# =============================================================================
TOOL_FUNCTIONS = {
    "find_business": find_business,
    "find_person": find_person,
    "search_businesses": search_businesses,
    "search_persons": search_persons,
    "search_local_businesses": search_local_businesses,
}

for _definition in list_tools():
    mcp.tool(name=_definition.name, description=_definition.description)(TOOL_FUNCTIONS[_definition.name])


# =============================================================================
# Inbound checks: unknown tools and malformed arguments
# =============================================================================
# Catalog checks run before FastMCP's own tool lookup and argument parsing,
# so these failures reach the host as "Error: <message>" like any other.
# =============================================================================
class CatalogGuard(Middleware):
    """Reject unknown tool names and malformed arguments with gateway errors."""

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        arguments = context.message.arguments or {}
        try:
            validate_arguments(get_definition(name), arguments)
        except GatewayError as exc:
            result = _log_response(name, error_result(str(exc)))
            raise ToolError(result.text) from exc
        return await call_next(context)


mcp.add_middleware(CatalogGuard())


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Configure stderr logging and serve the tools over stdio."""
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    logger.info("CUFinder MCP server running on stdio")
    try:
        mcp.run()
    except Exception:
        logger.exception("CUFinder MCP server failed")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
