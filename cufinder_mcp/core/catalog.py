# =============================================================================
# core/catalog.py  —  Tool Catalog (what the host can discover)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the five CUFinder tools: their names, descriptions and input
#   contracts.  This is the discovery contract a host agent builds its calls
#   from, so each ToolDefinition here must match exactly what the handler
#   for that operation forwards to the provider.
#
# TOOL SET:
#   find_business             enrich one company from a name/domain/URL
#   find_person               enrich one person from full name + company
#   search_businesses         filter-based company search
#   search_persons            filter-based person search
#   search_local_businesses   filter-based local business search
#
# ADVISORY vs ENFORCED:
#   The fixed vocabularies (employee sizes, job title roles and levels,
#   industries) and the formatting conventions (lowercase locations, revenue
#   as "5M"/"1B", funding as raw USD) are published to the agent through the
#   descriptions only.  validate_arguments() checks STRUCTURE (known keys,
#   required keys, JSON types) and never checks values against these lists.
# =============================================================================

from typing import Any

from cufinder_mcp.core.errors import InvalidArgumentsError, UnknownToolError
from cufinder_mcp.core.models import FieldSpec, Operation, ToolDefinition


# -----------------------------------------------------------------------------
# Advisory vocabularies
# -----------------------------------------------------------------------------
EMPLOYEE_SIZES: tuple[str, ...] = (
    "1 employee",
    "2-10",
    "11-50",
    "51-200",
    "201-500",
    "501-1,000",
    "1,001-5,000",
    "5,001-10,000",
    "10,001+",
)

JOB_TITLE_ROLES: tuple[str, ...] = (
    "customer_service",
    "design",
    "education",
    "engineering",
    "finance",
    "health",
    "human_resources",
    "legal",
    "marketing",
    "media",
    "operations",
    "public_relations",
    "real_estate",
    "sales",
    "trades",
)

JOB_TITLE_LEVELS: tuple[str, ...] = (
    "cxo",
    "owner",
    "partner",
    "vp",
    "director",
    "manager",
    "senior",
    "entry",
    "training",
)


def _one_of(values: tuple[str, ...]) -> str:
    return "One of: " + ", ".join(f"'{value}'" for value in values) + "."


_LOWERCASE = "Must be lowercase (e.g. {example})."
_INDUSTRY = (
    "Industry name in lowercase as used by CUFinder "
    "(e.g. 'software development', 'financial services', 'hospitals and health care')."
)
_LOCAL_INDUSTRY = (
    "Local business category in lowercase "
    "(e.g. 'restaurants', 'dentists', 'real estate agents', 'auto repair')."
)
_REVENUE = "Annual revenue {bound} with a unit suffix, e.g. '5M' or '1B'."
_FUNDING = "{bound} total funding in raw USD, at least 1000000 (e.g. 5000000)."
_PAGE = "1-based page number for pagination (default 1)."


def _string(name: str, description: str, required: bool = False) -> FieldSpec:
    return FieldSpec(name=name, type="string", description=description, required=required)


def _integer(name: str, description: str) -> FieldSpec:
    return FieldSpec(name=name, type="integer", description=description)


def _keywords(name: str, description: str) -> FieldSpec:
    return FieldSpec(name=name, type="array", description=description, items="string")


# =============================================================================
# Tool definitions (ordered; this order is what list_tools() returns)
# =============================================================================
FIND_BUSINESS = ToolDefinition(
    name=Operation.FIND_BUSINESS.value,
    operation=Operation.FIND_BUSINESS,
    description=(
        "Enrich a single company. Looks up a company by name, domain or website URL and "
        "returns its overview, industry, size, funding, founding date, location, web "
        "presence, social profiles, contact data, technologies and specialties."
    ),
    fields=(
        _string(
            "query",
            "Company name, domain or website URL to look up (e.g. 'cufinder' or 'cufinder.io').",
            required=True,
        ),
    ),
)

FIND_PERSON = ToolDefinition(
    name=Operation.FIND_PERSON.value,
    operation=Operation.FIND_PERSON,
    description=(
        "Enrich a single person. Looks up a person by full name and the company they work "
        "for and returns their job title, summary, location, social profiles, contact data, "
        "employer details, skills, work experience and education."
    ),
    fields=(
        _string("full_name", "Person's full name (e.g. 'jane doe').", required=True),
        _string("company", "Company the person works at: name, domain or website.", required=True),
    ),
)

SEARCH_BUSINESSES = ToolDefinition(
    name=Operation.SEARCH_BUSINESSES.value,
    operation=Operation.SEARCH_BUSINESSES,
    description=(
        "Search companies by filters: name, location, industry, employee size, follower "
        "count, founding year, funding, revenue, products/services keywords and school flag. "
        "No filter is required, but at least one is recommended. Results are paginated; use "
        "'page' to fetch more."
    ),
    fields=(
        _string("name", "Company name to filter by."),
        _string("country", "Country of the company's main location. " + _LOWERCASE.format(example="'germany'")),
        _string("state", "State or province. " + _LOWERCASE.format(example="'hamburg'")),
        _string("city", "City. " + _LOWERCASE.format(example="'hamburg'")),
        _string("industry", _INDUSTRY),
        _string("employee_size", "Employee size range. " + _one_of(EMPLOYEE_SIZES)),
        _integer("followers_count_min", "Minimum number of LinkedIn followers."),
        _integer("followers_count_max", "Maximum number of LinkedIn followers."),
        _integer("founded_after_year", "Only companies founded after this year (e.g. 2010)."),
        _integer("founded_before_year", "Only companies founded before this year (e.g. 2020)."),
        FieldSpec("funding_amount_min", "number", _FUNDING.format(bound="Minimum")),
        FieldSpec("funding_amount_max", "number", _FUNDING.format(bound="Maximum")),
        _string("annual_revenue_min", _REVENUE.format(bound="lower bound")),
        _string("annual_revenue_max", _REVENUE.format(bound="upper bound")),
        _keywords("products_services", "Keywords describing products or services (e.g. ['crm', 'email marketing'])."),
        FieldSpec("is_school", "boolean", "Set true to return only schools and universities."),
        _integer("page", _PAGE),
    ),
)

SEARCH_PERSONS = ToolDefinition(
    name=Operation.SEARCH_PERSONS.value,
    operation=Operation.SEARCH_PERSONS,
    description=(
        "Search people by filters on the person (name, location, job title role and level) "
        "and on their employer (name, LinkedIn URL, location, industry, size, products/services, "
        "revenue). No filter is required. Results are paginated; use 'page' to fetch more."
    ),
    fields=(
        _string("full_name", "Person's full name."),
        _string("country", "Country the person is based in. " + _LOWERCASE.format(example="'germany'")),
        _string("state", "State or province. " + _LOWERCASE.format(example="'hamburg'")),
        _string("city", "City. " + _LOWERCASE.format(example="'hamburg'")),
        _string("job_title_role", "Job function. " + _one_of(JOB_TITLE_ROLES)),
        _string("job_title_level", "Seniority. " + _one_of(JOB_TITLE_LEVELS)),
        _string("company_name", "Employer name."),
        _string("company_linkedin_url", "Employer's LinkedIn company page URL."),
        _string("company_country", "Employer's country. " + _LOWERCASE.format(example="'united states'")),
        _string("company_state", "Employer's state or province. " + _LOWERCASE.format(example="'california'")),
        _string("company_city", "Employer's city. " + _LOWERCASE.format(example="'san francisco'")),
        _string("company_industry", _INDUSTRY),
        _string("company_employee_size", "Employer's employee size range. " + _one_of(EMPLOYEE_SIZES)),
        _keywords("company_products_services", "Keywords describing the employer's products or services."),
        _string("company_annual_revenue_min", _REVENUE.format(bound="lower bound for the employer")),
        _string("company_annual_revenue_max", _REVENUE.format(bound="upper bound for the employer")),
        _integer("page", _PAGE),
    ),
)

SEARCH_LOCAL_BUSINESSES = ToolDefinition(
    name=Operation.SEARCH_LOCAL_BUSINESSES.value,
    operation=Operation.SEARCH_LOCAL_BUSINESSES,
    description=(
        "Search local businesses (shops, restaurants, clinics, agencies...) by name, location "
        "and category. Returns industry details, Google Maps rating and reviews, social "
        "profiles, emails and phones. Results are paginated; use 'page' to fetch more."
    ),
    fields=(
        _string("name", "Business name to filter by."),
        _string("country", "Country. " + _LOWERCASE.format(example="'united states'")),
        _string("state", "State or province. " + _LOWERCASE.format(example="'texas'")),
        _string("city", "City. " + _LOWERCASE.format(example="'austin'")),
        _string("industry", _LOCAL_INDUSTRY),
        _integer("page", _PAGE),
    ),
)

TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    FIND_BUSINESS,
    FIND_PERSON,
    SEARCH_BUSINESSES,
    SEARCH_PERSONS,
    SEARCH_LOCAL_BUSINESSES,
)

_BY_NAME: dict[str, ToolDefinition] = {definition.name: definition for definition in TOOL_DEFINITIONS}


def list_tools() -> tuple[ToolDefinition, ...]:
    """Return every tool definition, in a stable order."""
    return TOOL_DEFINITIONS


def get_definition(name: str) -> ToolDefinition:
    """Look up a tool by name.

    Raises:
        UnknownToolError: if no tool with that name is registered.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None


# =============================================================================
# Structural validation
# =============================================================================
def _matches(spec: FieldSpec, value: Any) -> bool:
    # bool is an int subclass; it is never accepted where a number is expected
    if spec.type == "string":
        return isinstance(value, str)
    if spec.type == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if spec.type == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if spec.type == "boolean":
        return isinstance(value, bool)
    if spec.type == "array":
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    return True


def validate_arguments(definition: ToolDefinition, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """Check ``arguments`` against a tool's input contract.

    Null values are treated as absent and dropped.  Values are returned
    unchanged: no lowercasing, no enum matching, no unit conversion.

    Returns:
        The arguments to forward to the provider.

    Raises:
        InvalidArgumentsError: listing every problem found (unknown keys,
            missing required keys, wrong JSON types).
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(definition.name, ["arguments must be an object"])

    cleaned = {key: value for key, value in arguments.items() if value is not None}
    problems = []

    unknown = sorted(key for key in cleaned if key not in definition.field_names)
    if unknown:
        problems.append(f"unexpected field(s): {', '.join(unknown)}")

    for spec in definition.fields:
        if spec.name not in cleaned:
            if spec.required:
                problems.append(f"missing required field '{spec.name}'")
            continue
        if not _matches(spec, cleaned[spec.name]):
            expected = f"array of {spec.items or 'string'}" if spec.type == "array" else spec.type
            problems.append(f"field '{spec.name}' must be {expected}")

    if problems:
        raise InvalidArgumentsError(definition.name, problems)
    return cleaned
