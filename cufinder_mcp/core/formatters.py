# =============================================================================
# core/formatters.py  —  Record → Text Rendering
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the records in a ProviderResponse into the plain-text block the
#   agent reads.  There is one formatter per operation (the interesting
#   fields of a person are not those of a local business), plus two header
#   renderers: one for single-record enrichment results and one for
#   numbered search results.
#
# THE PRESENCE RULE:
#   A field produces a line if and only if its value is present: not None,
#   not a blank string, not an empty list or dict.  Absent fields are skipped
#   silently; no "N/A", no "null", no empty "Label:" lines.
#
# LINE ORDER (every formatter follows it):
#   identity → overview/summary → classification → size metrics →
#   temporal facts → location → address → web presence → social →
#   contact data → nested collections (capped previews)
#
# CAPPED PREVIEWS:
#   Long collections show their first N entries followed by
#   "... and K more".  The list of search RESULTS is never truncated;
#   the agent pages through it with the `page` argument instead.
# =============================================================================

import json
from typing import Any, Iterable, Optional

from cufinder_mcp.core.models import (
    Certification,
    CompanyRecord,
    Education,
    EnrichedCompany,
    EnrichedPerson,
    LocalBusinessRecord,
    Location,
    PersonRecord,
    ProviderResponse,
    Social,
    WorkExperience,
)

# Preview caps per collection
TECHNOLOGIES_LIMIT = 10
SPECIALTIES_LIMIT = 10
SKILLS_LIMIT = 10
JOB_TITLE_CATEGORIES_LIMIT = 10
INTERESTS_LIMIT = 5
EXPERIENCES_LIMIT = 5
CERTIFICATIONS_LIMIT = 5
LOCATIONS_LIMIT = 5
EDUCATIONS_LIMIT = 3


# =============================================================================
# Building blocks
# =============================================================================
def is_present(value: Any) -> bool:
    """True unless ``value`` is None, a blank string, or an empty container."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def _add(lines: list[str], label: str, value: Any) -> None:
    if is_present(value):
        lines.append(f"{label}: {value}")


def _add_flag(lines: list[str], label: str, value: Optional[bool]) -> None:
    if value is True:
        lines.append(f"{label}: yes")


def join_location(country: Any = None, state: Any = None, city: Any = None) -> Optional[str]:
    """Join the present parts of a location with ", " (None if all absent)."""
    parts = [str(part).strip() for part in (country, state, city) if is_present(part)]
    return ", ".join(parts) or None


def preview(items: Iterable[Any], limit: int) -> tuple[list[Any], int]:
    """Split ``items`` into the first ``limit`` present entries and a hidden count."""
    present = [item for item in items if is_present(item)]
    return present[:limit], max(len(present) - limit, 0)


def _more(hidden: int) -> str:
    return f"... and {hidden} more"


def _add_inline(lines: list[str], label: str, items: Iterable[Any], limit: int) -> None:
    shown, hidden = preview(items, limit)
    if not shown:
        return
    text = ", ".join(str(item) for item in shown)
    if hidden:
        text = f"{text} {_more(hidden)}"
    lines.append(f"{label}: {text}")


def _add_block(lines: list[str], label: str, entries: Iterable[Optional[str]], limit: int) -> None:
    shown, hidden = preview(entries, limit)
    if not shown:
        return
    lines.append(f"{label}:")
    lines.extend(f"  - {entry}" for entry in shown)
    if hidden:
        lines.append(f"  {_more(hidden)}")


def _add_location(lines: list[str], location: Location, label: str = "Location") -> None:
    _add(lines, label, join_location(location.country, location.state, location.city))


def _add_social(lines: list[str], social: Social, prefix: str = "") -> None:
    _add(lines, f"{prefix}LinkedIn", social.linkedin)
    _add(lines, f"{prefix}X (Twitter)", social.twitter)
    _add(lines, f"{prefix}Facebook", social.facebook)
    _add(lines, f"{prefix}Instagram", social.instagram)
    _add(lines, f"{prefix}YouTube", social.youtube)
    _add(lines, f"{prefix}GitHub", social.github)


def _period(start: Any, end: Any) -> Optional[str]:
    if not is_present(start) and not is_present(end):
        return None
    return f"{start if is_present(start) else '?'} - {end if is_present(end) else 'present'}"


def _experience_entry(experience: WorkExperience) -> Optional[str]:
    head = " at ".join(str(part) for part in (experience.title, experience.company_name) if is_present(part))
    period = _period(experience.start_date, experience.end_date)
    if head and period:
        return f"{head} ({period})"
    return head or period


def _education_entry(education: Education) -> Optional[str]:
    study = ", ".join(str(part) for part in (education.degree, education.field_of_study) if is_present(part))
    head = " - ".join(part for part in (str(education.school or "").strip(), study) if part)
    period = _period(education.start_date, education.end_date)
    if head and period:
        return f"{head} ({period})"
    return head or period


def _certification_entry(certification: Certification) -> Optional[str]:
    if is_present(certification.name) and is_present(certification.authority):
        return f"{certification.name} ({certification.authority})"
    return certification.name if is_present(certification.name) else None


def _location_entry(location: Location) -> Optional[str]:
    place = join_location(location.country, location.state, location.city)
    if is_present(location.address):
        return f"{location.address} ({place})" if place else str(location.address)
    return place


def _employee_size(size_range: Any, count: Any) -> Optional[str]:
    if is_present(size_range) and is_present(count):
        return f"{size_range} ({count} employees)"
    if is_present(size_range):
        return str(size_range)
    if is_present(count):
        return f"{count} employees"
    return None


# =============================================================================
# Per-operation formatters
# =============================================================================
def format_enriched_company(company: EnrichedCompany) -> str:
    """find_business: one detailed company."""
    lines: list[str] = []
    if is_present(company.name):
        lines.append(str(company.name))
    _add(lines, "Overview", company.overview)

    _add(lines, "Type", company.type)
    _add(lines, "Industry", company.industry)
    _add(lines, "Industry Category", company.industry_details.level_1)
    _add(lines, "Industry Top Category", company.industry_details.level_2)
    _add_flag(lines, "School", company.is_school)
    _add_flag(lines, "Investor", company.is_investor)

    _add(lines, "Employee Size", _employee_size(company.employees.range, company.employees.count))
    _add(lines, "Followers", company.followers_count)
    _add(lines, "Annual Revenue", company.annual_revenue)
    funding = company.funding
    _add(lines, "Funding Rounds", funding.number_of_rounds)
    _add(lines, "Last Funding Round", funding.last_round_type)
    if is_present(funding.last_round_money_raised_amount):
        amount = " ".join(
            str(part)
            for part in (funding.last_round_money_raised_amount, funding.last_round_money_raised_amount_currency_code)
            if is_present(part)
        )
        _add(lines, "Last Round Amount", amount)
    _add(lines, "Last Round Investors", funding.last_round_investors)

    _add(lines, "Founded", company.founded)

    _add_location(lines, company.main_location)
    _add(lines, "Address", company.main_location.address)

    _add(lines, "Website", company.website)
    _add(lines, "Domain", company.domain)
    _add_social(lines, company.social)

    _add(lines, "Emails", ", ".join(company.connections.emails))
    _add(lines, "Phones", ", ".join(company.connections.phones))

    technologies = [
        f"{tech.technology_name} ({tech.category})" if is_present(tech.category) else tech.technology_name
        for tech in company.technologies
        if is_present(tech.technology_name)
    ]
    _add_inline(lines, "Technologies", technologies, TECHNOLOGIES_LIMIT)
    _add_inline(lines, "Specialties", company.specialties, SPECIALTIES_LIMIT)
    _add_block(lines, "Other Locations", [_location_entry(loc) for loc in company.locations], LOCATIONS_LIMIT)
    return "\n".join(lines)


def format_enriched_person(person: EnrichedPerson) -> str:
    """find_person: one detailed person and their employer."""
    lines: list[str] = []
    if is_present(person.full_name):
        lines.append(str(person.full_name))
    _add(lines, "Summary", person.summary)

    _add(lines, "Job Title", person.job_title)
    _add(lines, "Role", person.job_title_role)
    _add(lines, "Level", person.job_title_level)
    _add_inline(lines, "Job Title Categories", person.job_title_categories, JOB_TITLE_CATEGORIES_LIMIT)

    _add(lines, "Followers", person.followers_count)
    _add(lines, "Years of Experience", person.experience_years)

    _add_location(lines, person.location)
    _add(lines, "Address", person.location.address)

    _add_social(lines, person.social)
    _add(lines, "Emails", ", ".join(person.connections.emails))
    _add(lines, "Phones", ", ".join(person.connections.phones))

    company = person.company
    _add(lines, "Company", company.name)
    _add(lines, "Company Industry", company.industry)
    _add(lines, "Company Size", company.size)
    _add_location(lines, company.main_location, label="Company Location")
    _add(lines, "Company Website", company.website)
    _add_social(lines, company.social, prefix="Company ")

    _add_inline(lines, "Skills", person.skills, SKILLS_LIMIT)
    _add_inline(lines, "Interests", person.interests, INTERESTS_LIMIT)
    _add_block(lines, "Experience", [_experience_entry(exp) for exp in person.experiences], EXPERIENCES_LIMIT)
    _add_block(lines, "Education", [_education_entry(edu) for edu in person.educations], EDUCATIONS_LIMIT)
    _add_block(
        lines,
        "Certifications",
        [_certification_entry(cert) for cert in person.certifications],
        CERTIFICATIONS_LIMIT,
    )
    return "\n".join(lines)


def format_company(company: CompanyRecord) -> str:
    """search_businesses: one company hit."""
    lines: list[str] = []
    if is_present(company.name):
        lines.append(str(company.name))
    _add(lines, "Overview", company.overview)
    _add(lines, "Type", company.type)
    _add(lines, "Industry", company.industry)
    _add(lines, "Employee Size", _employee_size(company.employees.range, company.employees.count))
    _add(lines, "Followers", company.followers_count)
    _add(lines, "Annual Revenue", company.annual_revenue)
    _add(lines, "Founded", company.founded_year)
    _add_location(lines, company.main_location)
    _add(lines, "Address", company.main_location.address)
    _add(lines, "Website", company.website)
    _add(lines, "Domain", company.domain)
    _add_social(lines, company.social)
    return "\n".join(lines)


def format_person(person: PersonRecord) -> str:
    """search_persons: one person hit."""
    lines: list[str] = []
    if is_present(person.full_name):
        lines.append(str(person.full_name))
    _add(lines, "Job Title", person.job_title)
    _add(lines, "Role", person.job_title_role)
    _add(lines, "Level", person.job_title_level)
    _add_location(lines, person.location)
    _add_social(lines, person.social)

    company = person.company
    _add(lines, "Company", company.name)
    _add(lines, "Company Industry", company.industry)
    _add(lines, "Company Size", company.size)
    _add_location(lines, company.main_location, label="Company Location")
    _add(lines, "Company Website", company.website)
    _add_social(lines, company.social, prefix="Company ")
    return "\n".join(lines)


def format_local_business(business: LocalBusinessRecord) -> str:
    """search_local_businesses: one local business hit."""
    lines: list[str] = []
    if is_present(business.name):
        lines.append(str(business.name))
    _add(lines, "Overview", business.overview)

    _add(lines, "Industry", business.industry)
    details = business.industry_details
    _add(lines, "Industry Category", details.level_1)
    _add(lines, "Industry Top Category", details.level_2)
    _add(lines, "NAICS Code", details.naics_code)
    _add(lines, "SIC Code", details.sic_code)

    _add(lines, "Google Maps Rating", business.geo_location.rating)
    _add(lines, "Google Maps Reviews", business.geo_location.reviews_count)

    _add_location(lines, business.main_location)
    _add(lines, "Address", business.main_location.address)
    _add(lines, "Website", business.website)
    _add(lines, "Domain", business.domain)
    _add_social(lines, business.social)

    _add(lines, "Emails", ", ".join(business.connections.emails))
    _add(lines, "Phones", ", ".join(business.connections.phones))
    return "\n".join(lines)


# =============================================================================
# Result headers
# =============================================================================
def _query_text(query: Any) -> Any:
    # Search endpoints echo the filter object back; enrichment echoes a string
    if isinstance(query, (dict, list)):
        return json.dumps(query, ensure_ascii=False, sort_keys=True) if query else None
    return query


def _header(label: str, response: ProviderResponse) -> list[str]:
    lines = [f"🔍 {label}"]
    _add(lines, "Query", _query_text(response.query))
    _add(lines, "Credits Used", response.credit_count)
    return lines


def render_single(label: str, response: ProviderResponse, record_text: str) -> str:
    """Header (label, query, credits, confidence) followed by one record."""
    lines = _header(label, response)
    _add(lines, "Confidence Level", response.confidence_level)
    text = "\n".join(lines) + "\n"
    if record_text:
        text += "\n" + record_text
    return text


def render_many(label: str, response: ProviderResponse, blocks: list[str], noun: str) -> str:
    """Header with a result count followed by numbered, blank-line-separated records."""
    lines = _header(label, response)
    lines.append(f"Found: {len(blocks)} {noun}")
    text = "\n".join(lines) + "\n"
    if blocks:
        numbered = [f"{index}. {block}".rstrip() for index, block in enumerate(blocks, start=1)]
        text += "\n" + "\n\n".join(numbered)
    return text
