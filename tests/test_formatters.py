from cufinder_mcp.core import formatters
from cufinder_mcp.core.models import (
    CompanyRecord,
    EnrichedCompany,
    EnrichedPerson,
    LocalBusinessRecord,
    PersonRecord,
    ProviderResponse,
)


def _labels(text):
    return {line.split(":", 1)[0] for line in text.splitlines() if ":" in line}


def test_join_location():
    assert formatters.join_location("germany", "hamburg", "hamburg") == "germany, hamburg, hamburg"
    assert formatters.join_location("germany", None, "hamburg") == "germany, hamburg"
    assert formatters.join_location("", "  ", None) is None


def test_location_line_skips_missing_parts():
    full = EnrichedCompany.from_dict({"main_location": {"country": "germany", "state": "hamburg", "city": "hamburg"}})
    partial = EnrichedCompany.from_dict({"main_location": {"country": "germany", "state": None, "city": "hamburg"}})

    assert "Location: germany, hamburg, hamburg" in formatters.format_enriched_company(full).splitlines()
    assert "Location: germany, hamburg" in formatters.format_enriched_company(partial).splitlines()


def test_technologies_preview_is_capped_at_ten():
    technologies = [{"technology_name": f"Tool {chr(ord('A') + i)}"} for i in range(15)]
    text = formatters.format_enriched_company(EnrichedCompany.from_dict({"technologies": technologies}))

    line = next(line for line in text.splitlines() if line.startswith("Technologies: "))
    assert line.endswith("Tool J ... and 5 more")
    assert "Tool A" in line
    assert "Tool K" not in line
    assert line.count(", ") == 9


def test_short_collection_has_no_more_suffix():
    text = formatters.format_enriched_company(EnrichedCompany.from_dict({"specialties": ["crm", "saas"]}))
    assert "Specialties: crm, saas" in text.splitlines()
    assert "more" not in text


def test_absent_fields_produce_no_lines():
    record = {
        "name": "acme",
        "overview": "",
        "industry": None,
        "website": "   ",
        "employees": {"range": None, "count": None},
        "main_location": None,
        "social": {"linkedin": None, "twitter": ""},
        "connections": {"emails": [], "phones": None},
        "technologies": [],
        "specialties": [],
    }
    text = formatters.format_enriched_company(EnrichedCompany.from_dict(record))

    assert text == "acme"
    assert "None" not in text
    assert "null" not in text


def test_empty_record_renders_nothing():
    assert formatters.format_enriched_company(EnrichedCompany.from_dict(None)) == ""
    assert formatters.format_enriched_person(EnrichedPerson.from_dict({})) == ""
    assert formatters.format_company(CompanyRecord.from_dict({})) == ""
    assert formatters.format_person(PersonRecord.from_dict({})) == ""
    assert formatters.format_local_business(LocalBusinessRecord.from_dict({})) == ""


def test_zero_counts_are_present():
    text = formatters.format_company(CompanyRecord.from_dict({"name": "tiny", "followers_count": 0}))
    assert "Followers: 0" in text.splitlines()


def test_formatting_is_idempotent(enc_payload):
    company = EnrichedCompany.from_dict(enc_payload["data"]["company"])
    assert formatters.format_enriched_company(company) == formatters.format_enriched_company(company)


def test_enriched_company_line_order(enc_payload):
    lines = formatters.format_enriched_company(EnrichedCompany.from_dict(enc_payload["data"]["company"])).splitlines()

    assert lines == [
        "cufinder",
        "Overview: B2B data enrichment platform.",
        "Industry: software development",
        "Employee Size: 11-50 (32 employees)",
        "Location: germany, hamburg, hamburg",
        "Website: https://cufinder.io",
        "Domain: cufinder.io",
        "LinkedIn: linkedin.com/company/cufinder",
        "Specialties: lead generation, data enrichment",
    ]


def test_enriched_company_accepts_flat_shape():
    flat = {
        "name": "acme",
        "description": "Anvils and more.",
        "size": "51-200",
        "employee_count": 120,
        "followers_count": 5400,
        "founded_year": 1949,
        "linkedin_url": "linkedin.com/company/acme",
        "country": "united states",
        "city": "phoenix",
        "address": "1 Desert Road",
    }
    labels = _labels(formatters.format_enriched_company(EnrichedCompany.from_dict(flat)))
    text = formatters.format_enriched_company(EnrichedCompany.from_dict(flat))

    assert "Overview: Anvils and more." in text
    assert "Employee Size: 51-200 (120 employees)" in text
    assert "Followers: 5400" in text
    assert "Founded: 1949" in text
    assert "Location: united states, phoenix" in text
    assert "Address: 1 Desert Road" in text
    assert "LinkedIn" in labels


def test_enriched_company_funding_and_flags():
    company = EnrichedCompany.from_dict({
        "name": "fundco",
        "is_school": False,
        "is_investor": True,
        "funding": {
            "number_of_rounds": 3,
            "last_round_type": "series_b",
            "last_round_money_raised_amount": "25000000",
            "last_round_money_raised_amount_currency_code": "USD",
        },
    })
    lines = formatters.format_enriched_company(company).splitlines()

    assert "Investor: yes" in lines
    assert not any(line.startswith("School:") for line in lines)
    assert "Funding Rounds: 3" in lines
    assert "Last Funding Round: series_b" in lines
    assert "Last Round Amount: 25000000 USD" in lines


def test_enriched_person_flat_shape_and_collections():
    person = EnrichedPerson.from_dict({
        "first_name": "jane",
        "last_name": "doe",
        "summary": "Builds data products.",
        "job_title": "head of data",
        "job_title_categories": ["engineering", "management"],
        "country": "germany",
        "city": "berlin",
        "linkedin_url": "linkedin.com/in/janedoe",
        "twitter": "x.com/janedoe",
        "email": "jane@acme.io",
        "company_name": "acme",
        "company_industry": "software development",
        "company_country": "germany",
        "company_city": "berlin",
        "company_linkedin": "linkedin.com/company/acme",
        "skills": [f"skill{n:02d}" for n in range(12)],
        "experiences": [
            {"title": "head of data", "company_name": "acme", "start_date": "2021"},
            {"title": "analyst", "company_name": "beta", "start_date": "2017", "end_date": "2021"},
        ],
        "educations": [
            {"school": "tu berlin", "degree": "msc", "field_of_study": "statistics"},
            {"school": "a"}, {"school": "b"}, {"school": "c"},
        ],
        "certifications": [{"name": "aws data analytics", "authority": "amazon"}],
    })
    text = formatters.format_enriched_person(person)
    lines = text.splitlines()

    assert lines[0] == "jane doe"
    assert "Job Title Categories: engineering, management" in lines
    assert "Location: germany, berlin" in lines
    assert "LinkedIn: linkedin.com/in/janedoe" in lines
    assert "X (Twitter): x.com/janedoe" in lines
    assert "Emails: jane@acme.io" in lines
    assert "Company: acme" in lines
    assert "Company Location: germany, berlin" in lines
    assert "Company LinkedIn: linkedin.com/company/acme" in lines
    assert "Skills: " + ", ".join(f"skill{n:02d}" for n in range(10)) + " ... and 2 more" in lines
    assert "  - head of data at acme (2021 - present)" in lines
    assert "  - analyst at beta (2017 - 2021)" in lines
    assert "  - tu berlin - msc, statistics" in lines
    assert "  ... and 1 more" in lines
    assert "  - aws data analytics (amazon)" in lines
    assert lines.index("Summary: Builds data products.") < lines.index("Job Title: head of data")
    assert lines.index("Location: germany, berlin") < lines.index("LinkedIn: linkedin.com/in/janedoe")


def test_company_search_record():
    record = CompanyRecord.from_dict({
        "name": "acme",
        "overview": "Anvils.",
        "type": "privately held",
        "industry": "manufacturing",
        "employees": {"range": "51-200"},
        "main_location": {"country": "united states", "state": "arizona", "city": None, "address": "1 Desert Road"},
        "social": {"facebook": "facebook.com/acme", "twitter": None},
    })
    assert formatters.format_company(record).splitlines() == [
        "acme",
        "Overview: Anvils.",
        "Type: privately held",
        "Industry: manufacturing",
        "Employee Size: 51-200",
        "Location: united states, arizona",
        "Address: 1 Desert Road",
        "Facebook: facebook.com/acme",
    ]


def test_person_search_record():
    record = PersonRecord.from_dict({
        "full_name": "john smith",
        "current_job": {"title": "cto"},
        "location": {"country": "canada", "state": None, "city": "toronto"},
        "social": {"linkedin": "linkedin.com/in/jsmith"},
        "company": {
            "name": "northwind",
            "website": "northwind.ca",
            "industry": "logistics",
            "main_location": {"country": "canada"},
            "social": {"linkedin": None},
        },
    })
    assert formatters.format_person(record).splitlines() == [
        "john smith",
        "Job Title: cto",
        "Location: canada, toronto",
        "LinkedIn: linkedin.com/in/jsmith",
        "Company: northwind",
        "Company Industry: logistics",
        "Company Location: canada",
        "Company Website: northwind.ca",
    ]


def test_local_business_twitter_uses_its_own_field():
    record = LocalBusinessRecord.from_dict({
        "name": "joe's diner",
        "industry": "restaurants",
        "industry_details": {"level_1": "food", "naics_code": "722511"},
        "geo_location": {"rating": 4.6, "reviews_count": 321},
        "main_location": {"country": "united states", "state": "texas", "city": "austin"},
        "social": {"linkedin": "linkedin.com/company/joes", "twitter": None, "instagram": "instagram.com/joes"},
        "connections": {"emails": ["hi@joes.com"], "phones": ["+1 512 555 0100", "+1 512 555 0101"]},
    })
    lines = formatters.format_local_business(record).splitlines()

    assert lines == [
        "joe's diner",
        "Industry: restaurants",
        "Industry Category: food",
        "NAICS Code: 722511",
        "Google Maps Rating: 4.6",
        "Google Maps Reviews: 321",
        "Location: united states, texas, austin",
        "LinkedIn: linkedin.com/company/joes",
        "Instagram: instagram.com/joes",
        "Emails: hi@joes.com",
        "Phones: +1 512 555 0100, +1 512 555 0101",
    ]


def test_render_single_header():
    response = ProviderResponse(status=1, data={"query": "cufinder", "credit_count": 9921, "confidence_level": 95})
    text = formatters.render_single("Company Enrichment Result", response, "cufinder\nWebsite: https://cufinder.io")

    assert text.splitlines() == [
        "🔍 Company Enrichment Result",
        "Query: cufinder",
        "Credits Used: 9921",
        "Confidence Level: 95",
        "",
        "cufinder",
        "Website: https://cufinder.io",
    ]


def test_render_many_numbers_records_and_separates_them():
    response = ProviderResponse(status=1, data={"query": {"industry": "retail", "page": 1}, "credit_count": 40})
    text = formatters.render_many("Company Search Results", response, ["alpha\nIndustry: retail", "beta"], "companies")

    assert text.splitlines() == [
        "🔍 Company Search Results",
        'Query: {"industry": "retail", "page": 1}',
        "Credits Used: 40",
        "Found: 2 companies",
        "",
        "1. alpha",
        "Industry: retail",
        "",
        "2. beta",
    ]


def test_render_many_without_records():
    response = ProviderResponse(status=-1, data={})
    assert formatters.render_many("Person Search Results", response, [], "people").splitlines() == [
        "🔍 Person Search Results",
        "Found: 0 people",
    ]
