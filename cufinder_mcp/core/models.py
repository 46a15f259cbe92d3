# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through the
# gateway: the tool definitions a host discovers, the invocation it sends,
# the provider's JSON envelope, the company/person/local-business records
# inside it, and the text result that goes back.
#
# DOMAIN RECORDS — "Everything Is Optional":
#   CUFinder returns sparse records.  A company may have a name and nothing
#   else; a person may have no location at all.  Every field below is
#   therefore Optional (or an empty list), every nested record tolerates a
#   missing or null sub-object, and unknown keys are ignored.  The
#   formatters rely on this: they never check "does this key exist", only
#   "is this value present".
#
# TWO RESPONSE SHAPES:
#   The enrichment endpoints have returned both a nested shape
#   (main_location / social / employees objects) and a flat one
#   (country / linkedin_url / size keys on the record itself).  The
#   from_dict() constructors accept either.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Parsing helpers
# -----------------------------------------------------------------------------
def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _first(data: dict, *keys: str) -> Any:
    """Return the first non-null value among ``keys``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _strings(value: Any) -> list[str]:
    """Coerce a provider list (or a lone string) into a list of strings."""
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return []


def _records(record_type, value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [record_type.from_dict(item) for item in value if isinstance(item, dict)]


# =============================================================================
# Catalog & protocol models
# =============================================================================
class Operation(Enum):
    """The five operations the gateway exposes; the value is the tool name."""

    FIND_BUSINESS = "find_business"
    FIND_PERSON = "find_person"
    SEARCH_BUSINESSES = "search_businesses"
    SEARCH_PERSONS = "search_persons"
    SEARCH_LOCAL_BUSINESSES = "search_local_businesses"


class Encoding(Enum):
    """Request body encoding expected by a provider endpoint."""

    FORM = "application/x-www-form-urlencoded"
    JSON = "application/json"


@dataclass(frozen=True)
class FieldSpec:
    """One input field of a tool: JSON type, description, required flag."""

    name: str
    type: str                          # "string" | "integer" | "number" | "boolean" | "array"
    description: str
    required: bool = False
    items: Optional[str] = None        # element type for arrays

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.type == "array":
            schema["items"] = {"type": self.items or "string"}
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A tool as the host discovers it: name, description, input contract."""

    name: str
    operation: Operation
    description: str
    fields: tuple[FieldSpec, ...] = ()

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def input_schema(self) -> dict[str, Any]:
        """The JSON-Schema object advertised to hosts for this tool."""
        return {
            "type": "object",
            "properties": {spec.name: spec.to_schema() for spec in self.fields},
            "required": list(self.required),
            "additionalProperties": False,
        }


@dataclass
class InvocationRequest:
    """One incoming tool call; arguments are untyped until validated."""

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProviderResponse:
    """The provider's JSON envelope: {status, data: {query, credit_count, ...}}."""

    status: Optional[int]
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProviderResponse":
        return cls(status=payload.get("status"), data=_mapping(payload.get("data")))

    @property
    def matched(self) -> bool:
        return self.status == 1

    @property
    def no_match(self) -> bool:
        return self.status == -1

    @property
    def query(self) -> Any:
        return self.data.get("query")

    @property
    def credit_count(self) -> Any:
        return self.data.get("credit_count")

    @property
    def confidence_level(self) -> Any:
        return self.data.get("confidence_level")


@dataclass(frozen=True)
class FormattedResult:
    """Rendered, human-readable text for one invocation."""

    text: str


@dataclass(frozen=True)
class ToolResult:
    """What the host receives: text content plus an error flag."""

    text: str
    is_error: bool = False

    @property
    def content(self) -> list[dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "is_error": self.is_error}


# =============================================================================
# Shared nested records
# =============================================================================
@dataclass
class Location:
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Location":
        data = _mapping(data)
        return cls(
            country=data.get("country"),
            state=data.get("state"),
            city=data.get("city"),
            address=_first(data, "address", "line1"),
            postal_code=data.get("postal_code"),
        )


@dataclass
class Social:
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    youtube: Optional[str] = None
    github: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Social":
        data = _mapping(data)
        return cls(
            linkedin=_first(data, "linkedin", "linkedin_url"),
            twitter=_first(data, "twitter", "twitter_url"),
            facebook=_first(data, "facebook", "facebook_url"),
            instagram=data.get("instagram"),
            youtube=data.get("youtube"),
            github=_first(data, "github", "github_url"),
        )


@dataclass
class Connections:
    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Connections":
        data = _mapping(data)
        return cls(
            emails=_strings(_first(data, "emails", "email")),
            phones=_strings(_first(data, "phones", "phone")),
        )


@dataclass
class GeoLocation:
    google_maps_id: Optional[str] = None
    rating: Optional[float] = None
    reviews_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "GeoLocation":
        data = _mapping(data)
        return cls(
            google_maps_id=data.get("google_maps_id"),
            rating=data.get("rating"),
            reviews_count=data.get("reviews_count"),
        )


@dataclass
class IndustryDetails:
    level_1: Optional[str] = None      # category
    level_2: Optional[str] = None      # top category
    naics_code: Optional[str] = None
    sic_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "IndustryDetails":
        data = _mapping(data)
        return cls(
            level_1=data.get("level_1"),
            level_2=data.get("level_2"),
            naics_code=data.get("naics_code"),
            sic_code=data.get("sic_code"),
        )


@dataclass
class Employees:
    range: Optional[str] = None        # e.g. "51-200"
    count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Employees":
        data = _mapping(data)
        return cls(range=_first(data, "range", "size"), count=_first(data, "count", "employee_count"))


@dataclass
class Funding:
    number_of_rounds: Optional[int] = None
    last_round_type: Optional[str] = None
    last_round_money_raised_amount: Optional[str] = None
    last_round_money_raised_amount_currency_code: Optional[str] = None
    last_round_investors: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Funding":
        data = _mapping(data)
        return cls(
            number_of_rounds=data.get("number_of_rounds"),
            last_round_type=data.get("last_round_type"),
            last_round_money_raised_amount=data.get("last_round_money_raised_amount"),
            last_round_money_raised_amount_currency_code=data.get(
                "last_round_money_raised_amount_currency_code"
            ),
            last_round_investors=data.get("last_round_investors"),
        )


@dataclass
class Technology:
    technology_name: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Technology":
        data = _mapping(data)
        return cls(technology_name=_first(data, "technology_name", "name"), category=data.get("category"))


# =============================================================================
# Search records (search_businesses / search_persons / search_local_businesses)
# =============================================================================
@dataclass
class CompanyRecord:
    """One hit from the company search endpoint (/cse)."""

    name: Optional[str] = None
    overview: Optional[str] = None
    type: Optional[str] = None
    industry: Optional[str] = None
    employees: Employees = field(default_factory=Employees)
    followers_count: Optional[int] = None
    annual_revenue: Optional[str] = None
    founded_year: Optional[str] = None
    main_location: Location = field(default_factory=Location)
    website: Optional[str] = None
    domain: Optional[str] = None
    social: Social = field(default_factory=Social)

    @classmethod
    def from_dict(cls, data: Any) -> "CompanyRecord":
        data = _mapping(data)
        return cls(
            name=data.get("name"),
            overview=_first(data, "overview", "description"),
            type=data.get("type"),
            industry=data.get("industry"),
            employees=Employees.from_dict(data.get("employees")),
            followers_count=_first(data, "followers_count", "followers"),
            annual_revenue=data.get("annual_revenue"),
            founded_year=_first(data, "founded_year", "founded_date"),
            main_location=Location.from_dict(data.get("main_location")),
            website=data.get("website"),
            domain=data.get("domain"),
            social=Social.from_dict(data.get("social")),
        )


@dataclass
class CompanyRef:
    """The employer attached to a person record."""

    name: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    website: Optional[str] = None
    main_location: Location = field(default_factory=Location)
    social: Social = field(default_factory=Social)

    @classmethod
    def from_dict(cls, data: Any) -> "CompanyRef":
        data = _mapping(data)
        return cls(
            name=data.get("name"),
            industry=data.get("industry"),
            size=_first(data, "size", "employee_size"),
            website=data.get("website"),
            main_location=Location.from_dict(data.get("main_location") or data),
            social=Social.from_dict(data.get("social") or data),
        )

    @classmethod
    def from_prefixed(cls, data: Any) -> "CompanyRef":
        """Build from flat ``company_*`` keys (company_name, company_city, ...)."""
        data = _mapping(data)
        prefix = "company_"
        return cls.from_dict({key[len(prefix):]: value for key, value in data.items() if key.startswith(prefix)})


@dataclass
class PersonRecord:
    """One hit from the person search endpoint (/pse)."""

    full_name: Optional[str] = None
    job_title: Optional[str] = None
    job_title_role: Optional[str] = None
    job_title_level: Optional[str] = None
    location: Location = field(default_factory=Location)
    social: Social = field(default_factory=Social)
    company: CompanyRef = field(default_factory=CompanyRef)

    @classmethod
    def from_dict(cls, data: Any) -> "PersonRecord":
        data = _mapping(data)
        current_job = _mapping(data.get("current_job"))
        return cls(
            full_name=data.get("full_name"),
            job_title=_first(current_job, "title") or data.get("job_title"),
            job_title_role=_first(current_job, "role") or data.get("job_title_role"),
            job_title_level=_first(current_job, "level") or data.get("job_title_level"),
            location=Location.from_dict(data.get("location")),
            social=Social.from_dict(data.get("social")),
            company=CompanyRef.from_dict(data.get("company")),
        )


@dataclass
class LocalBusinessRecord:
    """One hit from the local business search endpoint (/lbs)."""

    name: Optional[str] = None
    overview: Optional[str] = None
    industry: Optional[str] = None
    industry_details: IndustryDetails = field(default_factory=IndustryDetails)
    geo_location: GeoLocation = field(default_factory=GeoLocation)
    main_location: Location = field(default_factory=Location)
    website: Optional[str] = None
    domain: Optional[str] = None
    social: Social = field(default_factory=Social)
    connections: Connections = field(default_factory=Connections)

    @classmethod
    def from_dict(cls, data: Any) -> "LocalBusinessRecord":
        data = _mapping(data)
        return cls(
            name=data.get("name"),
            overview=_first(data, "overview", "description"),
            industry=data.get("industry"),
            industry_details=IndustryDetails.from_dict(data.get("industry_details")),
            geo_location=GeoLocation.from_dict(data.get("geo_location")),
            main_location=Location.from_dict(data.get("main_location")),
            website=data.get("website"),
            domain=data.get("domain"),
            social=Social.from_dict(data.get("social")),
            connections=Connections.from_dict(data.get("connections")),
        )


# =============================================================================
# Enrichment records (find_business / find_person)
# =============================================================================
@dataclass
class EnrichedCompany:
    """The single, detailed company record returned by /enc."""

    name: Optional[str] = None
    overview: Optional[str] = None
    type: Optional[str] = None
    industry: Optional[str] = None
    industry_details: IndustryDetails = field(default_factory=IndustryDetails)
    employees: Employees = field(default_factory=Employees)
    followers_count: Optional[int] = None
    annual_revenue: Optional[str] = None
    funding: Funding = field(default_factory=Funding)
    founded: Optional[str] = None
    is_school: Optional[bool] = None
    is_investor: Optional[bool] = None
    main_location: Location = field(default_factory=Location)
    locations: list[Location] = field(default_factory=list)
    website: Optional[str] = None
    domain: Optional[str] = None
    social: Social = field(default_factory=Social)
    connections: Connections = field(default_factory=Connections)
    technologies: list[Technology] = field(default_factory=list)
    specialties: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EnrichedCompany":
        data = _mapping(data)
        return cls(
            name=data.get("name"),
            overview=_first(data, "overview", "description"),
            type=data.get("type"),
            industry=data.get("industry"),
            industry_details=IndustryDetails.from_dict(data.get("industry_details")),
            employees=Employees.from_dict(data.get("employees") or data),
            followers_count=_first(data, "followers", "followers_count"),
            annual_revenue=data.get("annual_revenue"),
            funding=Funding.from_dict(data.get("funding")),
            founded=_first(data, "founded_date", "founded_year"),
            is_school=data.get("is_school"),
            is_investor=data.get("is_investor"),
            main_location=Location.from_dict(data.get("main_location") or data),
            locations=_records(Location, data.get("locations")),
            website=data.get("website"),
            domain=data.get("domain"),
            social=Social.from_dict(data.get("social") or data),
            connections=Connections.from_dict(data.get("connections") or data),
            technologies=_records(Technology, data.get("technologies")),
            specialties=_strings(data.get("specialties")),
        )


@dataclass
class WorkExperience:
    title: Optional[str] = None
    company_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "WorkExperience":
        data = _mapping(data)
        return cls(
            title=_first(data, "title", "job_title"),
            company_name=_first(data, "company_name", "company"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )


@dataclass
class Education:
    school: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Education":
        data = _mapping(data)
        return cls(
            school=_first(data, "school", "school_name"),
            degree=data.get("degree"),
            field_of_study=_first(data, "field_of_study", "major"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )


@dataclass
class Certification:
    name: Optional[str] = None
    authority: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Certification":
        data = _mapping(data)
        return cls(name=_first(data, "name", "title"), authority=_first(data, "authority", "organization"))


@dataclass
class EnrichedPerson:
    """The single, detailed person record returned by /tep."""

    full_name: Optional[str] = None
    summary: Optional[str] = None
    job_title: Optional[str] = None
    job_title_role: Optional[str] = None
    job_title_level: Optional[str] = None
    job_title_categories: list[str] = field(default_factory=list)
    followers_count: Optional[int] = None
    experience_years: Optional[int] = None
    location: Location = field(default_factory=Location)
    social: Social = field(default_factory=Social)
    connections: Connections = field(default_factory=Connections)
    company: CompanyRef = field(default_factory=CompanyRef)
    skills: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    experiences: list[WorkExperience] = field(default_factory=list)
    educations: list[Education] = field(default_factory=list)
    certifications: list[Certification] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EnrichedPerson":
        data = _mapping(data)
        full_name = data.get("full_name")
        if not full_name:
            parts = [data.get("first_name"), data.get("last_name")]
            full_name = " ".join(str(part) for part in parts if part) or None
        company = data.get("company")
        return cls(
            full_name=full_name,
            summary=data.get("summary"),
            job_title=data.get("job_title"),
            job_title_role=data.get("job_title_role"),
            job_title_level=data.get("job_title_level"),
            job_title_categories=_strings(data.get("job_title_categories")),
            followers_count=data.get("followers_count"),
            experience_years=_first(data, "experience_years", "years_of_experience"),
            location=Location.from_dict(data.get("location") or data),
            social=Social.from_dict(data.get("social") or data),
            connections=Connections.from_dict(data),
            company=CompanyRef.from_dict(company) if isinstance(company, dict) else CompanyRef.from_prefixed(data),
            skills=_strings(data.get("skills")),
            interests=_strings(data.get("interests")),
            experiences=_records(WorkExperience, _first(data, "experiences", "experience")),
            educations=_records(Education, _first(data, "educations", "education")),
            certifications=_records(Certification, data.get("certifications")),
        )
