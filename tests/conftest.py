import pytest

from cufinder_mcp.core.client import CufinderClient
from cufinder_mcp.core.config import Settings
from cufinder_mcp.core.gateway import ToolGateway


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ""
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class DummySession:
    """Records every POST and replays a canned response (or raises an error)."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.response = DummyResponse(payload={"status": 1, "data": {}})
        self.error = None
        self.closed = False

    def post(self, url, headers=None, timeout=None, data=None, json=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout, "data": data, "json": json})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def settings():
    return Settings(api_key="test-key", base_url="https://api.example.test/v2")


@pytest.fixture
def session():
    return DummySession()


@pytest.fixture
def client(settings, session):
    return CufinderClient(settings, session=session)


@pytest.fixture
def gateway(client):
    return ToolGateway(client)


@pytest.fixture
def enc_payload():
    return {
        "status": 1,
        "data": {
            "confidence_level": 95,
            "query": "cufinder",
            "company": {
                "name": "cufinder",
                "website": "https://cufinder.io",
                "domain": "cufinder.io",
                "industry": "software development",
                "overview": "B2B data enrichment platform.",
                "employees": {"range": "11-50", "count": 32},
                "main_location": {"country": "germany", "state": "hamburg", "city": "hamburg", "address": None},
                "social": {"linkedin": "linkedin.com/company/cufinder", "twitter": None, "facebook": ""},
                "connections": {"emails": [], "phones": []},
                "technologies": [],
                "specialties": ["lead generation", "data enrichment"],
            },
            "credit_count": 9921,
        },
    }
