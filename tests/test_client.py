import pytest
import requests

from cufinder_mcp.core.errors import ProviderError, TransportError
from cufinder_mcp.core.models import Encoding

from conftest import DummyResponse


def test_session_carries_api_key_and_user_agent(client, session):
    assert session.headers["x-api-key"] == "test-key"
    assert session.headers["User-Agent"] == "cufinder-mcp/1.0.0"
    assert session.headers["Accept"] == "application/json"


def test_form_request(client, session):
    session.response = DummyResponse(payload={"status": 1, "data": {"query": "cufinder", "credit_count": 10}})

    response = client.send("/enc", {"query": "cufinder"}, Encoding.FORM)

    call = session.last_call
    assert call["url"] == "https://api.example.test/v2/enc"
    assert call["data"] == {"query": "cufinder"}
    assert call["json"] is None
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert call["timeout"] == 60.0
    assert response.matched
    assert response.query == "cufinder"
    assert response.credit_count == 10


def test_json_request(client, session):
    client.send("/cse", {"industry": "software development", "page": 2}, Encoding.JSON)

    call = session.last_call
    assert call["url"] == "https://api.example.test/v2/cse"
    assert call["json"] == {"industry": "software development", "page": 2}
    assert call["data"] is None
    assert call["headers"]["Content-Type"] == "application/json"


def test_no_match_is_not_an_error(client, session):
    session.response = DummyResponse(payload={"status": -1, "data": {"query": "nobody"}})

    response = client.send("/tep", {"full_name": "nobody", "company": "nowhere"})

    assert response.no_match
    assert not response.matched


def test_timeout_raises_transport_error(client, session):
    session.error = requests.Timeout("read timed out")

    with pytest.raises(TransportError, match="timed out after 60s"):
        client.send("/enc", {"query": "slow"})


def test_connection_error_raises_transport_error(client, session):
    session.error = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError, match="connection refused"):
        client.send("/enc", {"query": "down"})


def test_non_2xx_raises_provider_error_with_message(client, session):
    session.response = DummyResponse(status_code=401, payload={"message": "Invalid API key"}, reason="Unauthorized")

    with pytest.raises(ProviderError) as excinfo:
        client.send("/enc", {"query": "cufinder"})

    assert excinfo.value.status_code == 401
    assert str(excinfo.value) == "HTTP 401: Invalid API key"


def test_non_2xx_falls_back_to_body_text(client, session):
    session.response = DummyResponse(status_code=502, text="Bad Gateway from upstream", reason="Bad Gateway")

    with pytest.raises(ProviderError, match="HTTP 502: Bad Gateway from upstream"):
        client.send("/cse", {}, Encoding.JSON)


def test_non_json_success_body_raises_provider_error(client, session):
    session.response = DummyResponse(status_code=200, text="<html>maintenance</html>")

    with pytest.raises(ProviderError, match="non-JSON"):
        client.send("/cse", {}, Encoding.JSON)


def test_non_object_json_raises_provider_error(client, session):
    session.response = DummyResponse(payload=["unexpected"])

    with pytest.raises(ProviderError, match="unexpected JSON body"):
        client.send("/pse", {}, Encoding.JSON)


def test_context_manager_closes_session(client, session):
    with client:
        pass
    assert session.closed


@pytest.mark.parametrize(
    "payload",
    [
        {"error": "upstream exploded"},
        {"status": 1},
        {"status": 1, "data": None},
        {"status": 0, "data": {}},
        {"status": True, "data": {}},
        {"data": {"query": "cufinder"}},
    ],
)
def test_success_without_envelope_raises_provider_error(client, session, payload):
    session.response = DummyResponse(payload=payload)

    with pytest.raises(ProviderError, match="/enc returned no status/data envelope"):
        client.send("/enc", {"query": "cufinder"})
