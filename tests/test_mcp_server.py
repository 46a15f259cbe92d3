import asyncio
import inspect

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from cufinder_mcp.core import catalog
from cufinder_mcp.core.client import CufinderClient
from cufinder_mcp.core.gateway import ToolGateway
from cufinder_mcp.tools import mcp_server

from conftest import DummyResponse, DummySession


@pytest.fixture
def fake_session(monkeypatch, settings):
    fake = DummySession()
    gateway = ToolGateway(CufinderClient(settings, session=fake))
    monkeypatch.setattr(mcp_server, "get_gateway", lambda: gateway)
    return fake


def test_every_catalog_tool_has_a_wrapper():
    assert list(mcp_server.TOOL_FUNCTIONS) == [definition.name for definition in catalog.list_tools()]


@pytest.mark.parametrize("definition", catalog.list_tools(), ids=lambda d: d.name)
def test_wrapper_signature_mirrors_catalog(definition):
    parameters = inspect.signature(mcp_server.TOOL_FUNCTIONS[definition.name]).parameters

    assert tuple(parameters) == definition.field_names
    for name, parameter in parameters.items():
        if name in definition.required:
            assert parameter.default is inspect.Parameter.empty
        else:
            assert parameter.default is None


def test_wrapper_returns_formatted_text(fake_session, enc_payload):
    fake_session.response = DummyResponse(payload=enc_payload)

    text = mcp_server.find_business("cufinder")

    assert text.startswith("🔍 Company Enrichment Result")
    assert fake_session.last_call["data"] == {"query": "cufinder"}


def test_wrapper_drops_unset_arguments(fake_session):
    mcp_server.search_businesses(country="Germany", page=2)

    assert fake_session.last_call["json"] == {"country": "Germany", "page": 2}


def test_wrapper_keeps_false_and_zero(fake_session):
    mcp_server.search_businesses(is_school=False, followers_count_min=0)

    assert fake_session.last_call["json"] == {"is_school": False, "followers_count_min": 0}


def test_error_result_raises_tool_error(fake_session):
    fake_session.response = DummyResponse(status_code=401, payload={"message": "Invalid API key"})

    with pytest.raises(ToolError, match="Error: Failed to enrich person: HTTP 401: Invalid API key"):
        mcp_server.find_person("jane doe", "acme")


def _call_over_mcp(name, arguments):
    async def run():
        async with Client(mcp_server.mcp) as client:
            return await client.call_tool_mcp(name, arguments)

    result = asyncio.run(run())
    return result.isError, result.content[0].text


def test_host_sees_unknown_tool_error(fake_session):
    is_error, text = _call_over_mcp("does_not_exist", {})

    assert is_error
    assert text == "Error: Unknown tool: does_not_exist"
    assert fake_session.calls == []


def test_host_sees_invalid_arguments_error(fake_session):
    is_error, text = _call_over_mcp("search_persons", {"bogus": 1})

    assert is_error
    assert text == "Error: Invalid arguments for search_persons: unexpected field(s): bogus"
    assert fake_session.calls == []


def test_host_sees_type_mismatch_error(fake_session):
    is_error, text = _call_over_mcp("find_business", {"query": 5})

    assert is_error
    assert text == "Error: Invalid arguments for find_business: field 'query' must be string"


def test_host_sees_handler_failure(fake_session):
    fake_session.response = DummyResponse(status_code=401, payload={"message": "Invalid API key"})

    is_error, text = _call_over_mcp("find_business", {"query": "cufinder"})

    assert is_error
    assert text == "Error: Failed to enrich company: HTTP 401: Invalid API key"


def test_host_call_succeeds(fake_session):
    fake_session.response = DummyResponse(payload={
        "status": 1,
        "data": {"query": {"country": "germany"}, "credit_count": 3, "companies": [{"name": "alpha"}]},
    })

    is_error, text = _call_over_mcp("search_businesses", {"country": "germany"})

    assert not is_error
    assert "1. alpha" in text
    assert fake_session.last_call["json"] == {"country": "germany"}
