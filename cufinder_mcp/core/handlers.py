# =============================================================================
# core/handlers.py  —  One Handler per Operation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Pairs each Operation with everything needed to serve it:
#     - the provider endpoint and its body encoding
#     - where the records live in the response (data.company, data.peoples...)
#     - how to parse them and which formatter renders them
#     - the header label and the verb used in failure messages
#
# HOW A CALL FLOWS (handle()):
#   1. Forward the validated arguments verbatim to the provider
#   2. Pull the record (or list of records) out of response.data
#   3. Render each record with the operation's formatter
#   4. Prepend the header (label, echoed query, credits)
#   Any GatewayError along the way becomes
#   OperationError("Failed to <action>: <cause>").
#
# NO-MATCH RESPONSES:
#   status == -1 is a well-formed "nothing found".  It is logged and then
#   formatted like any other response (usually an empty record or list).
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable

from cufinder_mcp.core import formatters
from cufinder_mcp.core.client import CufinderClient
from cufinder_mcp.core.errors import GatewayError, OperationError, ProviderError
from cufinder_mcp.core.models import (
    CompanyRecord,
    Encoding,
    EnrichedCompany,
    EnrichedPerson,
    FormattedResult,
    LocalBusinessRecord,
    Operation,
    PersonRecord,
    ProviderResponse,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Handler:
    """Static description of how one operation is served."""

    operation: Operation
    endpoint: str
    encoding: Encoding
    label: str
    action: str                         # "Failed to <action>: ..."
    record_key: str
    parse: Callable[[Any], Any]
    format: Callable[[Any], str]
    many: bool = False
    noun: str = "results"
    fallback_keys: tuple[str, ...] = ()

    def extract(self, response: ProviderResponse) -> Any:
        """Pull the raw record payload out of ``response.data``."""
        for key in (self.record_key, *self.fallback_keys):
            if response.data.get(key) is not None:
                payload = response.data[key]
                break
        else:
            payload = None

        if not self.many:
            return payload
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ProviderError(f"expected a list under '{self.record_key}' in {self.endpoint} response")
        return payload

    def render(self, response: ProviderResponse) -> str:
        payload = self.extract(response)
        if self.many:
            blocks = [self.format(self.parse(item)) for item in payload]
            return formatters.render_many(self.label, response, blocks, self.noun)
        return formatters.render_single(self.label, response, self.format(self.parse(payload)))


HANDLERS: dict[Operation, Handler] = {
    Operation.FIND_BUSINESS: Handler(
        operation=Operation.FIND_BUSINESS,
        endpoint="/enc",
        encoding=Encoding.FORM,
        label="Company Enrichment Result",
        action="enrich company",
        record_key="company",
        parse=EnrichedCompany.from_dict,
        format=formatters.format_enriched_company,
    ),
    Operation.FIND_PERSON: Handler(
        operation=Operation.FIND_PERSON,
        endpoint="/tep",
        encoding=Encoding.FORM,
        label="Person Enrichment Result",
        action="enrich person",
        record_key="person",
        parse=EnrichedPerson.from_dict,
        format=formatters.format_enriched_person,
    ),
    Operation.SEARCH_BUSINESSES: Handler(
        operation=Operation.SEARCH_BUSINESSES,
        endpoint="/cse",
        encoding=Encoding.JSON,
        label="Company Search Results",
        action="search companies",
        record_key="companies",
        parse=CompanyRecord.from_dict,
        format=formatters.format_company,
        many=True,
        noun="companies",
    ),
    Operation.SEARCH_PERSONS: Handler(
        operation=Operation.SEARCH_PERSONS,
        endpoint="/pse",
        encoding=Encoding.JSON,
        label="Person Search Results",
        action="search people",
        record_key="peoples",
        parse=PersonRecord.from_dict,
        format=formatters.format_person,
        many=True,
        noun="people",
    ),
    Operation.SEARCH_LOCAL_BUSINESSES: Handler(
        operation=Operation.SEARCH_LOCAL_BUSINESSES,
        endpoint="/lbs",
        encoding=Encoding.JSON,
        label="Local Business Search Results",
        action="search local businesses",
        record_key="businesses",
        fallback_keys=("companies",),
        parse=LocalBusinessRecord.from_dict,
        format=formatters.format_local_business,
        many=True,
        noun="businesses",
    ),
}


def get_handler(operation: Operation) -> Handler:
    return HANDLERS[operation]


def handle(operation: Operation, arguments: dict[str, Any], client: CufinderClient) -> FormattedResult:
    """Run one operation end to end and return its rendered text.

    Args:
        operation: Which tool is being served.
        arguments: Validated arguments, forwarded to the provider unchanged.
        client: The CUFinder HTTP client.

    Raises:
        OperationError: if the provider call or response extraction fails.
    """
    handler = get_handler(operation)
    try:
        response = client.send(handler.endpoint, arguments, handler.encoding)
        if response.no_match:
            logger.info("%s: provider reported no match for %s", operation.value, sorted(arguments))
        text = handler.render(response)
    except GatewayError as exc:
        raise OperationError(handler.action, exc) from exc
    return FormattedResult(text=text)
