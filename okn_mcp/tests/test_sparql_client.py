"""Test cases for execute_sparql_query against stubbed endpoints."""

import asyncio

import httpx
import pytest

from okn_mcp.tools.errors import (
    HttpError,
    ParseError,
    QueryTimeoutError,
    TransportError,
    ValidationError,
)
from okn_mcp.tools.sparql_client import DEFAULT_TIMEOUT_MS, execute_sparql_query

ENDPOINT = "https://example.org/sparql"
QUERY = "SELECT ?s WHERE {?s ?p ?o} LIMIT 1"
PAYLOAD = {
    "head": {"vars": ["s"]},
    "results": {"bindings": [{"s": {"type": "uri", "value": "http://example.org/x"}}]},
}


class TestExecuteSparqlQuery:
    """Test cases for the query executor."""

    def test_default_timeout(self):
        assert DEFAULT_TIMEOUT_MS == 30_000

    @pytest.mark.asyncio
    async def test_success_returns_payload(self):
        """Test a 2xx JSON answer is returned as-is."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=PAYLOAD)

        data = await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

        assert data == PAYLOAD
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_request_wire_format(self):
        """Test the query is POSTed raw with SPARQL content negotiation headers."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["accept"] = request.headers["accept"]
            seen["body"] = request.content.decode("utf-8")
            return httpx.Response(200, json=PAYLOAD)

        await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

        assert seen == {
            "method": "POST",
            "url": ENDPOINT,
            "content_type": "application/sparql-query",
            "accept": "application/sparql-results+json",
            "body": QUERY,
        }

    @pytest.mark.asyncio
    async def test_non_2xx_raises_http_error(self):
        """Test an error status carries the code and the body text."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="Parse error: unexpected token")

        with pytest.raises(HttpError) as exc_info:
            await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "Parse error: unexpected token"
        assert str(exc_info.value) == "HTTP 400: Parse error: unexpected token"

    @pytest.mark.asyncio
    async def test_unresponsive_endpoint_times_out(self):
        """Test a hanging endpoint is cancelled once the deadline passes."""
        cancelled = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return httpx.Response(200, json=PAYLOAD)

        with pytest.raises(QueryTimeoutError) as exc_info:
            await execute_sparql_query(
                ENDPOINT, QUERY, timeout_ms=50, transport=httpx.MockTransport(handler)
            )

        assert "50" in str(exc_info.value)
        assert exc_info.value.timeout_ms == 50
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self):
        """Test network failures are wrapped with their cause."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        with pytest.raises(TransportError) as exc_info:
            await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert "Name or service not known" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unparseable_body_raises_parse_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(ParseError):
            await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_non_object_json_raises_parse_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "a", "results", "object"])

        with pytest.raises(ParseError, match="JSON object"):
            await execute_sparql_query(ENDPOINT, QUERY, transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_concurrent_calls_time_out_independently(self):
        """Test a slow call does not delay or cancel a fast one."""
        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/slow/sparql":
                await asyncio.sleep(10)
            return httpx.Response(200, json=PAYLOAD)

        transport = httpx.MockTransport(handler)
        slow, fast = await asyncio.gather(
            execute_sparql_query("https://example.org/slow/sparql", QUERY, timeout_ms=100, transport=transport),
            execute_sparql_query("https://example.org/fast/sparql", QUERY, timeout_ms=5000, transport=transport),
            return_exceptions=True,
        )

        assert isinstance(slow, QueryTimeoutError)
        assert fast == PAYLOAD

    @pytest.mark.asyncio
    async def test_unencodable_query_is_validation_error(self):
        """Test a query with a lone surrogate is rejected before any request."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=PAYLOAD)

        with pytest.raises(ValidationError, match="UTF-8"):
            await execute_sparql_query(ENDPOINT, "SELECT ?s WHERE { ?s ?p \"\ud800\" }",
                                       transport=httpx.MockTransport(handler))

        assert requests == []
