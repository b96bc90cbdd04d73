"""Outbound SPARQL requests with a per-call deadline."""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import HttpError, ParseError, QueryTimeoutError, TransportError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000

SPARQL_QUERY_HEADERS = {
    'Content-Type': 'application/sparql-query',
    'Accept': 'application/sparql-results+json',
}


async def execute_sparql_query(
    endpoint: str,
    query: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Execute a SPARQL query against a single endpoint.

    The query text is sent unmodified as the POST body. The whole exchange,
    including reading the response body, runs under one deadline; when it
    passes, the pending request is cancelled and the client is closed.

    Args:
        endpoint: SPARQL endpoint URL
        query: SPARQL query text
        timeout_ms: Deadline for the request in milliseconds
        transport: Optional httpx transport, used to stub endpoints

    Returns:
        The decoded SPARQL JSON results payload

    Raises:
        QueryTimeoutError: If the deadline passes before a response arrives
        HttpError: If the endpoint answers with a non-2xx status
        TransportError: On connection-level failures
        ValidationError: If the query cannot be encoded as UTF-8
        ParseError: If a 2xx body is not a JSON object
    """
    try:
        body = query.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValidationError(f'Query is not valid UTF-8 text: {e}') from e

    logger.debug(f'POST {endpoint} (timeout {timeout_ms}ms)')

    # httpx's own timeouts are disabled; the deadline below governs the call.
    async with httpx.AsyncClient(transport=transport, timeout=None) as client:
        try:
            response = await asyncio.wait_for(
                client.post(endpoint, content=body, headers=SPARQL_QUERY_HEADERS),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            raise QueryTimeoutError(timeout_ms) from None
        except httpx.RequestError as e:
            raise TransportError(f'Request to {endpoint} failed: {e!r}') from e

    if not response.is_success:
        raise HttpError(response.status_code, response.text)

    try:
        data = response.json()
    except ValueError as e:
        raise ParseError(f'Invalid JSON from {endpoint}: {e}') from e

    if not isinstance(data, dict):
        raise ParseError(f'Expected a JSON object from {endpoint}, got {type(data).__name__}')

    logger.debug(f'{endpoint} answered with status {response.status_code}')
    return data
