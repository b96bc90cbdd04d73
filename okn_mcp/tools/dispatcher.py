"""Dispatch of MCP tool calls to knowledge graph queries."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from mcp import types

from .catalog import (
    FederatedQueryTool,
    GraphQueryTool,
    ListGraphsTool,
    UnknownTool,
    resolve_tool,
)
from .endpoints import EndpointRegistry
from .errors import NotFoundError, OKNToolError, UnknownToolError, ValidationError
from .format_results import render_query_response
from .sparql_client import DEFAULT_TIMEOUT_MS, execute_sparql_query

logger = logging.getLogger(__name__)

QueryExecutor = Callable[..., Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform result of a tool call, for both success and failure."""
    text: str
    is_error: bool = False

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type='text', text=self.text)],
            isError=self.is_error,
        )


def _require_query(arguments: Optional[Dict[str, Any]]) -> str:
    query = (arguments or {}).get('query')
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Missing required argument 'query' (a non-empty SPARQL query string)")
    return query


class ToolDispatcher:
    """Resolves tool calls against a registry and runs the remote queries."""

    def __init__(
        self,
        registry: EndpointRegistry,
        executor: QueryExecutor = execute_sparql_query,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        self.registry = registry
        self.executor = executor
        self.timeout_ms = timeout_ms

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ResponseEnvelope:
        """Run one tool call.

        Never raises: every failure becomes an envelope with is_error set.

        Args:
            name: Tool name as sent by the client
            arguments: Tool arguments, may be None

        Returns:
            The response envelope
        """
        try:
            return await self._dispatch(name, arguments)
        except OKNToolError as e:
            logger.error(f'Tool {name} failed: {e}')
            return ResponseEnvelope(text=f'Error: {e.kind}: {e}', is_error=True)
        except Exception as e:
            logger.error(f'Unexpected error in tool {name}: {e}', exc_info=True)
            return ResponseEnvelope(text=f'Error: Unexpected failure: {e}', is_error=True)

    async def _dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> ResponseEnvelope:
        resolved = resolve_tool(name)

        if isinstance(resolved, ListGraphsTool):
            return ResponseEnvelope(text=json.dumps(self.registry.as_listing(), indent=2))

        if isinstance(resolved, FederatedQueryTool):
            query = _require_query(arguments)
            data = await self.executor(self.registry.federated_url, query, timeout_ms=self.timeout_ms)
            return ResponseEnvelope(text=render_query_response('Federated Query Results', data))

        if isinstance(resolved, GraphQueryTool):
            entry = self.registry.get(resolved.identifier)
            if entry is None:
                raise NotFoundError(f'Unknown knowledge graph: {resolved.identifier}')
            query = _require_query(arguments)
            data = await self.executor(entry.url, query, timeout_ms=self.timeout_ms)
            return ResponseEnvelope(
                text=render_query_response(f'Query Results from {entry.identifier}', data)
            )

        assert isinstance(resolved, UnknownTool)
        raise UnknownToolError(f'No tool named {resolved.name!r}')
