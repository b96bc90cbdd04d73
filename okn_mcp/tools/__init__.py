"""Tools module for the OKN MCP server."""

from .catalog import build_tool_catalog, resolve_tool, verify_tool_names
from .dispatcher import ResponseEnvelope, ToolDispatcher
from .endpoints import FRINK_REGISTRY, EndpointDescriptor, EndpointRegistry
from .format_results import format_results
from .sparql_client import execute_sparql_query

__all__ = [
    'build_tool_catalog',
    'resolve_tool',
    'verify_tool_names',
    'ResponseEnvelope',
    'ToolDispatcher',
    'FRINK_REGISTRY',
    'EndpointDescriptor',
    'EndpointRegistry',
    'format_results',
    'execute_sparql_query',
]
