"""Tool catalog and tool-name resolution for the OKN MCP server."""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from mcp import types

from .endpoints import EndpointRegistry

LIST_GRAPHS_TOOL = 'list_knowledge_graphs'
FEDERATED_QUERY_TOOL = 'query_federated'
FIXED_TOOLS = frozenset({LIST_GRAPHS_TOOL, FEDERATED_QUERY_TOOL})

QUERY_TOOL_PREFIX = 'query_'


@dataclass(frozen=True)
class ListGraphsTool:
    pass


@dataclass(frozen=True)
class FederatedQueryTool:
    pass


@dataclass(frozen=True)
class GraphQueryTool:
    identifier: str


@dataclass(frozen=True)
class UnknownTool:
    name: str


ResolvedTool = Union[ListGraphsTool, FederatedQueryTool, GraphQueryTool, UnknownTool]


def tool_name_for(identifier: str) -> str:
    """Return the query tool name for a knowledge graph identifier."""
    return QUERY_TOOL_PREFIX + identifier.replace('-', '_')


def identifier_for(tool_name: str) -> str:
    """Inverse of `tool_name_for`."""
    return tool_name[len(QUERY_TOOL_PREFIX):].replace('_', '-')


def resolve_tool(name: str) -> ResolvedTool:
    """Classify a tool name.

    Fixed tools win over the generated `query_<identifier>` pattern, so
    `query_federated` never resolves to a knowledge graph.
    """
    if name == LIST_GRAPHS_TOOL:
        return ListGraphsTool()
    if name == FEDERATED_QUERY_TOOL:
        return FederatedQueryTool()
    if name.startswith(QUERY_TOOL_PREFIX) and len(name) > len(QUERY_TOOL_PREFIX):
        return GraphQueryTool(identifier=identifier_for(name))
    return UnknownTool(name=name)


def verify_tool_names(registry: EndpointRegistry) -> None:
    """Check that every registry entry maps to a unique, reversible tool name.

    Raises:
        ValueError: If a generated name does not map back to its identifier
            or collides with another tool
    """
    seen = set(FIXED_TOOLS)
    for entry in registry:
        name = tool_name_for(entry.identifier)
        if identifier_for(name) != entry.identifier:
            raise ValueError(
                f"Tool name {name!r} does not map back to identifier {entry.identifier!r}"
            )
        if name in seen:
            raise ValueError(f"Tool name {name!r} for {entry.identifier!r} collides with another tool")
        seen.add(name)


def _query_input_schema(description: str) -> Dict[str, Any]:
    return {
        'type': 'object',
        'properties': {
            'query': {
                'type': 'string',
                'description': description,
            },
        },
        'required': ['query'],
    }


def build_tool_catalog(registry: EndpointRegistry) -> List[types.Tool]:
    """Build the full tool list: the fixed tools, then one per knowledge graph.

    Args:
        registry: The endpoint registry to expose

    Returns:
        MCP tool descriptors in registry order
    """
    tools = [
        types.Tool(
            name=LIST_GRAPHS_TOOL,
            description=(
                'List all available knowledge graphs in the Open Knowledge Network '
                'with their domains and descriptions'
            ),
            inputSchema={'type': 'object', 'properties': {}},
        ),
        types.Tool(
            name=FEDERATED_QUERY_TOOL,
            description=(
                'Execute a SPARQL query across all knowledge graphs in the OKN '
                'using federated querying'
            ),
            inputSchema=_query_input_schema('SPARQL query to execute across all graphs'),
        ),
    ]

    for entry in registry:
        tools.append(types.Tool(
            name=tool_name_for(entry.identifier),
            description=(
                f'Execute SPARQL query on {entry.identifier} knowledge graph. '
                f'Domain: {entry.domain}. {entry.description}'
            ),
            inputSchema=_query_input_schema('SPARQL query to execute'),
        ))

    return tools
