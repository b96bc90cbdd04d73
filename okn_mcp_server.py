#!/usr/bin/env python
"""OKN (Open Knowledge Network) MCP server.

Exposes every knowledge graph hosted on FRINK (https://frink.apps.renci.org)
as an MCP tool, plus a federated query tool, over stdio.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from okn_mcp.tools.catalog import build_tool_catalog, verify_tool_names
from okn_mcp.tools.dispatcher import ToolDispatcher
from okn_mcp.tools.endpoints import FRINK_REGISTRY, EndpointRegistry
from okn_mcp.tools.sparql_client import DEFAULT_TIMEOUT_MS

SERVER_NAME = 'okn-unified-server'

logger = logging.getLogger(__name__)


def create_server(registry: EndpointRegistry, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Server:
    """Create the MCP server for a registry.

    Args:
        registry: Knowledge graphs to expose as tools
        timeout_ms: Deadline applied to every remote query

    Returns:
        A configured low-level MCP server
    """
    server = Server(SERVER_NAME)
    dispatcher = ToolDispatcher(registry, timeout_ms=timeout_ms)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return build_tool_catalog(registry)

    # Arguments are checked by the dispatcher so that bad input still
    # produces a regular error result.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        envelope = await dispatcher.dispatch(name, arguments)
        return envelope.to_call_tool_result()

    return server


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f'expected a positive integer, got {value}')
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Run the OKN MCP server over stdio')
    parser.add_argument(
        '--timeout-ms',
        type=positive_int,
        default=os.environ.get('OKN_QUERY_TIMEOUT_MS', str(DEFAULT_TIMEOUT_MS)),
        help='Deadline for each SPARQL query in milliseconds (env: OKN_QUERY_TIMEOUT_MS)',
    )
    parser.add_argument(
        '--log-level',
        default=os.environ.get('OKN_LOG_LEVEL', 'INFO'),
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        type=str.upper,
        help='Logging level (env: OKN_LOG_LEVEL)',
    )
    return parser.parse_args(argv)


async def run_server(registry: EndpointRegistry, timeout_ms: int) -> None:
    verify_tool_names(registry)
    server = create_server(registry, timeout_ms)

    async with stdio_server() as (read_stream, write_stream):
        logger.info('OKN Unified MCP Server running on stdio')
        logger.info(f'Connected to {len(registry)} knowledge graphs')
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    load_dotenv()
    args = parse_args()

    # stdout carries the MCP protocol, so logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        asyncio.run(run_server(FRINK_REGISTRY, args.timeout_ms))
    except KeyboardInterrupt:
        logger.info('Server stopped')
    except Exception as e:
        logger.error(f'Fatal error in main(): {e}', exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
