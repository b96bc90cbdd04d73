"""MCP server exposing the Open Knowledge Network SPARQL endpoints."""
