"""Shared constants, input resolution and helpers for the Mixing MCP server."""
