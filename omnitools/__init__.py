"""Consolidated MCP tools."""
