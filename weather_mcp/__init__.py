"""Demonstration MCP server answering weather queries for a fixed set of cities."""

__version__ = "1.0.0"
