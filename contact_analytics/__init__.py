"""Genesys Cloud contact-center analytics exposed as MCP tools."""

__version__ = "0.1.0"
