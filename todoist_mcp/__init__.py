"""Todoist MCP - canonical-section task tools for a single Todoist project."""

__version__ = "0.1.0"
