"""
Todoist MCP - Tasks Module

Task operations, projections and due-date classification.
"""
