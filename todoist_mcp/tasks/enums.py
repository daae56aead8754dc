"""
Todoist MCP - Task Enums

Canonical workflow sections. The order is significant: reverse lookups
from a section id walk this order and take the first match.
"""

from enum import Enum


class SectionName(str, Enum):
    """Canonical section names, in workflow order."""
    BACKLOG = "Backlog"
    DEFERRED = "Deferred"
    CURRENT_SPRINT_BACKLOG = "Current Sprint Backlog"
    BLOCKED = "Blocked"
    IN_PROGRESS = "In Progress"
    READY_FOR_TESTING = "Ready for Testing"
    COMPLETE = "Complete"


# Sections reported by list_tasks_by_section, in output order
ACTIVE_SECTIONS = (
    SectionName.CURRENT_SPRINT_BACKLOG,
    SectionName.IN_PROGRESS,
    SectionName.READY_FOR_TESTING,
)
