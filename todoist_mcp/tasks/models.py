"""
Todoist MCP - Task Models

Internal view of a Todoist task record. Todoist owns the data; these are
rebuilt from every fetch and never stored.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Task:
    """Task record as returned by the Todoist REST API."""

    id: str
    content: str
    project_id: str
    url: str
    description: str = ""
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    due_date: Optional[str] = None

    @property
    def is_subtask(self) -> bool:
        return bool(self.parent_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create task from a Todoist REST v2 task object."""
        due = data.get("due") or {}
        return cls(
            id=str(data["id"]),
            content=data.get("content", ""),
            project_id=str(data.get("project_id", "")),
            url=data.get("url", ""),
            description=data.get("description") or "",
            section_id=str(data["section_id"]) if data.get("section_id") else None,
            parent_id=str(data["parent_id"]) if data.get("parent_id") else None,
            due_date=due.get("date") or None,
        )
