"""
Todoist MCP - Task Schemas

Pydantic models for tool inputs and outputs.
"""

from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todoist_mcp.tasks.enums import SectionName


ActiveSectionName = Literal["Current Sprint Backlog", "In Progress", "Ready for Testing"]


class ToolInput(BaseModel):
    """Base for tool inputs: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class CreateTaskInput(ToolInput):
    """Input for create_task."""

    title: str = Field(min_length=1, description="Task title")
    description: str = Field(min_length=1, description="Task description")
    section: Optional[SectionName] = Field(
        default=None,
        description="Target section for top-level tasks (default Backlog); ignored for subtasks",
    )
    due_natural: Optional[str] = Field(default=None, description="Due date in natural language (dates only)")
    parent_task_id: Optional[str] = Field(default=None, description="Parent task ID; creates a subtask when set")


class EditTaskInput(ToolInput):
    """Input for edit_task. Only supplied fields are changed."""

    task_id: str = Field(min_length=1, description="Task ID")
    title: Optional[str] = Field(default=None, min_length=1, description="New title")
    description: Optional[str] = Field(default=None, description="New description")
    due_natural: Optional[str] = Field(default=None, description="New due date in natural language")
    section: Optional[SectionName] = Field(default=None, description="Move a parent task to this section")


class MoveTaskInput(ToolInput):
    """Input for move_task."""

    task_id: str = Field(min_length=1, description="Task ID of a parent task")
    section: SectionName = Field(description="Target section")


class ListTasksBySectionInput(ToolInput):
    """list_tasks_by_section takes no arguments."""


class GetTaskDetailsInput(ToolInput):
    task_id: str = Field(min_length=1, description="Task ID")


class SearchTasksInput(ToolInput):
    """Input for search_tasks."""

    query: str = Field(min_length=1, description="Search text")
    exact_title: bool = Field(
        default=False,
        description="Match whole titles exactly (ignoring case and surrounding whitespace)",
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Validate query is not just whitespace."""
        if not v.strip():
            raise ValueError("Query cannot be empty or whitespace only")
        return v.strip()


class DeleteTaskInput(ToolInput):
    task_id: str = Field(min_length=1, description="Task ID")


class DueFlags(BaseModel):
    """Due date classification relative to today (host local date)."""

    date: Optional[str] = Field(default=None, description="Due date as reported by Todoist")
    is_overdue: bool = False
    is_today: bool = False
    is_tomorrow: bool = False


class TaskOut(BaseModel):
    """Response model for a single task after create/edit/move."""

    task_id: str
    parent_task_id: Optional[str] = None
    title: str
    description: str
    section: SectionName
    due: DueFlags
    url: str


class TaskListEntry(BaseModel):
    task_id: str
    title: str
    url: str
    due: DueFlags
    has_subtasks: bool


class SectionListing(BaseModel):
    name: ActiveSectionName
    section_id: str
    tasks: List[TaskListEntry]


class ListTasksBySectionOut(BaseModel):
    """Response model for list_tasks_by_section."""

    project_id: str
    sections: List[SectionListing]


class SubtaskRef(BaseModel):
    task_id: str
    title: str


class TaskDetailsOut(BaseModel):
    """Response model for get_task_details. Subtasks carry id and title only."""

    task_id: str
    title: str
    description: str
    section: SectionName
    due: DueFlags
    subtasks: List[SubtaskRef]
    url: str


class SearchResult(BaseModel):
    task_id: str
    title: str
    url: str
    section: SectionName
    due: DueFlags


class SearchTasksOut(BaseModel):
    query: str
    exact_title: bool
    tasks: List[SearchResult]


class DeleteTaskOut(BaseModel):
    """Acknowledgment for delete_task, carrying the deleted title."""

    task_id: str
    title: str
    deleted: bool = True
