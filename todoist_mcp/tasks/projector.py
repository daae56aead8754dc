"""
Todoist MCP - Task Projector

Converts Task records into the output models returned by every read
operation. Pure mapping: no network access, the section directory must
already be loaded.
"""

from datetime import date
from typing import Callable, List, Optional

from todoist_mcp.sections.directory import SectionDirectory
from todoist_mcp.tasks.due import classify_due
from todoist_mcp.tasks.enums import SectionName
from todoist_mcp.tasks.models import Task
from todoist_mcp.tasks.schemas import (
    DueFlags,
    SearchResult,
    SubtaskRef,
    TaskDetailsOut,
    TaskListEntry,
    TaskOut,
)


class TaskProjector:
    """Projection of Task records into tool output shapes."""

    def __init__(
        self,
        directory: SectionDirectory,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            directory: Section directory used for id -> name lookups
            clock: Optional clock for testing (returns today's local date)
        """
        self.directory = directory
        self._clock = clock or date.today

    def section_name_for(self, section_id: Optional[str]) -> SectionName:
        """
        Canonical name of a section id.

        Walks the canonical order and returns the first match, so an id
        reachable under several names reports the earliest. Ids outside
        the canonical set report Backlog.
        """
        if section_id:
            for name in SectionName:
                if self.directory.lookup(name) == section_id:
                    return name
        return SectionName.BACKLOG

    def due_flags(self, task: Task) -> DueFlags:
        return classify_due(task.due_date, self._clock())

    def to_task_out(self, task: Task) -> TaskOut:
        return TaskOut(
            task_id=task.id,
            parent_task_id=task.parent_id,
            title=task.content,
            description=task.description,
            section=self.section_name_for(task.section_id),
            due=self.due_flags(task),
            url=task.url,
        )

    def to_list_entry(self, task: Task, has_subtasks: bool) -> TaskListEntry:
        return TaskListEntry(
            task_id=task.id,
            title=task.content,
            url=task.url,
            due=self.due_flags(task),
            has_subtasks=has_subtasks,
        )

    def to_details(self, task: Task, children: List[Task]) -> TaskDetailsOut:
        return TaskDetailsOut(
            task_id=task.id,
            title=task.content,
            description=task.description,
            section=self.section_name_for(task.section_id),
            due=self.due_flags(task),
            subtasks=[SubtaskRef(task_id=child.id, title=child.content) for child in children],
            url=task.url,
        )

    def to_search_result(self, task: Task) -> SearchResult:
        return SearchResult(
            task_id=task.id,
            title=task.content,
            url=task.url,
            section=self.section_name_for(task.section_id),
            due=self.due_flags(task),
        )
