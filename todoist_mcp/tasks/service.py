"""
Todoist MCP - Task Service

Business logic for the task tools: section resolution, project
containment, subtask rules and the choice between direct patches and
command batches.
"""

import asyncio
import logging
import uuid
from datetime import date
from typing import Any, Awaitable, Callable, Dict, List, Optional

from todoist_mcp.errors import ErrorKind, ToolError
from todoist_mcp.sections.directory import SectionDirectory
from todoist_mcp.tasks.enums import ACTIVE_SECTIONS, SectionName
from todoist_mcp.tasks.models import Task
from todoist_mcp.tasks.projector import TaskProjector
from todoist_mcp.tasks.schemas import (
    CreateTaskInput,
    DeleteTaskOut,
    EditTaskInput,
    ListTasksBySectionOut,
    MoveTaskInput,
    SearchTasksInput,
    SearchTasksOut,
    SectionListing,
    TaskDetailsOut,
    TaskOut,
)
from todoist_mcp.todoist.transport import TodoistTransport

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for the task tools, scoped to one project."""

    def __init__(
        self,
        transport: TodoistTransport,
        project_id: str,
        directory: Optional[SectionDirectory] = None,
        clock: Optional[Callable[[], date]] = None,
        move_verify_attempts: int = 3,
        move_verify_delay: float = 0.5,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        """
        Initialize the task service.

        Args:
            transport: Todoist transport implementation
            project_id: The single project all operations are confined to
            directory: Optional section directory (built from transport if omitted)
            clock: Optional clock for testing (returns today's local date)
            move_verify_attempts: Re-fetches allowed while waiting for a move to apply
            move_verify_delay: Seconds between those re-fetches
            sleep: Optional sleep coroutine for testing
        """
        self.transport = transport
        self.project_id = project_id
        self.directory = directory or SectionDirectory(transport, project_id)
        self.projector = TaskProjector(self.directory, clock)
        self.move_verify_attempts = max(1, move_verify_attempts)
        self.move_verify_delay = move_verify_delay
        self._sleep = sleep or asyncio.sleep

    async def _get_task(self, task_id: str) -> Task:
        """Fetch a task, treating anything outside the project as missing."""
        try:
            raw = await self.transport.get_task(task_id)
        except ToolError as e:
            if e.kind is ErrorKind.UPSTREAM_API and e.status == 404:
                raise ToolError.not_found(f"Task not found: {task_id}") from e
            raise
        task = Task.from_dict(raw)
        if task.project_id != str(self.project_id):
            raise ToolError.not_found("Task not in configured project")
        return task

    async def _find_subtasks(self, parent_id: str) -> List[Task]:
        raw = await self.transport.list_tasks(project_id=self.project_id, parent_id=parent_id)
        # parent_id is not a documented REST filter; enforce it here
        return [task for task in (Task.from_dict(item) for item in raw) if task.parent_id == parent_id]

    def _in_project(self, tasks: List[Task]) -> List[Task]:
        return [task for task in tasks if task.project_id == str(self.project_id)]

    @staticmethod
    def _ensure_movable(task: Task) -> None:
        if task.is_subtask:
            raise ToolError.validation("Subtasks inherit parent section and cannot be moved directly.")

    async def _submit_move(self, task_id: str, section_id: str) -> None:
        command = {
            "type": "item_move",
            "uuid": str(uuid.uuid4()),
            "args": {"id": task_id, "section_id": section_id},
        }
        await self.transport.submit_commands([command])

    async def _confirm_move(self, task_id: str, section_id: str) -> Task:
        """
        Re-fetch a moved task until it reports the target section.

        The command endpoint gives no guarantee the move is visible on the
        next read. After the last attempt the latest state is returned as is.
        """
        task = await self._get_task(task_id)
        for _ in range(self.move_verify_attempts - 1):
            if task.section_id == section_id:
                return task
            await self._sleep(self.move_verify_delay)
            task = await self._get_task(task_id)
        if task.section_id != section_id:
            logger.warning(
                "move_task id=%s not applied after %d reads (section_id=%s, wanted %s)",
                task_id,
                self.move_verify_attempts,
                task.section_id,
                section_id,
            )
        return task

    async def create_task(self, request: CreateTaskInput) -> TaskOut:
        """Create a task, or a subtask that inherits its parent's section."""
        await self.directory.load()

        if request.parent_task_id:
            parent = await self._get_task(request.parent_task_id)
            section_id = parent.section_id or await self.directory.resolve(SectionName.BACKLOG)
        else:
            section_id = await self.directory.resolve(request.section or SectionName.BACKLOG)

        fields: Dict[str, Any] = {
            "content": request.title,
            "description": request.description,
            "project_id": self.project_id,
            "section_id": section_id,
        }
        if request.parent_task_id:
            fields["parent_id"] = request.parent_task_id
        if request.due_natural:
            fields["due_string"] = request.due_natural

        task = Task.from_dict(await self.transport.create_task(fields))
        logger.info(
            "create_task id=%s parent=%s section_id=%s",
            task.id,
            task.parent_id or "none",
            task.section_id,
        )
        return self.projector.to_task_out(task)

    async def edit_task(self, request: EditTaskInput) -> TaskOut:
        """
        Patch the supplied fields; a section change goes through move.

        The move command is submitted before the field patch, so a rejected
        move leaves the task untouched. A failed patch after an accepted
        move still reports failure with the move already applied upstream.
        """
        await self.directory.load()
        task = await self._get_task(request.task_id)

        section_id = None
        if request.section is not None:
            self._ensure_movable(task)
            section_id = await self.directory.resolve(request.section)

        fields: Dict[str, Any] = {}
        if request.title:
            fields["content"] = request.title
        if request.description is not None:
            fields["description"] = request.description
        if request.due_natural is not None:
            fields["due_string"] = request.due_natural

        moved = section_id is not None and section_id != task.section_id
        if moved:
            await self._submit_move(task.id, section_id)

        updated = task
        if fields:
            updated = Task.from_dict(await self.transport.apply_fields(task.id, fields))

        if moved:
            updated = await self._confirm_move(task.id, section_id)

        logger.info(
            "edit_task id=%s fields=%s moved_section=%s",
            task.id,
            ",".join(sorted(fields)) or "none",
            "yes" if moved else "no",
        )
        return self.projector.to_task_out(updated)

    async def move_task(self, request: MoveTaskInput) -> TaskOut:
        """Move a parent task (and with it its subtasks) to another section."""
        await self.directory.load()
        task = await self._get_task(request.task_id)
        self._ensure_movable(task)
        section_id = await self.directory.resolve(request.section)

        if task.section_id == section_id:
            logger.info("move_task id=%s already in section_id=%s", task.id, section_id)
            return self.projector.to_task_out(task)

        await self._submit_move(task.id, section_id)
        moved = await self._confirm_move(task.id, section_id)
        logger.info("move_task id=%s section_id=%s", moved.id, moved.section_id)
        return self.projector.to_task_out(moved)

    async def list_tasks_by_section(self) -> ListTasksBySectionOut:
        """List the active sections with their tasks, in fixed order."""
        await self.directory.load()

        wanted = [(name, await self.directory.resolve(name)) for name in ACTIVE_SECTIONS]

        sections = []
        for name, section_id in wanted:
            raw = await self.transport.list_tasks(project_id=self.project_id, section_id=section_id)
            entries = []
            for task in self._in_project([Task.from_dict(item) for item in raw]):
                subtasks = await self._find_subtasks(task.id)
                entries.append(self.projector.to_list_entry(task, has_subtasks=len(subtasks) > 0))
            sections.append(SectionListing(name=name.value, section_id=section_id, tasks=entries))

        logger.info("list_tasks_by_section sections=%d", len(sections))
        return ListTasksBySectionOut(project_id=str(self.project_id), sections=sections)

    async def get_task_details(self, task_id: str) -> TaskDetailsOut:
        """Get a task with its direct subtasks (ids and titles only)."""
        await self.directory.load()
        task = await self._get_task(task_id)
        subtasks = await self._find_subtasks(task.id)

        logger.info("get_task_details id=%s subtasks=%d", task.id, len(subtasks))
        return self.projector.to_details(task, subtasks)

    async def search_tasks(self, request: SearchTasksInput) -> SearchTasksOut:
        """Search by exact title, or by Todoist's own text filter."""
        await self.directory.load()

        if request.exact_title:
            wanted = request.query.strip().casefold()
            raw = await self.transport.list_tasks(project_id=self.project_id)
            tasks = [
                task
                for task in (Task.from_dict(item) for item in raw)
                if task.content.strip().casefold() == wanted
            ]
        else:
            raw = await self.transport.list_tasks(filter=f"search: {request.query}")
            tasks = [Task.from_dict(item) for item in raw]

        tasks = self._in_project(tasks)
        logger.info("search_tasks exact=%s results=%d", request.exact_title, len(tasks))
        return SearchTasksOut(
            query=request.query,
            exact_title=request.exact_title,
            tasks=[self.projector.to_search_result(task) for task in tasks],
        )

    async def delete_task(self, task_id: str) -> DeleteTaskOut:
        """Delete a task (and its subtasks upstream). Irreversible."""
        await self.directory.load()
        task = await self._get_task(task_id)
        await self.transport.delete_task(task.id)

        logger.info("delete_task id=%s", task.id)
        return DeleteTaskOut(task_id=task.id, title=task.content)
