"""
Todoist MCP - Test Configuration

Shared fixtures for CI-safe testing without the Todoist API.
"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

from todoist_mcp.main import app
from todoist_mcp.sections.directory import SectionDirectory
from todoist_mcp.tasks.service import TaskService
from todoist_mcp.todoist.transport import InMemoryTodoistTransport
from todoist_mcp.tools import set_task_service


PROJECT_ID = "project-1"
OTHER_PROJECT_ID = "project-2"

SECTION_IDS = {
    "Backlog": "sec-backlog",
    "Deferred": "sec-deferred",
    "Current Sprint Backlog": "sec-sprint",
    "Blocked": "sec-blocked",
    "In Progress": "sec-progress",
    "Ready for Testing": "sec-testing",
    "Complete": "sec-complete",
}


# Time control fixtures for deterministic due-date testing
class FrozenClock:
    """A clock that returns a fixed date for deterministic testing."""

    def __init__(self, frozen_today: date):
        self._today = frozen_today

    def __call__(self) -> date:
        return self._today

    def set(self, new_today: date) -> None:
        self._today = new_today

    def advance(self, days: int) -> None:
        self._today += timedelta(days=days)


@pytest.fixture
def frozen_today() -> date:
    """A fixed 'today' for testing."""
    return date(2025, 1, 15)


@pytest.fixture
def frozen_clock(frozen_today) -> FrozenClock:
    return FrozenClock(frozen_today)


@pytest.fixture
def transport():
    """In-memory Todoist with the seven canonical sections in the project."""
    fake = InMemoryTodoistTransport()
    for name, section_id in SECTION_IDS.items():
        fake.add_section(name, PROJECT_ID, section_id=section_id)
    fake.add_section("Backlog", OTHER_PROJECT_ID, section_id="sec-foreign-backlog")
    return fake


@pytest.fixture
def service(transport, frozen_clock):
    """Task service wired to the in-memory transport and frozen clock."""
    return TaskService(
        transport,
        PROJECT_ID,
        clock=frozen_clock,
        move_verify_attempts=3,
        move_verify_delay=0,
    )


@pytest.fixture
def directory(transport):
    return SectionDirectory(transport, PROJECT_ID)


@pytest.fixture
def client(service):
    """Test client with the in-memory service installed."""
    set_task_service(service)
    yield TestClient(app)
    set_task_service(None)
