from todoist_mcp.todoist.adapter import HttpTodoistTransport
from todoist_mcp.todoist.transport import InMemoryTodoistTransport, TodoistTransport

__all__ = ["HttpTodoistTransport", "InMemoryTodoistTransport", "TodoistTransport"]
