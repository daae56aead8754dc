"""
Todoist MCP - Due Date Classification

Day-level comparisons in host local time. Todoist dates are fixed-width
zero-padded ISO strings, so string ordering equals calendar ordering.
"""

from datetime import date, timedelta
from typing import Optional

from todoist_mcp.tasks.schemas import DueFlags


def classify_due(due_date: Optional[str], today: date) -> DueFlags:
    """
    Classify a due date as overdue, today or tomorrow.

    Datetimes ("2024-01-31T10:00:00") are compared by their calendar day;
    the original string is reported back unchanged.
    """
    if not due_date:
        return DueFlags()

    day = due_date[:10]
    today_str = today.isoformat()
    tomorrow_str = (today + timedelta(days=1)).isoformat()

    return DueFlags(
        date=due_date,
        is_overdue=day < today_str,
        is_today=day == today_str,
        is_tomorrow=day == tomorrow_str,
    )
