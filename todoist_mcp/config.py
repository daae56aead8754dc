"""
Todoist MCP - Configuration Module

This module handles application configuration via environment variables.
"""

import os
from typing import Optional, Tuple

from todoist_mcp.errors import ToolError


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Todoist MCP"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Todoist credentials (both required, checked on first use)
    TODOIST_API_TOKEN: Optional[str] = os.getenv("TODOIST_API_TOKEN", None)
    TODOIST_PROJECT_ID: Optional[str] = os.getenv("TODOIST_PROJECT_ID", None)

    # Todoist endpoints
    TODOIST_API_URL: str = os.getenv("TODOIST_API_URL", "https://api.todoist.com/rest/v2")
    TODOIST_SYNC_URL: str = os.getenv("TODOIST_SYNC_URL", "https://api.todoist.com/sync/v9/sync")
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))

    # Section moves go through the command log; re-fetch until applied
    MOVE_VERIFY_ATTEMPTS: int = int(os.getenv("MOVE_VERIFY_ATTEMPTS", "3"))
    MOVE_VERIFY_DELAY: float = float(os.getenv("MOVE_VERIFY_DELAY", "0.5"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None

    def todoist_credentials(self) -> Tuple[str, str]:
        """
        Return the (token, project_id) pair.

        Raises:
            ToolError: MissingConfiguration naming the first unset variable.
                Empty strings count as unset.
        """
        if not self.TODOIST_API_TOKEN:
            raise ToolError.missing_configuration("TODOIST_API_TOKEN")
        if not self.TODOIST_PROJECT_ID:
            raise ToolError.missing_configuration("TODOIST_PROJECT_ID")
        return self.TODOIST_API_TOKEN, self.TODOIST_PROJECT_ID


settings = Settings()
