"""
Todoist MCP - Section Directory

Maps canonical section names to the live Todoist section ids of the
configured project. The mapping is fetched once and reused until
invalidate() is called; sections are assumed stable within a process run.
"""

import logging
from typing import Dict, Optional, Union

from todoist_mcp.errors import ToolError
from todoist_mcp.tasks.enums import SectionName
from todoist_mcp.todoist.transport import TodoistTransport

logger = logging.getLogger(__name__)


# Canonical names that also resolve from a differently-cased upstream name
CASE_TOLERANT_SECTIONS = (SectionName.IN_PROGRESS, SectionName.READY_FOR_TESTING)


class SectionDirectory:
    """
    Cached name -> id directory for one project's sections.

    Concurrent first loads are not serialized: both fetch the same data and
    the last one to finish wins.
    """

    def __init__(
        self,
        transport: TodoistTransport,
        project_id: str,
        mapping: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            transport: Todoist transport used to fetch sections
            project_id: Configured project whose sections are mapped
            mapping: Optional pre-built name -> id mapping (skips the first load)
        """
        self.transport = transport
        self.project_id = project_id
        self._mapping = dict(mapping) if mapping is not None else None

    @property
    def is_loaded(self) -> bool:
        return self._mapping is not None

    async def load(self) -> Dict[str, str]:
        """Fetch and build the mapping unless it is already cached."""
        if self._mapping is not None:
            return self._mapping

        sections = await self.transport.list_sections(self.project_id)
        mapping: Dict[str, str] = {}
        for section in sections:
            if str(section.get("project_id", self.project_id)) != str(self.project_id):
                continue
            mapping[section["name"]] = str(section["id"])

        for canonical in CASE_TOLERANT_SECTIONS:
            if canonical.value in mapping:
                continue
            for name, section_id in mapping.items():
                if name.casefold() == canonical.value.casefold():
                    mapping[canonical.value] = section_id
                    break

        self._mapping = mapping
        logger.info("sections_loaded total=%d", len(mapping))
        return mapping

    async def resolve(self, name: Union[SectionName, str]) -> str:
        """
        Resolve a canonical section name to its Todoist section id.

        Raises:
            ToolError: NotFound if the project has no such section.
        """
        mapping = await self.load()
        key = name.value if isinstance(name, SectionName) else name
        section_id = mapping.get(key)
        if section_id is None:
            raise ToolError.not_found(f"Section not found: {key}", name=key)
        return section_id

    def lookup(self, name: Union[SectionName, str]) -> Optional[str]:
        """Cache-only lookup; the directory must already be loaded."""
        if self._mapping is None:
            raise RuntimeError("Section directory not loaded. Call load() first.")
        key = name.value if isinstance(name, SectionName) else name
        return self._mapping.get(key)

    def invalidate(self) -> None:
        """Drop the cached mapping; the next resolve() reloads it."""
        self._mapping = None
        logger.info("sections_invalidated project_id=%s", self.project_id)
