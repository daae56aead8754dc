from todoist_mcp.sections.directory import SectionDirectory

__all__ = ["SectionDirectory"]
