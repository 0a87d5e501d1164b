"""Work Scheduler - personal time tracking with optional Notion sync."""

__version__ = "0.3.0"
