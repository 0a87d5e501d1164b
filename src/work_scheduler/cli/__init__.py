"""Command-line interface for Work Scheduler."""
