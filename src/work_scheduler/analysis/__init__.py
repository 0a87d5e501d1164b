"""Statistics and report rendering for time entries."""
