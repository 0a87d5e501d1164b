"""Core components: models, configuration, storage and logging."""
