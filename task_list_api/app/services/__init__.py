"""Service layer holding the task collection and its operations."""
