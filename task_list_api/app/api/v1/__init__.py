"""Version 1 of the Task List API."""
