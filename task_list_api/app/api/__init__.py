"""HTTP layer of the Task List API, grouped by API version."""
