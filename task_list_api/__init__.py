"""
Top-level package for the Task List API.

All functionality lives in submodules under ``app``; the ASGI
application is importable as ``task_list_api.app.main:app``.
"""

__all__ = []
