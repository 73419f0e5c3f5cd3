"""
Health endpoint for API v1.

Reports that the service is up and how many tasks it currently holds.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from task_list_api.app.api.v1.endpoints.tasks import get_task_service
from task_list_api.app.services.task_service import TaskService

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health(service: TaskService = Depends(get_task_service)) -> Dict[str, Any]:
    return {"status": "ok", "tasks": len(service)}
