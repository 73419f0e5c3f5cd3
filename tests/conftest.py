# tests/conftest.py

from __future__ import annotations

import json
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_list_api.app.core.config import Settings
from task_list_api.app.main import create_app
from task_list_api.app.services.task_service import TaskService


class FakeClock:
    """
    Deterministic clock: every call returns a time one minute after the previous one.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test seed file that does not exist yet.
    """
    return Settings(seed_file=str(tmp_path / "task.json"), api_prefix="")


@pytest.fixture()
def write_seed(tmp_path: Path):
    """Write ``{"tasks": records}`` to a seed file and return its path."""

    def _write(records, name: str = "task.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps({"tasks": records}), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture()
def service(clock: FakeClock, rng: random.Random) -> TaskService:
    """Empty service with a deterministic clock and random source."""
    return TaskService(clock=clock, rng=rng)


@pytest.fixture()
def client(settings: Settings, service: TaskService) -> TestClient:
    """Test client for an application serving ``service``."""
    app = create_app(settings, service=service)
    return TestClient(app)
