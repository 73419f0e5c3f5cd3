# tests/test_seed.py

from __future__ import annotations

import logging
import os
import random
from datetime import datetime, timezone
from pathlib import Path

from task_list_api.app.core.config import Settings
from task_list_api.app.core.seed import get_seed_path, load_seed_tasks
from task_list_api.app.schemas.task import PRIORITIES
from task_list_api.app.services.task_service import TaskService


def test_missing_fields_are_backfilled(write_seed, clock, rng) -> None:
    path = write_seed(
        [
            {"id": 1, "title": "a", "description": "a", "completed": False},
            {"id": 2, "title": "b", "description": "b", "completed": True, "priority": "HIGH",
             "createdAt": "2023-05-01T10:00:00Z"},
        ]
    )

    tasks = load_seed_tasks(path, clock=clock, rng=rng)

    assert [t.id for t in tasks] == [1, 2]
    assert tasks[0].created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert tasks[0].priority in PRIORITIES
    assert tasks[1].priority == "high"
    assert tasks[1].created_at == datetime(2023, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_random_priority_comes_from_injected_source(write_seed, clock) -> None:
    records = [{"id": i, "title": "t", "description": "d", "completed": False} for i in range(1, 21)]
    path = write_seed(records)

    first = load_seed_tasks(path, clock=clock, rng=random.Random(7))
    second = load_seed_tasks(path, clock=clock, rng=random.Random(7))

    assert [t.priority for t in first] == [t.priority for t in second]
    assert {t.priority for t in first} <= set(PRIORITIES)


def test_naive_seed_timestamps_are_utc(write_seed, clock, rng) -> None:
    path = write_seed([{"id": 1, "title": "t", "description": "d", "completed": False,
                        "createdAt": "2023-05-01T10:00:00"}])

    (task,) = load_seed_tasks(path, clock=clock, rng=rng)

    assert task.created_at.tzinfo is not None
    assert task.created_at == datetime(2023, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_seed_records_bypass_payload_validation(write_seed, clock, rng) -> None:
    path = write_seed([{"id": 9, "title": "", "description": "", "completed": False, "priority": "low"}])

    (task,) = load_seed_tasks(path, clock=clock, rng=rng)

    assert task.id == 9
    assert task.title == ""


def test_missing_file_yields_empty_collection(tmp_path: Path, clock, rng, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        tasks = load_seed_tasks(str(tmp_path / "absent.json"), clock=clock, rng=rng)

    assert tasks == []
    assert "Error reading the seed file" in caplog.text


def test_malformed_json_yields_empty_collection(tmp_path: Path, clock, rng, caplog) -> None:
    path = tmp_path / "task.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        tasks = load_seed_tasks(str(path), clock=clock, rng=rng)

    assert tasks == []
    assert "Error parsing the seed file" in caplog.text


def test_missing_tasks_array_yields_empty_collection(tmp_path: Path, clock, rng) -> None:
    path = tmp_path / "task.json"
    path.write_text('{"items": []}', encoding="utf-8")

    assert load_seed_tasks(str(path), clock=clock, rng=rng) == []


def test_unusable_records_are_skipped(write_seed, clock, rng, caplog) -> None:
    path = write_seed(
        [
            {"id": 1, "title": "t", "description": "d", "completed": False},
            {"title": "no id"},
            {"id": 3, "title": "t", "description": "d", "completed": False, "createdAt": "not a date"},
            "not a record",
            {"id": 5, "title": "t", "description": "d", "completed": True},
        ]
    )

    with caplog.at_level(logging.ERROR):
        tasks = load_seed_tasks(path, clock=clock, rng=rng)

    assert [t.id for t in tasks] == [1, 5]
    assert caplog.text.count("Skipping seed record") == 3


def test_service_from_seed_file(write_seed, clock, rng) -> None:
    path = write_seed([{"id": 3, "title": "t", "description": "d", "completed": False}])

    service = TaskService.from_seed_file(path, clock=clock, rng=rng)

    assert len(service) == 1
    assert service.next_id() == 4


def test_seed_path_resolution(tmp_path: Path) -> None:
    absolute = str(tmp_path / "seed.json")
    assert get_seed_path(Settings(seed_file=absolute)) == absolute

    relative = get_seed_path(Settings(seed_file="task.json"))
    assert os.path.isabs(relative)
    assert relative.endswith("task.json")
