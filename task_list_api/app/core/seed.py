"""
Loading of the seed dataset.

The seed dataset is a JSON document of the form ``{"tasks": [...]}``
read once when the application is created.  Records missing a
``createdAt`` timestamp receive the current time and records missing a
``priority`` receive a random one.  Seed records are not checked by
the payload validator.

Any failure to read or parse the file is logged and results in an
empty collection; the service still starts.  A single record that
cannot be turned into a task is logged and skipped.
"""

import json
import logging
import os
import random
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .config import Settings
from task_list_api.app.schemas.task import PRIORITIES, TaskRead

logger = logging.getLogger(__name__)


def get_seed_path(app_settings: Settings) -> str:
    """Compute the path to the seed file.

    If ``app_settings.seed_file`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    seed_file = app_settings.seed_file
    if os.path.isabs(seed_file):
        return seed_file
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / seed_file).resolve())


def normalize_record(
    record: dict,
    clock: Callable[[], datetime],
    rng: random.Random,
) -> dict:
    """Return a copy of ``record`` with ``createdAt`` and ``priority`` filled in."""
    updated = dict(record)
    if not updated.get("createdAt"):
        updated["createdAt"] = clock()
    if not updated.get("priority"):
        updated["priority"] = rng.choice(PRIORITIES)
    return updated


def load_seed_tasks(
    path: str,
    clock: Callable[[], datetime],
    rng: Optional[random.Random] = None,
) -> List[TaskRead]:
    """Read and normalise the seed dataset at ``path``.

    Returns an empty list when the file cannot be read or does not hold
    a valid ``tasks`` array.  Records that cannot be coerced into a task
    are left out.
    """
    rng = rng or random.Random()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as e:
        logger.error("Error reading the seed file %s: %s", path, e)
        return []
    except ValueError as e:
        logger.error("Error parsing the seed file %s: %s", path, e)
        return []

    records = data.get("tasks") if isinstance(data, dict) else None
    if not isinstance(records, list):
        logger.error("Error parsing the seed file %s: expected a 'tasks' array", path)
        return []

    tasks: List[TaskRead] = []
    for position, record in enumerate(records):
        try:
            tasks.append(TaskRead.model_validate(normalize_record(record, clock, rng)))
        except (TypeError, ValueError) as e:
            logger.error("Skipping seed record %d in %s: %s", position, path, e)

    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return tasks
