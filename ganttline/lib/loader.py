"""
Load task collections from JSON exports of the task API.

Accepts either a bare list of task records or a paginated resource
({"data": [...], "meta": {...}, "links": {...}}).
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from ganttline.lib import validate
from ganttline.lib.models import Task

logger = logging.getLogger(__name__)

TASKS_SCHEMA = "tasks"


def tasks_from_records(records: Iterable[Union[dict, Task]]) -> tuple[Task, ...]:
    """Normalize records (dicts or Tasks) into an immutable task snapshot."""
    return tuple(r if isinstance(r, Task) else Task.from_dict(r) for r in records)


def parse_task_payload(data) -> tuple[Task, ...]:
    """Validate decoded JSON and build the task snapshot.

    Raises:
        validate.ValidationError: If the payload doesn't match the schema
    """
    validate.validate(data, TASKS_SCHEMA)
    records = data["data"] if isinstance(data, dict) else data
    return tasks_from_records(records)


def load_tasks(path: Path) -> tuple[Task, ...]:
    """Load and validate a task file.

    Raises:
        validate.ValidationError: If the file is missing, not JSON, or
            doesn't match the schema
    """
    tasks = parse_task_payload(validate.read_json(path, TASKS_SCHEMA))
    logger.debug(f"Loaded {len(tasks)} task(s) from {path}")
    return tasks
