from __future__ import annotations

import csv
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import List

from .errors import InvalidInput
from .models import Process

log = logging.getLogger(__name__)

SAMPLE_WORKLOAD = [
    ("1", 0, 8),
    ("2", 1, 4),
    ("3", 2, 9),
    ("4", 3, 5),
]


def sample_processes() -> List[Process]:
    """
    The demonstration set preloaded when no workload is given.
    """
    return [Process.create(pid, arrival, burst) for pid, arrival, burst in SAMPLE_WORKLOAD]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidInput(f"Unsupported workload format: {suffix} (use .json or .csv)")

    log.info("loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"Invalid JSON workload {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise InvalidInput(f"Workload {path} is not valid UTF-8: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            rows = list(reader)
        except UnicodeDecodeError as exc:
            raise InvalidInput(f"Workload {path} is not valid UTF-8: {exc}") from exc
        except csv.Error as exc:
            raise InvalidInput(f"Invalid CSV workload {path}: {exc}") from exc
    return [_process_from_mapping(row) for row in rows]


def _process_from_mapping(mapping: Mapping) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidInput(f"Invalid process entry: {mapping!r}")

    pid = mapping.get("pid", mapping.get("id"))
    try:
        arrival_time = mapping["arrival_time"]
        burst_time = mapping["burst_time"]
    except KeyError as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    return Process.create(pid, arrival_time, burst_time)
