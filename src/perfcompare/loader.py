"""Load benchmark job metrics from JSON files.

A run file holds one run of a job: a JSON object mapping each test name
to a list of perf data objects::

    {
      "Density": [
        {
          "version": "v1",
          "dataItems": [
            {
              "data": {"Perc50": 10.0, "Perc99": 50.0},
              "unit": "ms",
              "labels": {"Verb": "LIST", "Resource": "pods", "Count": "100"}
            }
          ]
        }
      ]
    }

A single perf data object is accepted in place of the list.  A job is
either one run file or a directory of run files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from perfcompare.logging import get_logger
from perfcompare.perftype import JobMetrics, PerfData, RunMetrics

log = get_logger("loader")


def _parse_run(data: Any, source: Path) -> RunMetrics:
    if not isinstance(data, dict):
        raise ValueError(f"{source}: expected a JSON object, got {type(data).__name__}")

    run: RunMetrics = {}
    for test_name, groups in data.items():
        if isinstance(groups, dict):
            groups = [groups]
        if not isinstance(groups, list):
            raise ValueError(
                f"{source}: test {test_name!r} must map to a list of perf data objects"
            )
        parsed: list[PerfData] = []
        for group in groups:
            if not isinstance(group, dict):
                raise ValueError(f"{source}: test {test_name!r} has a non-object perf data entry")
            try:
                parsed.append(PerfData.from_dict(group))
            except (TypeError, ValueError, AttributeError) as exc:
                raise ValueError(f"{source}: malformed perf data for {test_name!r}: {exc}") from exc
        run[str(test_name)] = parsed
    return run


def load_run_metrics(path: Path) -> RunMetrics:
    """Load one run file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not valid JSON or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Run file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON: {exc}") from exc

    run = _parse_run(data, path)
    log.debug("Loaded %d tests from %s", len(run), path)
    return run


def load_job_metrics(path: Path) -> JobMetrics:
    """Load every run of a job.

    Args:
        path: A run file, or a directory whose ``*.json`` files are
            loaded as runs in file-name order.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If any run file is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Job path not found: {path}")

    if path.is_dir():
        run_files = sorted(p for p in path.glob("*.json") if p.is_file())
        if not run_files:
            log.warning("No run files (*.json) in %s", path)
    else:
        run_files = [path]

    job = [load_run_metrics(p) for p in run_files]
    log.info("Loaded %d runs from %s", len(job), path)
    return job
