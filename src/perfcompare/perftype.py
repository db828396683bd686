"""Perf data records produced by benchmark jobs.

Hierarchy::

    JobMetrics (one benchmark job)
      → list of RunMetrics (one per run of the job)
        → dict[test name, list[PerfData]]
          → PerfData.data_items: list[DataItem]
            → DataItem.data: dict[percentile, value]
            → DataItem.labels: dict[str, str]

The JSON layout uses the upstream camelCase keys (``dataItems``), so
``from_dict`` / ``to_dict`` translate between the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _parse_labels(raw: dict[str, Any] | None) -> dict[str, str]:
    """Labels as strings; a JSON null reads as an empty label."""
    return {str(k): "" if v is None else str(v) for k, v in (raw or {}).items()}


@dataclass
class DataItem:
    """One measured metric: percentile values plus identifying labels."""

    data: dict[str, float] = field(default_factory=dict)  # e.g. {"Perc50": 12.5}
    unit: str = ""  # e.g. "ms"
    labels: dict[str, str] = field(default_factory=dict)  # Verb, Resource, Count, ...

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "data": dict(self.data),
            "unit": self.unit,
            "labels": dict(self.labels),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DataItem:
        """Deserialize from a dict.

        Values are coerced to float; ``null`` becomes NaN so that the
        aggregator can drop it.
        """
        values = {
            str(k): float("nan") if v is None else float(v)
            for k, v in (data.get("data") or {}).items()
        }
        return cls(
            data=values,
            unit=data.get("unit") or "",
            labels=_parse_labels(data.get("labels")),
        )


@dataclass
class PerfData:
    """A group of data items reported together by one test."""

    version: str = ""
    data_items: list[DataItem] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {
            "version": self.version,
            "dataItems": [item.to_dict() for item in self.data_items],
        }
        if self.labels:
            d["labels"] = dict(self.labels)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PerfData:
        """Deserialize from a dict, ignoring unknown fields."""
        return cls(
            version=str(data.get("version") or ""),
            data_items=[DataItem.from_dict(item) for item in data.get("dataItems") or []],
            labels=_parse_labels(data.get("labels")),
        )


# Test name -> perf data groups reported by that test in one run.
RunMetrics = dict[str, list[PerfData]]

# All runs of one benchmark job.
JobMetrics = list[RunMetrics]
