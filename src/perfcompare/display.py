"""Terminal display of comparison tables.

Two views are offered: the comparison table (keys plus the matched flag
and comments set by a comparison policy) and the stats table (keys plus
per-side sample counts and summary statistics).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from perfcompare.formatting import format_float, format_table

if TYPE_CHECKING:
    from perfcompare.aggregate import JobComparisonData, MetricKey

COMPARISON_HEADERS = [
    "E2E TEST",
    "VERB",
    "RESOURCE",
    "SUBRESOURCE",
    "PERCENTILE",
    "MATCHED?",
    "COMMENTS",
]

STATS_HEADERS = [
    "E2E TEST",
    "VERB",
    "RESOURCE",
    "SUBRESOURCE",
    "PERCENTILE",
    "#L",
    "AVG L",
    "STDEV L",
    "MAX L",
    "#R",
    "AVG R",
    "STDEV R",
    "MAX R",
]


def _key_cells(key: MetricKey) -> list[str]:
    return [key.test_name, key.verb, key.resource, key.subresource, key.percentile]


def format_comparison_table(job: JobComparisonData) -> str:
    """Format one row per metric: key fields, matched flag, comments."""
    rows = [
        _key_cells(key) + [str(entry.matched), entry.comments]
        for key, entry in job.sorted_items()
    ]
    return format_table(COMPARISON_HEADERS, rows)


def format_stats_table(job: JobComparisonData, precision: int = 3) -> str:
    """Format one row per metric with sample counts and statistics.

    Statistics must already be computed; NaN is shown as ``N/A``.
    """
    rows: list[list[str]] = []
    for key, entry in job.sorted_items():
        rows.append(
            _key_cells(key)
            + [
                str(len(entry.left_job_sample)),
                format_float(entry.avg_l, precision),
                format_float(entry.stdev_l, precision),
                format_float(entry.max_l, precision),
                str(len(entry.right_job_sample)),
                format_float(entry.avg_r, precision),
                format_float(entry.stdev_r, precision),
                format_float(entry.max_r, precision),
            ]
        )
    alignments = ["l"] * 5 + ["r"] * 8
    return format_table(STATS_HEADERS, rows, alignments=alignments)
