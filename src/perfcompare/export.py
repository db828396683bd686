"""Export a comparison table to CSV.

One row per metric, sorted by key, with per-side sample counts and
statistics.  NaN statistics are written as empty cells so that
spreadsheets and pandas read them as missing values.
"""

from __future__ import annotations

import csv
import io
import math

from perfcompare.aggregate import JobComparisonData

CSV_COLUMNS = [
    "test_name",
    "verb",
    "resource",
    "subresource",
    "percentile",
    "n_left",
    "avg_left",
    "stdev_left",
    "max_left",
    "n_right",
    "avg_right",
    "stdev_right",
    "max_right",
    "matched",
    "comments",
]


def _cell(value: float) -> str:
    if math.isnan(value):
        return ""
    return f"{value:.6f}"


def export_csv(job: JobComparisonData) -> str:
    """Export the table as CSV text (statistics must already be computed)."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)

    for key, entry in job.sorted_items():
        writer.writerow(
            [
                key.test_name,
                key.verb,
                key.resource,
                key.subresource,
                key.percentile,
                len(entry.left_job_sample),
                _cell(entry.avg_l),
                _cell(entry.stdev_l),
                _cell(entry.max_l),
                len(entry.right_job_sample),
                _cell(entry.avg_r),
                _cell(entry.stdev_r),
                _cell(entry.max_r),
                entry.matched,
                entry.comments,
            ]
        )

    return output.getvalue()
