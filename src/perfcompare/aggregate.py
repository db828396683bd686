"""Aggregation of perf data from two benchmark jobs into a comparison table.

Samples from every run of the left and right jobs are grouped by
:class:`MetricKey` (test, verb, resource, subresource, percentile).
Each bucket keeps the left and right samples apart so that their
statistics can be compared afterwards.

Lifecycle::

    job = get_flattened_comparison_data(left, right, min_count)
    job.compute_stats_for_metric_samples()
    job.pretty_print()

Invalid input never aborts aggregation: NaN samples and data items with
a missing-or-low request count are dropped silently.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable

from perfcompare.logging import get_report_logger
from perfcompare.perftype import DataItem, JobMetrics
from perfcompare.stats import compute_sample_stats

log = logging.getLogger("perfcompare")

POD_STARTUP_METRIC = "pod_startup"
POD_STARTUP_VERB = "Pod-Startup"

# Base-10 integer with an optional sign, nothing else.
_COUNT_RE = re.compile(r"[+-]?[0-9]+")
_COUNT_MIN = -(2**63)
_COUNT_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Table entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class MetricKey:
    """Identifies a metric uniquely."""

    test_name: str  # "Density", "Load Capacity", ...
    verb: str  # "GET", "LIST", ... or "Pod-Startup"
    resource: str  # "nodes", "pods", ... empty for pod startup
    subresource: str  # "status", "binding", ... usually empty
    percentile: str  # "Perc50", "Perc90", "Perc99", ...


@dataclass
class MetricComparisonData:
    """Samples and statistics for one metric across both jobs."""

    left_job_sample: list[float] = field(default_factory=list)
    right_job_sample: list[float] = field(default_factory=list)
    # Set by a comparison policy; not computed here.
    matched: bool = False
    comments: str = ""

    # Valid only after JobComparisonData.compute_stats_for_metric_samples().
    avg_l: float = float("nan")
    avg_r: float = float("nan")
    stdev_l: float = float("nan")
    stdev_r: float = float("nan")
    max_l: float = float("nan")
    max_r: float = float("nan")

    def compute_stats(self) -> None:
        """Recompute avg, stdev and max for both samples."""
        left = compute_sample_stats(self.left_job_sample)
        right = compute_sample_stats(self.right_job_sample)
        self.avg_l, self.stdev_l, self.max_l = left.avg, left.stdev, left.max
        self.avg_r, self.stdev_r, self.max_r = right.avg, right.stdev, right.max


# ---------------------------------------------------------------------------
# Comparison table
# ---------------------------------------------------------------------------


@dataclass
class JobComparisonData:
    """Comparison data for every metric seen in either job."""

    data: dict[MetricKey, MetricComparisonData] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.data)

    def sorted_items(self) -> list[tuple[MetricKey, MetricComparisonData]]:
        """Entries ordered by key, for stable output."""
        return sorted(self.data.items(), key=lambda kv: kv[0])

    def add_sample_value(
        self,
        sample: float,
        test_name: str,
        verb: str,
        resource: str,
        subresource: str,
        percentile: str,
        from_left_job: bool,
    ) -> None:
        """Add *sample* to a metric's bucket, creating the bucket if needed.

        NaN samples are ignored and never create a bucket.
        """
        if math.isnan(sample):
            return
        key = MetricKey(
            test_name=test_name,
            verb=verb,
            resource=resource,
            subresource=subresource,
            percentile=percentile,
        )
        entry = self.data.get(key)
        if entry is None:
            entry = MetricComparisonData()
            self.data[key] = entry
        if from_left_job:
            entry.left_job_sample.append(sample)
        else:
            entry.right_job_sample.append(sample)

    def add_latency_value(
        self,
        latency: DataItem,
        min_allowed_request_count: int,
        test_name: str,
        from_left_job: bool,
    ) -> None:
        """Add every percentile of one data item to the table.

        Items whose ``Count`` label is present but unparsable, or below
        *min_allowed_request_count*, are skipped entirely.  An absent
        or empty ``Count`` disables the check.
        """
        labels = latency.labels
        count_label = labels.get("Count", "")
        if count_label:
            count = _parse_count(count_label)
            if count is None or count < min_allowed_request_count:
                log.debug(
                    "Dropping %s %s/%s: request count %r below %d",
                    test_name,
                    labels.get("Verb", ""),
                    labels.get("Resource", ""),
                    count_label,
                    min_allowed_request_count,
                )
                return

        verb = labels.get("Verb", "")
        if labels.get("Metric", "") == POD_STARTUP_METRIC:
            verb = POD_STARTUP_VERB
        resource = labels.get("Resource", "")
        subresource = labels.get("Subresource", "")

        for percentile, value in latency.data.items():
            self.add_sample_value(
                value,
                test_name,
                verb,
                resource,
                subresource,
                percentile,
                from_left_job,
            )

    def add_job_metrics(
        self,
        job_metrics: JobMetrics,
        min_allowed_request_count: int,
        from_left_job: bool,
    ) -> None:
        """Add all data items from every run of one job."""
        for run_metrics in job_metrics:
            for test_name, perf_data_list in run_metrics.items():
                for perf_data in perf_data_list:
                    for item in perf_data.data_items:
                        self.add_latency_value(
                            item,
                            min_allowed_request_count,
                            test_name,
                            from_left_job,
                        )

    def compute_stats_for_metric_samples(self) -> None:
        """Compute avg, stdev and max for each metric's left and right samples."""
        for entry in self.data.values():
            entry.compute_stats()

    def pretty_print(self, write: Callable[[str], None] | None = None) -> None:
        """Write the table with columns aligned.

        Args:
            write: Receives the formatted text.  Defaults to logging
                it at INFO on the ``perfcompare.report`` logger.
        """
        from perfcompare.display import format_comparison_table

        if write is None:
            write = get_report_logger().info
        write("\n" + format_comparison_table(self))


def _parse_count(text: str) -> int | None:
    """Parse a request count label, or return None if malformed.

    Values outside the signed 64-bit range are malformed too.
    """
    if not _COUNT_RE.fullmatch(text):
        return None
    count = int(text)
    if not _COUNT_MIN <= count <= _COUNT_MAX:
        return None
    return count


def get_flattened_comparison_data(
    left_job_metrics: JobMetrics,
    right_job_metrics: JobMetrics,
    min_allowed_request_count: int,
) -> JobComparisonData:
    """Flatten latencies from all runs of both jobs into one table.

    Data items whose request count is below *min_allowed_request_count*
    are discarded.

    Args:
        left_job_metrics: Runs of the left (baseline) job.
        right_job_metrics: Runs of the right job.
        min_allowed_request_count: Minimum ``Count`` label for an item
            to be kept.

    Returns:
        A JobComparisonData whose statistics are not yet computed.
    """
    job = JobComparisonData()
    job.add_job_metrics(left_job_metrics, min_allowed_request_count, from_left_job=True)
    job.add_job_metrics(right_job_metrics, min_allowed_request_count, from_left_job=False)
    log.debug(
        "Flattened %d left runs and %d right runs into %d metrics",
        len(left_job_metrics),
        len(right_job_metrics),
        len(job),
    )
    return job
