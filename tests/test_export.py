"""Tests for perfcompare.export: CSV export."""

from __future__ import annotations

import csv
import io
import unittest

from perfcompare.aggregate import JobComparisonData
from perfcompare.export import CSV_COLUMNS, export_csv


class TestExportCSV(unittest.TestCase):
    """Tests for export_csv()."""

    def _rows(self, job: JobComparisonData) -> list[dict[str, str]]:
        return list(csv.DictReader(io.StringIO(export_csv(job))))

    def test_header(self) -> None:
        first_line = export_csv(JobComparisonData()).splitlines()[0]
        self.assertEqual(first_line.split(","), CSV_COLUMNS)

    def test_one_row_per_metric(self) -> None:
        job = JobComparisonData()
        job.add_sample_value(1.0, "Density", "GET", "pods", "", "Perc50", True)
        job.add_sample_value(3.0, "Density", "GET", "pods", "", "Perc50", True)
        job.add_sample_value(2.0, "Density", "GET", "pods", "", "Perc99", False)
        job.compute_stats_for_metric_samples()

        rows = self._rows(job)
        self.assertEqual(len(rows), 2)
        perc50, perc99 = rows
        self.assertEqual(perc50["percentile"], "Perc50")
        self.assertEqual(perc50["n_left"], "2")
        self.assertEqual(perc50["avg_left"], "2.000000")
        self.assertEqual(perc50["max_left"], "3.000000")
        self.assertEqual(perc50["n_right"], "0")
        self.assertEqual(perc50["avg_right"], "")
        self.assertEqual(perc99["avg_right"], "2.000000")
        self.assertEqual(perc99["matched"], "False")

    def test_comments_quoted(self) -> None:
        job = JobComparisonData()
        job.add_sample_value(1.0, "Density", "GET", "pods", "", "Perc50", True)
        entry = next(iter(job.data.values()))
        entry.comments = "slower, by 5%"
        rows = self._rows(job)
        self.assertEqual(rows[0]["comments"], "slower, by 5%")


if __name__ == "__main__":
    unittest.main()
