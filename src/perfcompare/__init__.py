"""perfcompare: compare latency metrics between two sets of benchmark runs."""

__version__ = "0.1.0"
