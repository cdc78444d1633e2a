"""Parallel partition sort: a concurrent task queue, worker threads and pairwise merging."""

__version__ = "0.1.0"