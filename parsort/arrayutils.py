"""Helpers for merging sorted sections, checking order and printing arrays."""

from __future__ import annotations

import heapq
import sys
from collections.abc import MutableSequence, Sequence
from itertools import pairwise
from typing import TextIO

MAX_PRINT_START = 15
MAX_PRINT_END = 15
TOTAL_MAX_PRINT = MAX_PRINT_START + MAX_PRINT_END + 5

_RULE = "-------------------------"


def _section_length(start: int, end: int) -> int:
    return end - start + 1 if end >= start else 0


def merge_sections(
    source: Sequence[int],
    dest: MutableSequence[int],
    start1: int,
    end1: int,
    start2: int,
    end2: int,
    n_total: int,
) -> None:
    """Merge the sorted sections ``source[start1..end1]`` and ``source[start2..end2]``.

    The merged run is written into ``dest`` starting at ``start1``. Bounds are
    inclusive. Invalid or non-adjacent sections raise ``ValueError``.
    """
    len1 = _section_length(start1, end1)
    len2 = _section_length(start2, end2)

    if (len1 or len2) and n_total <= 0:
        raise ValueError("n_total must be positive when a section is not empty")
    if len1 and not (0 <= start1 <= end1 < n_total):
        raise ValueError(f"first section [{start1}, {end1}] is out of range for {n_total} elements")
    if len2:
        if not (0 <= start2 <= end2 < n_total):
            raise ValueError(f"second section [{start2}, {end2}] is out of range for {n_total} elements")
        if len1 and start2 != end1 + 1:
            raise ValueError(f"sections [{start1}, {end1}] and [{start2}, {end2}] are not adjacent")

    if not len1 and not len2:
        return

    expected_end = start1 + len1 + len2 - 1
    if start1 < 0:
        raise ValueError("merge destination start must not be negative")
    if expected_end >= n_total:
        raise ValueError(f"merged run would end at {expected_end}, beyond {n_total} elements")

    first = source[start1:end1 + 1] if len1 else []
    second = source[start2:end2 + 1] if len2 else []
    dest[start1:expected_end + 1] = list(heapq.merge(first, second))


def format_array(label: str, values: Sequence[int] | None) -> str:
    """Return the text block that :func:`print_array` writes.

    Arrays longer than ``TOTAL_MAX_PRINT`` show only their first and last
    fifteen elements around an ellipsis.
    """
    n = 0 if values is None else len(values)
    lines = [f"--- {label} (N={n}) ---\n"]
    if n <= 0:
        lines.append("[] (Array vuoto o N non positivo)\n")
    elif n <= TOTAL_MAX_PRINT:
        lines.append("[" + ", ".join(str(v) for v in values) + "]")
    else:
        head = ", ".join(str(v) for v in values[:MAX_PRINT_START])
        tail = "".join(f", {v}" for v in values[n - MAX_PRINT_END:])
        lines.append(f"[{head}, ...{tail}]")
    lines.append(f"\n{_RULE}\n")
    return "".join(lines)


def print_array(label: str, values: Sequence[int] | None, file: TextIO | None = None) -> None:
    """Write the array, or its two ends if it is long, under a heading."""
    out = sys.stdout if file is None else file
    out.write(format_array(label, values))
    out.flush()


def find_disorder(values: Sequence[int]) -> int | None:
    """Return the first index ``i`` with ``values[i] > values[i + 1]``, or ``None``."""
    for index, (left, right) in enumerate(pairwise(values)):
        if left > right:
            return index
    return None