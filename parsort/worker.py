"""Worker threads that sort partitions in parallel and merge them pairwise."""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from parsort.arrayutils import merge_sections
from parsort.taskqueue import ConcurrentQueue, PartitionTask


def _partition_size(index: int, n: int, p: int) -> int:
    base, remainder = divmod(n, p)
    return base + (1 if index < remainder else 0)


def initial_partitions(n: int, p: int) -> list[PartitionTask]:
    """Split ``n`` elements into ``p`` contiguous ranges, dropping empty ones.

    The first ``n % p`` ranges hold one element more than the others.
    """
    if n <= 0 or p <= 0:
        return []
    tasks = []
    start = 0
    for index in range(p):
        size = _partition_size(index, n, p)
        if size > 0:
            tasks.append(PartitionTask(start, start + size - 1))
        start += size
    return tasks


def merge_step_count(p: int) -> int:
    """Number of pairwise merge rounds needed for ``p`` workers (log2 of ``p``)."""
    steps = 0
    while p > 1:
        p >>= 1
        steps += 1
    return steps


def merge_blocks(tid: int, step: int, n: int, p: int) -> tuple[PartitionTask, PartitionTask] | None:
    """Return the two adjacent blocks worker ``tid`` merges in round ``step``.

    Returns ``None`` when the worker is idle in that round or has nothing to merge.
    """
    active_workers = p >> (step + 1)
    if tid >= active_workers or n <= 0:
        return None

    span = 1 << (step + 1)
    half = 1 << step
    first_partition = tid * span

    start1 = sum(_partition_size(i, n, p) for i in range(first_partition))
    end1 = start1 - 1 + sum(
        _partition_size(first_partition + i, n, p) for i in range(half)
    )
    start2 = end1 + 1

    if not (start1 < n and end1 >= start1) or start2 >= n:
        return None

    end2 = start2 - 1 + sum(
        _partition_size(first_partition + half + i, n, p) for i in range(half)
    )
    end2 = min(end2, n - 1)
    if start2 > end2:
        return None
    return PartitionTask(start1, end1), PartitionTask(start2, end2)


@dataclass
class SharedState:
    """Data and synchronisation objects shared by all workers."""

    array: list[int]
    workers: int
    temp: list[int] = field(init=False)
    queue: ConcurrentQueue = field(init=False, default_factory=ConcurrentQueue)
    barrier: threading.Barrier = field(init=False)
    merge_lock: threading.Lock = field(init=False, default_factory=threading.Lock)
    copy_lock: threading.Lock = field(init=False, default_factory=threading.Lock)
    output_lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        if self.workers <= 0:
            raise ValueError("the number of workers must be positive")
        self.temp = [0] * len(self.array)
        self.barrier = threading.Barrier(self.workers)

    @property
    def n(self) -> int:
        return len(self.array)


def _emit(shared: SharedState, out: TextIO, line: str) -> None:
    with shared.output_lock:
        out.write(line + "\n")
        out.flush()


def worker(tid: int, shared: SharedState, out: TextIO | None = None) -> None:
    """Run worker ``tid``: enqueue partitions (worker 0), sort them, then merge."""
    out = sys.stdout if out is None else out
    n = shared.n
    p = shared.workers
    array = shared.array

    _emit(shared, out, f"[WORKER STATUS] Worker {tid} AVVIATO.")

    if tid == 0:
        for task in initial_partitions(n, p):
            _emit(
                shared,
                out,
                f"[INDICI SORTING] Worker {tid} (Master): Creato Task per qsort: "
                f"start={task.start}, end={task.end} (elementi: {task.size()})",
            )
            shared.queue.push(task)
        shared.queue.close()

    for task in shared.queue:
        if task.size() > 0:
            _emit(
                shared,
                out,
                f"[INDICI SORTING] Worker {tid}: Prelevato Task per qsort: "
                f"start={task.start}, end={task.end} (elementi: {task.size()})",
            )
        if task.size() > 0 and task.start >= 0 and task.end < n:
            array[task.start:task.end + 1] = sorted(array[task.start:task.end + 1])

    shared.barrier.wait()

    for step in range(merge_step_count(p)):
        blocks = merge_blocks(tid, step, n, p)
        if blocks is not None:
            first, second = blocks
            _emit(
                shared,
                out,
                f"[INDICI MERGING] Worker {tid} (Attivo): Passo k={step}, "
                f"Unirà Blocco1 [{first.start}-{first.end}] con "
                f"Blocco2 [{second.start}-{second.end}]",
            )
            with shared.merge_lock:
                merge_sections(
                    array, shared.temp, first.start, first.end, second.start, second.end, n
                )

        shared.barrier.wait()

        if blocks is not None:
            start, end = blocks[0].start, blocks[1].end
            if 0 <= start <= end < n:
                with shared.copy_lock:
                    array[start:end + 1] = shared.temp[start:end + 1]

        shared.barrier.wait()

    _emit(shared, out, f"[WORKER STATUS] Worker {tid} TERMINATO.")


def parallel_sort(values: Sequence[int], workers: int, out: TextIO | None = None) -> list[int]:
    """Sort ``values`` with ``workers`` threads and return the sorted list.

    ``workers`` must be a positive power of two.
    """
    if workers <= 0:
        raise ValueError("the number of workers must be positive")
    if workers & (workers - 1):
        raise ValueError(f"the number of workers ({workers}) must be a power of two")

    shared = SharedState(list(values), workers)
    errors: list[BaseException] = []

    def run(tid: int) -> None:
        try:
            worker(tid, shared, out)
        except threading.BrokenBarrierError:
            pass
        except BaseException as exc:  # noqa: BLE001 - reported to the caller below
            errors.append(exc)
            shared.barrier.abort()
            shared.queue.close()

    threads = [threading.Thread(target=run, args=(tid,)) for tid in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if errors:
        raise errors[0]
    return shared.array