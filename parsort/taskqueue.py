"""A blocking FIFO queue of partition tasks that consumers drain until it is closed."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class PartitionTask:
    """An inclusive index range ``start..end`` of the array to sort."""

    start: int
    end: int

    def size(self) -> int:
        """Number of elements in the range, zero when ``end < start``."""
        return self.end - self.start + 1 if self.end >= self.start else 0


class ConcurrentQueue:
    """Thread-safe FIFO of :class:`PartitionTask` items.

    :meth:`pop` blocks while the queue is empty and still open. Once the queue
    is closed and empty, :meth:`pop` returns ``None`` so consumers can stop.
    """

    def __init__(self) -> None:
        self._items: deque[PartitionTask] = deque()
        self._not_empty = threading.Condition()
        self._closed = False

    def push(self, task: PartitionTask) -> None:
        """Append a task and wake one waiting consumer."""
        with self._not_empty:
            self._items.append(task)
            self._not_empty.notify()

    def pop(self) -> PartitionTask | None:
        """Remove and return the oldest task, waiting for one if needed.

        Returns ``None`` when the queue is empty and closed.
        """
        with self._not_empty:
            self._not_empty.wait_for(lambda: self._items or self._closed)
            if not self._items:
                return None
            return self._items.popleft()

    def close(self) -> None:
        """Mark that no more tasks are expected and wake every waiting consumer."""
        with self._not_empty:
            if not self._closed:
                self._closed = True
                self._not_empty.notify_all()

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has been called."""
        with self._not_empty:
            return self._closed

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._items)

    def __iter__(self) -> Iterator[PartitionTask]:
        """Pop tasks until the queue is empty and closed."""
        while (task := self.pop()) is not None:
            yield task