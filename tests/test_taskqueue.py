import threading
import time

import pytest

from parsort.taskqueue import ConcurrentQueue, PartitionTask


def _join(thread: threading.Thread) -> None:
    thread.join(timeout=5)
    assert not thread.is_alive()


@pytest.mark.parametrize("start, end", [(0, 0), (3, 7), (10, 24), (2, 1), (5, 0)])
def test_size_matches_range_length(start, end):
    assert PartitionTask(start, end).size() == len(range(start, end + 1))


def test_size_of_empty_range_is_zero():
    assert PartitionTask(5, 4).size() == 0


def test_tasks_compare_by_value():
    assert PartitionTask(1, 2) == PartitionTask(1, 2)
    with pytest.raises(AttributeError):
        PartitionTask(1, 2).start = 3  # type: ignore[misc]


def test_pop_returns_tasks_in_fifo_order():
    queue = ConcurrentQueue()
    tasks = [PartitionTask(i * 4, i * 4 + 3) for i in range(5)]
    for task in tasks:
        queue.push(task)
    queue.close()
    assert [queue.pop() for _ in tasks] == tasks


def test_len_tracks_pushes_and_pops():
    queue = ConcurrentQueue()
    assert len(queue) == 0
    queue.push(PartitionTask(0, 1))
    queue.push(PartitionTask(2, 3))
    assert len(queue) == 2
    queue.pop()
    assert len(queue) == 1


def test_pop_on_closed_empty_queue_returns_none():
    queue = ConcurrentQueue()
    queue.close()
    assert queue.pop() is None
    assert queue.pop() is None


def test_closed_flag_and_idempotent_close():
    queue = ConcurrentQueue()
    assert queue.closed is False
    queue.close()
    queue.close()
    assert queue.closed is True


def test_remaining_tasks_are_served_after_close():
    queue = ConcurrentQueue()
    queue.push(PartitionTask(0, 9))
    queue.close()
    assert queue.pop() == PartitionTask(0, 9)
    assert queue.pop() is None


def test_push_after_close_is_still_delivered():
    queue = ConcurrentQueue()
    queue.close()
    queue.push(PartitionTask(4, 8))
    assert list(queue) == [PartitionTask(4, 8)]


def test_iteration_drains_queue():
    queue = ConcurrentQueue()
    tasks = [PartitionTask(i, i) for i in range(7)]
    for task in tasks:
        queue.push(task)
    queue.close()
    assert list(queue) == tasks
    assert len(queue) == 0


def test_blocked_pop_is_woken_by_push():
    queue = ConcurrentQueue()
    results = []
    consumer = threading.Thread(target=lambda: results.append(queue.pop()))
    consumer.start()
    time.sleep(0.05)
    assert results == []
    queue.push(PartitionTask(1, 5))
    _join(consumer)
    assert results == [PartitionTask(1, 5)]


def test_blocked_pops_are_all_woken_by_close():
    queue = ConcurrentQueue()
    popped = {}
    lock = threading.Lock()
    sentinel = object()

    def consume(index):
        value = queue.pop()
        with lock:
            popped[index] = value

    consumers = [threading.Thread(target=consume, args=(i,)) for i in range(4)]
    for thread in consumers:
        thread.start()
    time.sleep(0.05)
    with lock:
        assert popped == {}
    queue.close()
    for thread in consumers:
        _join(thread)
    assert sorted(popped) == [0, 1, 2, 3]
    assert [popped.get(i, sentinel) for i in range(4)] == [None] * 4
    assert queue.pop() is None
    assert len(queue) == 0


def test_concurrent_consumers_take_each_task_exactly_once():
    queue = ConcurrentQueue()
    tasks = [PartitionTask(i * 10, i * 10 + 9) for i in range(200)]
    collected = []
    lock = threading.Lock()

    def consume():
        for task in queue:
            with lock:
                collected.append(task)

    consumers = [threading.Thread(target=consume) for _ in range(4)]
    for thread in consumers:
        thread.start()
    for task in tasks:
        queue.push(task)
    queue.close()
    for thread in consumers:
        _join(thread)
    assert sorted(collected, key=lambda t: t.start) == tasks
    assert len(queue) == 0