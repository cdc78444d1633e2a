# parsort

Sorts a list of integers with a fixed number of worker threads.

The list is split into `P` contiguous partitions, where `P` must be a power
of two. When the length does not divide evenly, the first `n % P` partitions
get one element more than the others, and empty partitions are skipped.
Worker 0 puts one task per partition on a shared concurrent queue and closes
the queue. Every worker then pops tasks and sorts those partitions. After a
barrier, the sorted partitions are merged pairwise in `log2(P)` steps. At each
step half as many workers stay active. Each active worker merges two
neighbouring blocks into a scratch buffer. After another barrier it copies the
merged run back, and a third barrier closes the step.

## Installation

```
pip install .
```

## Command line

```
parallel-sort -n 1000 -w 4
```

The same command is also available as `python -m parsort.cli -n 1000 -w 4`.

- `-n` sets the number of elements. The list is filled with random values in
  `[0, 10*n)`.
- `-w` sets the number of workers. It must be a positive power of two
  (1, 2, 4, 8, ...).

The program prints the following:

- the initial list;
- a status line when each worker starts and when it finishes;
- the partitions each worker creates and sorts;
- the blocks each active worker merges at each step;
- the final list;
- whether the final list is sorted.

A list of up to 35 elements is printed in full. A longer list is printed as
its first 15 values, `...`, and its last 15 values.

The program prints a usage or error message to standard error and exits with
status 1 in these cases:

- an unknown option is given;
- `-n` or `-w` is missing or not positive;
- the worker count is not a power of two.

Option values are read the lenient way. A leading integer is used, and text
with no leading integer counts as 0.

The input is always random. The command does not read numbers from a file or
from standard input, and it does not write the sorted result anywhere except
to the printed report.

## Library use

```python
import io
from parsort.worker import parallel_sort, initial_partitions, merge_blocks, merge_step_count
from parsort.arrayutils import find_disorder

values = [9, 3, 7, 1, 8, 2, 6, 4]
result = parallel_sort(values, 4, io.StringIO())
assert find_disorder(result) is None

initial_partitions(10, 4)   # list of PartitionTask(start, end), inclusive bounds
merge_step_count(4)         # 2
merge_blocks(0, 1, 10, 4)   # the two blocks worker 0 merges at step 1, or None
```

### `parsort.worker`

`parallel_sort(values, workers, out=None)` returns a new sorted list. It
raises `ValueError` if `workers` is not a positive power of two. Worker
progress lines are written to `out`, which defaults to standard output. An
error raised in a worker stops the other workers and is raised again to the
caller.

`worker(tid, shared, out=None)` runs a single worker on a `SharedState`. The
`SharedState` holds these objects, shared by all workers:

- the array;
- the scratch buffer;
- the queue;
- the barrier;
- the locks.

### `parsort.taskqueue`

`ConcurrentQueue` is a thread-safe FIFO of `PartitionTask` items. It supports
`push(task)`, `pop()`, `close()`, the `closed` property and `len()`.

- `pop()` blocks while the queue is empty and still open.
- Once the queue is closed and drained, `pop()` returns `None`.
- Iterating over the queue pops tasks until that point.

`PartitionTask(start, end)` is an inclusive range. Its `size()` method
returns the number of elements in the range.

### `parsort.arrayutils`

- `merge_sections(source, dest, start1, end1, start2, end2, n_total)` merges
  two adjacent sorted inclusive ranges of `source` into `dest` from `start1`
  on. It raises `ValueError` for ranges that are out of bounds or not
  adjacent.
- `format_array(label, values)` returns the printed form of a list.
  `print_array(label, values, file=None)` writes that form.
- `find_disorder(values)` returns the first index `i` with
  `values[i] > values[i + 1]`, or `None` if the list is sorted.