"""Fixed-size thread pool for data-parallel loops over bodies."""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, TypeVar
import numpy as np

T = TypeVar("T")


class WorkerPool:
    """Runs a function over chunks of an index array on a fixed set of threads.

    Indices are split with ``np.array_split`` into one chunk per worker. With
    a single worker everything runs inline on the calling thread, which
    gives the same results in the same order.
    """

    def __init__(self, workers: int = 1):
        """Initialize worker pool.

        Args:
            workers: Number of threads (at least 1)
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self._executor: Optional[ThreadPoolExecutor] = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nbody")

    def split(self, indices: np.ndarray) -> List[np.ndarray]:
        """Partition indices into at most ``workers`` non-empty chunks."""
        indices = np.asarray(indices)
        n_chunks = max(1, min(self.workers, len(indices)))
        return [chunk for chunk in np.array_split(indices, n_chunks) if len(chunk)]

    def map_chunks(self, fn: Callable[[np.ndarray], T], indices: np.ndarray) -> List[T]:
        """Apply ``fn`` to each chunk of ``indices``.

        Results come back in chunk order. Exceptions raised by a worker
        propagate to the caller.
        """
        chunks = self.split(indices)
        if self._executor is None or len(chunks) <= 1:
            return [fn(chunk) for chunk in chunks]
        return list(self._executor.map(fn, chunks))

    def close(self):
        """Shut the threads down."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
