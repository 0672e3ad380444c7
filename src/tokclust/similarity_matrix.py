from typing import Iterator, List, NamedTuple, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed

from tokclust.term_vectors import SparseVector


class _SlotTask(NamedTuple):
    """One similarity computation: the pair (i, j) and the slot it writes."""
    slot: int
    i: int
    j: int


def _fill_slot(task: _SlotTask, vectors: Sequence[SparseVector], values: np.ndarray) -> int:
    # Workers only read vectors and write their own slot.
    values[task.slot] = vectors[task.i].sim(vectors[task.j])
    return task.slot


def make_worker_pool(n_jobs: int = -1, pre_dispatch: str = "2*n_jobs") -> Parallel:
    """
    Create the thread pool used to (re)compute similarity entries.

    The pool is meant to be entered as a context manager once per clustering
    run, so the same workers serve every round.

    Args:
        n_jobs: Number of worker threads (-1 for all CPUs, default: -1)
        pre_dispatch: Upper bound on tasks queued ahead of the workers
                      (joblib expression, default: "2*n_jobs")

    Returns:
        joblib Parallel object with shared-memory (thread) semantics
    """
    if n_jobs == 0:
        raise ValueError("n_jobs == 0 has no meaning. Use a positive count or -1 for all CPUs.")
    return Parallel(n_jobs=n_jobs, require="sharedmem", pre_dispatch=pre_dispatch)


class SimilarityMatrix:
    def __init__(self, vectors: Sequence[SparseVector], parallel: Parallel):
        """
        Pairwise cosine similarities between the currently active clusters.

        Entries are stored column-wise: ``left[k] < right[k]`` is the pair held
        in slot ``k`` and ``values[k]`` its similarity. Slots are kept in
        lexicographic (left, right) order; dropping entries never reorders the
        survivors.

        All C(n, 2) entries are computed on ``parallel`` before the
        constructor returns.

        Args:
            vectors: Term vectors indexed by cluster id. They are read, never
                     written, by this class.
            parallel: Worker pool from make_worker_pool(), already entered
        """
        self.vectors = vectors
        self.parallel = parallel

        left, right = np.triu_indices(len(vectors), k=1)
        self.left = left.astype(np.int64)
        self.right = right.astype(np.int64)
        self.values = np.zeros(len(self.left), dtype=np.float64)

        self._recompute(np.arange(len(self.left)))

    def _recompute(self, slots: np.ndarray) -> int:
        """
        Recompute the given slots on the worker pool and wait for all of them.

        Every task owns exactly one slot and no slot is handed out twice, so
        workers can write ``values`` without locking. Returns once every task
        has been acknowledged.
        """
        if len(slots) == 0:
            return 0
        if np.unique(slots).size != slots.size:
            raise RuntimeError("Similarity slots must be distinct within one dispatch")

        vectors, values = self.vectors, self.values
        tasks = (
            _SlotTask(int(slot), int(self.left[slot]), int(self.right[slot]))
            for slot in slots
        )
        acks = self.parallel(delayed(_fill_slot)(task, vectors, values) for task in tasks)

        if len(acks) != len(slots):
            raise RuntimeError(f"Expected {len(slots)} completed similarity tasks, got {len(acks)}")
        return len(acks)

    def best(self) -> Tuple[int, int, float]:
        """
        Return (i, j, similarity) for the most similar active pair.

        Ties go to the first slot, which is the lexicographically smallest
        (i, j) pair.
        """
        if len(self.values) == 0:
            raise ValueError("Similarity matrix has no active pairs")
        slot = int(np.argmax(self.values))
        return int(self.left[slot]), int(self.right[slot]), float(self.values[slot])

    def absorb(self, survivor: int, absorbed: int) -> int:
        """
        Update the matrix after ``absorbed`` was merged into ``survivor``.

        Entries touching ``absorbed`` are dropped, entries touching
        ``survivor`` are recomputed against its merged vector and every other
        entry is carried over as is. The vector merge must already have
        happened.

        Returns:
            Number of recomputed entries
        """
        keep = (self.left != absorbed) & (self.right != absorbed)
        self.left = self.left[keep]
        self.right = self.right[keep]
        self.values = self.values[keep]

        stale = np.flatnonzero((self.left == survivor) | (self.right == survivor))
        return self._recompute(stale)

    def pairs(self) -> Iterator[Tuple[int, int, float]]:
        for i, j, value in zip(self.left, self.right, self.values):
            yield int(i), int(j), float(value)

    def active_clusters(self) -> List[int]:
        return sorted(set(self.left.tolist()) | set(self.right.tolist()))

    def __len__(self) -> int:
        return len(self.values)
