from typing import List, MutableSequence, NamedTuple

from tokclust.similarity_matrix import SimilarityMatrix, make_worker_pool
from tokclust.term_vectors import SparseVector


class Merge(NamedTuple):
    """
    One level of the dendrogram: ``left`` survives and absorbs ``right``.
    """
    left: int
    right: int


def cluster(vectors: MutableSequence[SparseVector],
            n_jobs: int = -1,
            pre_dispatch: str = "2*n_jobs",
            verbose: bool = False) -> List[Merge]:
    """
    Agglomerative clustering of term vectors by cosine similarity.

    Every vector starts as its own cluster. Each round merges the two most
    similar clusters (the survivor's vector absorbs the other's) until one
    cluster is left, so n vectors give exactly n - 1 merges. The order of the
    merges is the dendrogram.

    The vectors are modified in place: after the call ``vectors[i]`` holds the
    sum of every vector merged into cluster i.

    Args:
        vectors: Term vectors, one per entity
        n_jobs: Worker threads for similarity computation (-1 for all CPUs, default: -1)
        pre_dispatch: Bound on queued similarity tasks (default: "2*n_jobs")
        verbose: Print progress (default: False)

    Returns:
        List of Merge records, in merge order
    """
    n_items = len(vectors)
    if n_items < 2:
        return []

    merges: List[Merge] = []
    with make_worker_pool(n_jobs=n_jobs, pre_dispatch=pre_dispatch) as parallel:
        if verbose:
            print(f"Step 2.1: Computing {n_items * (n_items - 1) // 2} initial similarities...")
        matrix = SimilarityMatrix(vectors, parallel)
        if verbose:
            print(f"Step 2.1: Done computing similarities")
            print(f"Step 2.2: Merging {n_items} clusters ({n_items - 1} rounds)...")

        report_every = max(1, (n_items - 1) // 10)
        for round_no in range(n_items - 1):
            left, right, _ = matrix.best()

            # Matrix is synchronized here; no worker reads vectors until absorb().
            vectors[left].add(vectors[right])
            merges.append(Merge(left, right))
            matrix.absorb(left, right)

            if verbose and (round_no + 1) % report_every == 0:
                print(f"  Processed {round_no + 1}/{n_items - 1} rounds, {len(matrix)} pairs active...")

    if verbose:
        print(f"Step 2.2: Done - {len(merges)} merges")
    return merges
