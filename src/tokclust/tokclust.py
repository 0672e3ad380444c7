import numpy as np
from typing import List, MutableSequence, Optional, Sequence

from tokclust.dendrogram import interpret
from tokclust.merge_engine import Merge, cluster
from tokclust.term_vectors import SparseVector, build_vector


class HierarchicalMergeClustering:
    def __init__(self, n_jobs: int = -1, pre_dispatch: str = "2*n_jobs", verbose: bool = True):
        """
        Agglomerative clustering of token lists with flagged-cluster extraction.

        Each input item is turned into a sparse term vector. The two most
        similar clusters (cosine similarity) are merged every round until one
        is left; the resulting dendrogram is then scanned for clusters that
        are large but not dominant.

        Similarities are computed on a thread pool that lives for one
        fit_predict() call.

        Args:
            n_jobs: Worker threads for similarity computation (-1 for all CPUs, default: -1)
            pre_dispatch: Bound on queued similarity tasks (default: "2*n_jobs")
            verbose: Print progress (default: True)
        """
        if n_jobs == 0:
            raise ValueError(f"Invalid n_jobs: {n_jobs}. Use a positive count, or a negative one as in joblib (-1 for all CPUs).")
        self.n_jobs = n_jobs
        self.pre_dispatch = pre_dispatch
        self.verbose = verbose
        self.vectors_: List[SparseVector] = []
        self.merges_: List[Merge] = []
        self.final_clusters: List[List[int]] = []

    def build_vectors(self, token_lists: Sequence[Sequence[str]]) -> List[SparseVector]:
        return [build_vector(tokens) for tokens in token_lists]

    def cluster(self, vectors: MutableSequence[SparseVector]) -> List[Merge]:
        """
        Build the dendrogram. ``vectors`` are merged in place.
        """
        return cluster(vectors, n_jobs=self.n_jobs, pre_dispatch=self.pre_dispatch, verbose=self.verbose)

    def interpret(self, merges: Sequence[Merge]) -> List[List[int]]:
        return interpret(merges)

    def fit_predict(self, token_lists: Sequence[Sequence[str]]) -> List[List[int]]:
        """
        Main method: cluster token lists and return the flagged clusters.

        Args:
            token_lists: One token list per entity; duplicates count, order does not

        Returns:
            Flagged clusters as lists of input indices
        """
        if self.verbose:
            print(f"Step 1: Building term vectors for {len(token_lists)} items")
        vectors = self.build_vectors(token_lists)
        if self.verbose:
            empty = sum(1 for v in vectors if v.norm == 0)
            print(f"Step 1 Complete: {len(vectors)} vectors ({empty} empty)")

        if self.verbose:
            print("Step 2: Clustering...")
        merges = self.cluster(vectors)

        if self.verbose:
            print("Step 3: Interpreting dendrogram...")
        clusters = self.interpret(merges)

        if self.verbose:
            print("Step 4: Clustering complete!")
            print(f"Flagged {len(clusters)} clusters")

        self.vectors_ = vectors
        self.merges_ = merges
        self.final_clusters = clusters
        return clusters

    def named_clusters(self, names: Sequence[str]) -> List[List[str]]:
        """Map the flagged clusters back to entity names."""
        if len(names) != len(self.vectors_):
            raise ValueError(f"Expected {len(self.vectors_)} names, got {len(names)}")
        return [[names[i] for i in members] for members in self.final_clusters]

    def print_clusters(self, names: Optional[Sequence[str]] = None):
        """Print the flagged clusters in a readable format."""
        print("\n" + "="*50)
        print("FLAGGED CLUSTERS")
        print("="*50)

        if names is None:
            clusters = [[str(i) for i in members] for members in self.final_clusters]
        else:
            clusters = self.named_clusters(names)

        for members in clusters:
            print("[" + " ".join(members) + "]")
            print()

        print(f"Total clusters: {len(clusters)}")
        total_members = sum(len(members) for members in clusters)
        print(f"Total members: {total_members}")


def generate_sample_tokens(n_items: int = 100,
                           n_groups: int = 5,
                           tokens_per_item: int = 20,
                           vocab_per_group: int = 30,
                           noise: float = 0.2,
                           seed: int = 42) -> List[List[str]]:
    """
    Generate sample token lists for testing.

    Items are split evenly across groups; each token is drawn from the item's
    group vocabulary, or with probability ``noise`` from a vocabulary shared
    by all groups.

    Args:
        n_items: Number of items
        n_groups: Number of natural groups to create
        tokens_per_item: Tokens drawn per item (with repetition)
        vocab_per_group: Size of each group's vocabulary
        noise: Probability of drawing a shared token (default: 0.2)
        seed: Random seed

    Returns:
        List of n_items token lists
    """
    if n_items < 0:
        raise ValueError(f"n_items must be >= 0, got {n_items}")
    if n_groups < 1:
        raise ValueError(f"n_groups must be >= 1, got {n_groups}")
    if vocab_per_group < 1:
        raise ValueError(f"vocab_per_group must be >= 1, got {vocab_per_group}")

    rng = np.random.RandomState(seed)
    shared_vocab = [f"shared_{k}" for k in range(vocab_per_group)]

    token_lists = []
    # With fewer items than groups every item gets a group of its own.
    items_per_group = max(1, n_items // n_groups)
    for i in range(n_items):
        group = i // items_per_group
        if group >= n_groups:
            # Remaining items get no group of their own
            group = -1
        tokens = []
        for _ in range(tokens_per_item):
            k = int(rng.randint(vocab_per_group))
            if group < 0 or rng.rand() < noise:
                tokens.append(shared_vocab[k])
            else:
                tokens.append(f"g{group}_{k}")
        token_lists.append(tokens)

    return token_lists


# Example usage
if __name__ == "__main__":
    print("Generating sample token lists...")
    token_lists = generate_sample_tokens(n_items=60, n_groups=4)

    clusterer = HierarchicalMergeClustering(n_jobs=-1)
    clusters = clusterer.fit_predict(token_lists)
    clusterer.print_clusters()
