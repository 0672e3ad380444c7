"""Demo runner for tokclust on synthetic token lists.

Run it with `python -m tokclust.main` once the package is installed
(e.g. `pip install -e .`). It prints the flagged clusters of a grouped sample.
"""
from __future__ import annotations

from tokclust.tokclust import HierarchicalMergeClustering, generate_sample_tokens


if __name__ == "__main__":
    print("Creating token lists...")
    # Simple demo using synthetic token lists
    token_lists = generate_sample_tokens(n_items=100, n_groups=4, tokens_per_item=25)

    clusterer = HierarchicalMergeClustering(n_jobs=-1)
    clusters = clusterer.fit_predict(token_lists)
    clusterer.print_clusters()
