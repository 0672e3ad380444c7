#!/usr/bin/env python3
"""Simple runnable example for tokclust

Usage:
  python examples/run_clustering.py --mode synthetic
  python examples/run_clustering.py --mode fdata --user someone --data_dir fdata

In fdata mode the directory must already hold one relation file per entity
("> name" / "< name" lines); nothing is downloaded.
"""
from __future__ import annotations

import argparse
import json
import os
import sys

from tokclust.relations import MissingRelationDataError, load_entity_tokens
from tokclust.tokclust import HierarchicalMergeClustering, generate_sample_tokens


def run_synthetic(n_items: int = 200, n_groups: int = 4, tokens_per_item: int = 20, n_jobs: int = -1, **_):
    print("Generating synthetic token lists...")
    token_lists = generate_sample_tokens(n_items=n_items, n_groups=n_groups, tokens_per_item=tokens_per_item)
    names = [f"item{i}" for i in range(n_items)]

    clusterer = HierarchicalMergeClustering(n_jobs=n_jobs)
    clusterer.fit_predict(token_lists)

    print_summary(clusterer, names)
    return clusterer.final_clusters


def run_fdata(user: str, data_dir: str = "fdata", skip_missing: bool = False, n_jobs: int = -1, **_):
    try:
        names, token_lists = load_entity_tokens(user, data_dir, skip_missing=skip_missing)
    except (MissingRelationDataError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Loaded relation lists for {len(names)} entities")

    clusterer = HierarchicalMergeClustering(n_jobs=n_jobs)
    clusterer.fit_predict(token_lists)

    print_summary(clusterer, names)
    return clusterer.final_clusters


def print_summary(clusterer: HierarchicalMergeClustering, names):
    clusterer.print_clusters(names)

    sizes = sorted([len(c) for c in clusterer.final_clusters], reverse=True)
    print("\nRESULT SUMMARY")
    print("--------------")
    print(f"Merges: {len(clusterer.merges_)}")
    print(f"Flagged clusters: {len(sizes)}")
    print(f"Top cluster sizes: {sizes[:5]}")

    # Save to disk for quick inspection
    out_path = os.path.join(".", "clusters.json")
    with open(out_path, "w") as fh:
        json.dump(clusterer.named_clusters(names), fh)
    print(f"Saved clusters.json ({out_path})")


def main(mode: str, **kwargs):
    if mode == "synthetic":
        return run_synthetic(**kwargs)
    elif mode == "fdata":
        if not kwargs.get("user"):
            raise ValueError("fdata mode needs --user")
        return run_fdata(**kwargs)
    else:
        raise ValueError("Unknown mode: " + str(mode))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", choices=["synthetic", "fdata"], default="synthetic")
    parser.add_argument("--user", default="", help="Entity whose outgoing relations are clustered (fdata mode)")
    parser.add_argument("--data_dir", default="fdata")
    parser.add_argument("--skip_missing", action="store_true")
    parser.add_argument("--n_items", type=int, default=200)
    parser.add_argument("--n_groups", type=int, default=4)
    parser.add_argument("--tokens_per_item", type=int, default=20)
    parser.add_argument("--n_jobs", type=int, default=-1)
    args = parser.parse_args()

    main(args.mode, user=args.user, data_dir=args.data_dir, skip_missing=args.skip_missing,
         n_items=args.n_items, n_groups=args.n_groups, tokens_per_item=args.tokens_per_item,
         n_jobs=args.n_jobs)
