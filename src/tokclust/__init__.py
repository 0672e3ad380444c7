"""tokclust package

Hierarchical agglomerative clustering of token lists by cosine similarity.
"""

__version__ = "0.1.0"

from .term_vectors import SparseVector, build_vector
from .merge_engine import Merge, cluster
from .dendrogram import interpret
from .tokclust import HierarchicalMergeClustering, generate_sample_tokens

__all__ = [
    "SparseVector",
    "build_vector",
    "Merge",
    "cluster",
    "interpret",
    "HierarchicalMergeClustering",
    "generate_sample_tokens",
    "__version__",
]
