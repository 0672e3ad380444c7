from collections import Counter

import pytest

from tokclust.merge_engine import Merge, cluster
from tokclust.term_vectors import build_vector
from tokclust.tokclust import generate_sample_tokens


def test_identical_lists_merge_first():
    vectors = [build_vector(t) for t in (["a", "a", "b"], ["a", "a", "b"], ["c"], ["d"])]

    merges = cluster(vectors, n_jobs=2)

    assert merges[0] == Merge(0, 1)
    assert merges == [Merge(0, 1), Merge(0, 2), Merge(0, 3)]


def test_single_vector_has_no_merges():
    assert cluster([build_vector(["a", "b"])]) == []


def test_no_vectors_has_no_merges():
    assert cluster([]) == []


def test_disjoint_singletons_merge_deterministically():
    vectors = [build_vector([f"t{i}"]) for i in range(10)]

    merges = cluster(vectors, n_jobs=4)

    assert len(merges) == 9
    assert merges == [Merge(0, k) for k in range(1, 10)]


def test_every_cluster_absorbed_once():
    token_lists = generate_sample_tokens(n_items=30, n_groups=3, tokens_per_item=10)
    vectors = [build_vector(t) for t in token_lists]

    merges = cluster(vectors, n_jobs=2)

    assert len(merges) == 29
    absorbed = Counter(m.right for m in merges)
    assert all(count == 1 for count in absorbed.values())
    survivors = set(range(30)) - set(absorbed)
    assert len(survivors) == 1
    survivor = survivors.pop()
    assert merges[-1].left == survivor
    for m in merges:
        assert m.left != m.right


def test_vectors_are_merged_in_place():
    token_lists = [["a", "b"], ["a"], ["c", "c"], []]
    vectors = [build_vector(t) for t in token_lists]

    merges = cluster(vectors, n_jobs=1)

    survivor = merges[-1].left
    total = Counter(t for tokens in token_lists for t in tokens)
    assert vectors[survivor].counts == dict(total)


def test_pool_size_does_not_change_result():
    token_lists = generate_sample_tokens(n_items=25, n_groups=5, tokens_per_item=8, seed=7)

    sequential = cluster([build_vector(t) for t in token_lists], n_jobs=1)
    threaded = cluster([build_vector(t) for t in token_lists], n_jobs=4, pre_dispatch="n_jobs")

    assert sequential == threaded


def test_groups_stay_together_before_joining():
    token_lists = [["a", "b"]] * 3 + [["x", "y"]] * 3
    vectors = [build_vector(t) for t in token_lists]

    merges = cluster(vectors, n_jobs=2)

    # Within-group merges (similarity 1) come before the cross-group merge (0).
    first_four = merges[:4]
    for m in first_four:
        assert (m.left < 3) == (m.right < 3)
    assert merges[-1] == Merge(0, 3)


def test_verbose_reports_progress(capsys):
    vectors = [build_vector([f"t{i % 3}"]) for i in range(12)]

    cluster(vectors, n_jobs=1, verbose=True)

    out = capsys.readouterr().out
    assert "Processed 11/11 rounds" in out


def test_invalid_pool_size():
    with pytest.raises(ValueError):
        cluster([build_vector(["a"]), build_vector(["b"])], n_jobs=0)
