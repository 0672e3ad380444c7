import math

import pytest

from tokclust.term_vectors import SparseVector, build_vector


def test_build_vector_counts_tokens():
    v = build_vector(["a", "a", "b"])

    assert v.counts == {"a": 2, "b": 1}
    assert v.norm == pytest.approx(math.sqrt(5))
    assert len(v) == 2


def test_empty_token_list_is_zero_vector():
    v = build_vector([])

    assert v.counts == {}
    assert v.norm == 0.0
    assert v.sim(v) == 0.0


def test_sim_is_symmetric():
    a = build_vector(["x", "y", "y", "z"])
    b = build_vector(["y", "z", "z", "w", "w", "w"])

    assert a.sim(b) == b.sim(a)


def test_sim_range():
    vectors = [
        build_vector(["a"]),
        build_vector(["a", "b", "b"]),
        build_vector(["c", "c"]),
        build_vector(["a", "a", "a", "c"]),
    ]
    for a in vectors:
        for b in vectors:
            assert 0.0 <= a.sim(b) <= 1.0 + 1e-12


def test_sim_with_zero_vector_is_zero():
    a = build_vector(["a", "b"])
    zero = build_vector([])

    assert a.sim(zero) == 0.0
    assert zero.sim(a) == 0.0
    assert zero.sim(zero) == 0.0


def test_identical_vectors_have_similarity_one():
    a = build_vector(["a", "a", "b"])
    b = build_vector(["b", "a", "a"])

    assert a.sim(b) == pytest.approx(1.0)


def test_disjoint_vectors_have_similarity_zero():
    assert build_vector(["a"]).sim(build_vector(["b"])) == 0.0


def test_dot_uses_shared_tokens_only():
    a = build_vector(["a", "a", "b", "c"])
    b = build_vector(["a", "c", "c", "d", "d", "d", "d"])

    assert a.dot(b) == 2 * 1 + 1 * 2
    assert b.dot(a) == a.dot(b)


def test_renorm_is_idempotent():
    v = build_vector(["a", "b", "b", "c", "c", "c"])
    v.renorm()
    first = v.norm
    v.renorm()

    assert v.norm == first


def test_renorm_after_direct_mutation():
    v = build_vector(["a"])
    v.counts["b"] = 3
    v.renorm()

    assert v.norm == pytest.approx(math.sqrt(10))


def test_add_merges_counts_and_renorms():
    a = build_vector(["a", "a", "b"])
    b = build_vector(["b", "c", "c", "c"])
    expected = {"a": 2, "b": 2, "c": 3}

    a.add(b)

    assert a.counts == expected
    assert a.norm == pytest.approx(math.sqrt(sum(c * c for c in expected.values())))
    # other side untouched
    assert b.counts == {"b": 1, "c": 3}


def test_add_zero_vector_keeps_norm():
    a = build_vector(["a", "b"])
    a.add(SparseVector())

    assert a.counts == {"a": 1, "b": 1}
    assert a.norm == pytest.approx(math.sqrt(2))
