import pytest

from potable.merge.levenshtein_utils import (
    levenshtein,
    levenshtein_norm,
    similarity,
    similarity_upper_bound,
)


@pytest.mark.parametrize(
    "source,target,distance",
    [
        ("", "", 0),
        ("", "abc", 3),
        ("abc", "", 3),
        ("abc", "abc", 0),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("Hello World", "Hello Worlds", 1),
    ],
)
def test_levenshtein(source, target, distance):
    assert levenshtein(source, target) == distance
    assert levenshtein(target, source) == distance


def test_levenshtein_norm():
    assert levenshtein_norm("", "") == 0.0
    assert levenshtein_norm("abc", "xyz") == 1.0
    assert levenshtein_norm("ab", "abcd") == 0.5


def test_similarity():
    assert similarity("foo", "foo") == 1.0
    assert similarity("", "") == 1.0
    assert similarity("abc", "xyz") == 0.0
    assert similarity("Hello World", "Hello Worlds") == pytest.approx(11 / 12)


@pytest.mark.parametrize(
    "source,target",
    [("", ""), ("a", ""), ("kitten", "sitting"), ("Hello", "Hello Worlds"), ("abc", "cba")],
)
def test_upper_bound_dominates_similarity(source, target):
    assert similarity_upper_bound(source, target) >= similarity(source, target)
