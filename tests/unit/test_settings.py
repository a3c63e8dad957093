import pytest

from potable.exceptions import PolicyException
from potable.settings import MergePolicy, ObsoletePolicy, read_nplurals


def test_default_policy():
    policy = MergePolicy()
    assert policy.on_obsolete == ObsoletePolicy.MARK_AS_OBSOLETE
    assert policy.fuzzy
    assert policy.fuzzy_threshold == 0.8
    assert not policy.store_previous_message_on_fuzzy_match
    assert policy.plural_forms_header is None


@pytest.mark.parametrize(
    "value,expected",
    [
        ("mark_as_obsolete", ObsoletePolicy.MARK_AS_OBSOLETE),
        ("mark", ObsoletePolicy.MARK_AS_OBSOLETE),
        ("delete", ObsoletePolicy.DELETE),
        (ObsoletePolicy.DELETE, ObsoletePolicy.DELETE),
    ],
)
def test_on_obsolete(value, expected):
    assert MergePolicy(on_obsolete=value).on_obsolete == expected


def test_bad_on_obsolete():
    with pytest.raises(PolicyException) as e:
        MergePolicy(on_obsolete="keep")
    assert e.value.message == (
        "unrecognized on_obsolete value: 'keep' (expected one of mark_as_obsolete, delete)"
    )

    with pytest.raises(PolicyException):
        MergePolicy(on_obsolete=1)


@pytest.mark.parametrize("threshold", [-0.1, 1.5, float("nan"), True, "0.5", None])
def test_bad_fuzzy_threshold(threshold):
    with pytest.raises(PolicyException):
        MergePolicy(fuzzy_threshold=threshold)


@pytest.mark.parametrize("threshold", [0, 1, 0.0, 0.5, 1.0])
def test_fuzzy_threshold_bounds(threshold):
    policy = MergePolicy(fuzzy_threshold=threshold)
    assert isinstance(policy.fuzzy_threshold, float)
    assert policy.fuzzy_threshold == threshold


@pytest.mark.parametrize("header", ["plural=(n != 1);", "nplurals=0; plural=0;", ""])
def test_bad_plural_forms_header(header):
    with pytest.raises(PolicyException):
        MergePolicy(plural_forms_header=header)


def test_from_dict():
    policy = MergePolicy.from_dict({"on_obsolete": "delete", "fuzzy_threshold": 0.5})
    assert policy.on_obsolete == ObsoletePolicy.DELETE
    assert policy.fuzzy_threshold == 0.5


@pytest.mark.parametrize(
    "header,expected",
    [
        ("nplurals=3; plural=0;", 3),
        ("nplurals = 2", 2),
        ("plural=0;", None),
        (None, None),
    ],
)
def test_read_nplurals(header, expected):
    assert read_nplurals(header) == expected
