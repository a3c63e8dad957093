import pytest

from potable.exceptions import (
    DuplicateKeyException,
    ExceptionList,
    PolicyException,
    PotableException,
    PotablePanic,
    SourceLocation,
    SyntaxException,
    tag_source,
)

SOURCE = 'msgid "a"\nmsgstr\n'


def test_exception_list_empty():
    ExceptionList().raise_if_not_empty()


def test_exception_list_single():
    err = SyntaxException("bad")
    with pytest.raises(SyntaxException) as e:
        ExceptionList([err]).raise_if_not_empty()
    assert e.value is err


def test_exception_list_many():
    errors = ExceptionList([SyntaxException("first"), PolicyException("second")])
    with pytest.raises(PotableException) as e:
        errors.raise_if_not_empty()
    assert e.value.message == (
        "Catalog check failed with the following errors:"
        "\n\nSyntaxException: first"
        "\n\nPolicyException: second"
    )


def test_str_without_location():
    assert str(PotableException("plain")) == "plain"


def test_str_without_source():
    assert str(SyntaxException("bad", (3, 4))) == "line 3:4 bad"
    assert str(SyntaxException("bad", SourceLocation(3))) == "line 3: bad"


def test_str_with_source():
    err = SyntaxException("bad", (2, 0), source_code=SOURCE, path="it.po")
    text = str(err)
    assert text.startswith("bad\n\n")
    assert 'catalog "it.po:2", line 2:0' in text
    assert "msgstr" in text
    assert "^" in text


def test_location_past_end_of_input():
    err = SyntaxException("syntax error before: end of input", (5, None), source_code=SOURCE)
    assert str(err).rstrip().endswith("line 5")


def test_hint():
    assert PotableException("msg", hint="try this").message == "msg\n\n  (hint: try this)"
    assert PotableException("msg", hint=lambda: "lazy").message == "msg\n\n  (hint: lazy)"


def test_tag_source():
    with pytest.raises(SyntaxException) as e:
        with tag_source(SOURCE, "it.po"):
            raise SyntaxException("bad", (2, 0))
    assert e.value.source_code == SOURCE
    assert e.value.path == "it.po"


def test_tag_source_keeps_existing_source():
    with pytest.raises(SyntaxException) as e:
        with tag_source("other", "other.po"):
            raise SyntaxException("bad", (2, 0), source_code=SOURCE, path="it.po")
    assert e.value.source_code == SOURCE
    assert e.value.path == "it.po"


def test_with_source_copies():
    err = SyntaxException("bad", (1, 0))
    tagged = err.with_source(SOURCE, "it.po")
    assert tagged is not err
    assert err.source_code is None
    assert tagged.path == "it.po"


def test_duplicate_key_shows_previous_declaration():
    source = 'msgid "foo"\nmsgstr ""\nmsgid "foo"\nmsgstr ""\n'
    err = DuplicateKeyException(SourceLocation(3, 0), SourceLocation(1, 0), "foo")
    text = str(err.with_source(source))
    assert "(previously declared at)" in text
    assert text.startswith("found duplicate on line 1 for msgid: 'foo'")


def test_panic_message():
    assert str(PotablePanic("oops")).endswith("This is an unhandled internal error in potable.")
