from potable.merge.fuzzy import (
    carry_translation,
    convert_msgstr,
    find_fuzzy_match,
    fresh_entry,
    merge_fuzzy,
    strip_developer_comments,
)
from potable.po.nodes import PluralEntry, SingularEntry


def _singular(msgid, msgstr="", **kwargs):
    return SingularEntry(msgid=[msgid], msgstr=[msgstr], **kwargs)


def test_find_fuzzy_match_picks_closest():
    candidates = [_singular("Goodbye"), _singular("Hello World"), _singular("Hello Wor")]
    assert find_fuzzy_match(_singular("Hello Worlds"), candidates, 0.8) == 1


def test_find_fuzzy_match_ties_go_to_first_candidate():
    candidates = [_singular("Hello World!"), _singular("Hello Worlds")]
    assert find_fuzzy_match(_singular("Hello World"), candidates, 0.8) == 0


def test_find_fuzzy_match_below_threshold():
    candidates = [_singular("Hello World")]
    assert find_fuzzy_match(_singular("Goodbye"), candidates, 0.8) is None
    assert find_fuzzy_match(_singular("Hello Worlds"), candidates, 0.95) is None
    assert find_fuzzy_match(_singular("Hello Worlds"), [], 0.0) is None


def test_find_fuzzy_match_ignores_context():
    candidates = [_singular("Hello World", msgctxt=["menu"])]
    assert find_fuzzy_match(_singular("Hello Worlds"), candidates, 0.8) == 0


def test_convert_msgstr_shapes():
    singular = _singular("file", "fichier")
    plural = PluralEntry(msgid=["file"], msgid_plural=["files"], msgstr={0: ["a"], 1: ["b"]})

    assert convert_msgstr(singular, plural, 3) == {0: ["fichier"], 1: ["fichier"], 2: ["fichier"]}
    assert convert_msgstr(plural, singular, 3) == ["a"]
    assert convert_msgstr(plural, plural, 3) == {0: ["a"], 1: ["b"]}
    assert convert_msgstr(singular, singular, 3) == ["fichier"]

    empty = PluralEntry(msgid=["file"], msgid_plural=["files"], msgstr={})
    assert convert_msgstr(empty, singular, 2) == [""]


def test_carry_translation():
    new = _singular(
        "foo",
        extracted_comments=["new extracted"],
        references=[("new.ex", 1)],
        flags={"elixir-format", "fuzzy"},
    )
    old = _singular(
        "foo",
        "bar",
        comments=["# translator"],
        extracted_comments=["old extracted"],
        references=[("old.ex", 9)],
        previous_msgid=["fo"],
    )
    merged = carry_translation(new, old, 2)
    assert merged.msgstr == ["bar"]
    assert merged.comments == ["# translator"]
    assert merged.extracted_comments == ["new extracted"]
    assert merged.references == [("new.ex", 1)]
    assert merged.flags == {"elixir-format"}
    assert merged.previous_msgid is None
    # inputs are left alone
    assert new.flags == {"elixir-format", "fuzzy"}
    assert old.msgstr == ["bar"]


def test_merge_fuzzy():
    new = _singular("Hello Worlds")
    old = _singular("Hello World", "Ciao Mondo", msgctxt=["greeting"], comments=["# hi"])

    merged = merge_fuzzy(new, old, 2)
    assert merged.is_fuzzy
    assert merged.msgid == ["Hello Worlds"]
    assert merged.msgctxt is None
    assert merged.msgstr == ["Ciao Mondo"]
    assert merged.comments == ["# hi"]
    assert merged.previous_msgid is None

    merged = merge_fuzzy(new, old, 2, store_previous=True)
    assert merged.previous_msgid == ["Hello World"]
    assert merged.previous_msgctxt == ["greeting"]
    assert merged.previous_msgid_plural is None


def test_merge_fuzzy_plural_history():
    new = PluralEntry(msgid=["apple"], msgid_plural=["apples!"])
    old = PluralEntry(msgid=["apple"], msgid_plural=["apples"], msgstr={0: ["mela"], 1: ["mele"]})
    merged = merge_fuzzy(new, old, 2, store_previous=True)
    assert merged.previous_msgid_plural == ["apples"]
    assert merged.msgstr == {0: ["mela"], 1: ["mele"]}


def test_fresh_entry():
    singular = _singular("foo", "stale", comments=["# keep", "## drop"], obsolete=True)
    entry = fresh_entry(singular, 2)
    assert entry.msgstr == [""]
    assert entry.comments == ["# keep"]
    assert not entry.obsolete

    plural = PluralEntry(msgid=["a"], msgid_plural=["as"], msgstr={0: ["x"]})
    assert fresh_entry(plural, 3).msgstr == {0: [""], 1: [""], 2: [""]}


def test_strip_developer_comments():
    comments = ["# a", "##", "## dev", "#  b"]
    assert strip_developer_comments(comments) == ["# a", "#  b"]
