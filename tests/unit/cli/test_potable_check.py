import sys

import pytest

from potable.cli.potable_check import _parse_args, check_file, plural_form_count
from potable.po import Catalog
from potable.warnings import PlaceholderMismatch

GOOD = r"""
msgid ""
msgstr ""
"Language: pl\n"

msgid "file"
msgid_plural "%{count} files"
msgstr[0] "plik"
msgstr[1] "%{count} pliki"
msgstr[2] "%{count} plików"
"""

TOO_MANY_FORMS = r"""
msgid ""
msgstr ""
"Language: en\n"

msgid "file"
msgid_plural "files"
msgstr[0] "file"
msgstr[1] "files"
msgstr[2] "filez"
"""

BAD_PLACEHOLDER = """
msgid "Hi %{name}"
msgstr "Ciao %{nome}"
"""


@pytest.fixture(autouse=True)
def restore_traceback_limit(monkeypatch):
    monkeypatch.setattr(sys, "tracebacklimit", 1000, raising=False)


def test_good_catalog(make_file, capsys):
    path = make_file("good.po", GOOD.lstrip())
    _parse_args([str(path)])
    assert capsys.readouterr().err == ""


def test_too_many_plural_forms(make_file, capsys):
    path = make_file("bad.po", TOO_MANY_FORMS.lstrip())
    with pytest.raises(SystemExit) as e:
        _parse_args([str(path)])
    assert e.value.code == 1

    err = capsys.readouterr().err
    assert err.startswith(f"{path}: ")
    assert "msgstr[2] of msgid 'file' is out of range, the locale has 2 plural forms" in err


def test_locale_option(make_file):
    path = make_file("good.po", GOOD.lstrip())
    with pytest.raises(SystemExit):
        _parse_args([str(path), "--locale", "ja"])


def test_syntax_error(make_file, capsys):
    path = make_file("broken.po", 'msgid "a"\nmsgid "b"\n')
    with pytest.raises(SystemExit):
        _parse_args([str(path)])
    assert "syntax error before: msgid" in capsys.readouterr().err


def test_only_failing_files_are_reported(make_file, capsys):
    good = make_file("good.po", GOOD.lstrip())
    bad = make_file("bad.po", TOO_MANY_FORMS.lstrip())
    with pytest.raises(SystemExit):
        _parse_args([str(good), str(bad)])

    err = capsys.readouterr().err
    assert str(bad) in err
    assert str(good) not in err


def test_placeholder_mismatch_warns(make_file):
    path = make_file("hi.po", BAD_PLACEHOLDER.lstrip())
    with pytest.warns(PlaceholderMismatch):
        _parse_args([str(path)])


def test_placeholder_mismatch_as_error(make_file, capsys):
    path = make_file("hi.po", BAD_PLACEHOLDER.lstrip())
    with pytest.raises(SystemExit):
        _parse_args([str(path), "-W", "error"])
    assert "unknown placeholders: nome" in capsys.readouterr().err


def test_check_file(make_file):
    path = make_file("good.po", GOOD.lstrip())
    catalog = check_file(path)
    assert catalog.headers["Language"] == "pl"


def test_check_file_with_byte_order_mark(make_file):
    path = make_file("bom.po", "\ufeff" + GOOD.lstrip())
    catalog = check_file(path)
    assert catalog.headers["Language"] == "pl"
    assert catalog.entries[0].msgid == ["file"]


@pytest.mark.parametrize(
    "headers,locale,expected",
    [
        ({}, None, 2),
        ({"Language": "ar"}, None, 6),
        ({"Language": "ar"}, "ja", 1),
        ({"Plural-Forms": "nplurals=4; plural=n%4;"}, None, 4),
        ({"Language": "ru", "Plural-Forms": "nplurals=4; plural=n%4;"}, None, 3),
    ],
)
def test_plural_form_count(headers, locale, expected):
    assert plural_form_count(Catalog(headers=headers), locale) == expected
