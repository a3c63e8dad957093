import pytest

from potable.exceptions import PluralFormException, UnknownPluralForms
from potable.plural import PluralForms, PluralFormsRules, PluralRules, form_count, form_index
from potable.plural.expression import _c_div, _c_mod, compile_expression, parse_plural_forms


@pytest.mark.parametrize(
    "expression,n,expected",
    [
        ("n", 7, 7),
        ("n + 2 * 3", 1, 7),
        ("(n + 2) * 3", 1, 9),
        ("10 - 3 - 2", 0, 5),
        ("n / 2", 7, 3),
        ("n % 10", 123, 3),
        ("!n", 0, 1),
        ("!n", 4, 0),
        ("n != 1", 1, 0),
        ("n > 1", 2, 1),
        ("n < 5 == 1", 3, 1),
        ("1 || 0 && 0", 0, 1),
        ("n % 10 == 1 && n % 100 != 11", 21, 1),
        ("n % 10 == 1 && n % 100 != 11", 11, 0),
        ("0 ? 1 : 2", 0, 2),
        ("n == 1 ? 0 : n == 2 ? 1 : 2", 2, 1),
        ("n == 1 ? 0 : n == 2 ? 1 : 2", 9, 2),
        ("  ( n>=2 )  ", 2, 1),
    ],
)
def test_compile_expression(expression, n, expected):
    assert compile_expression(expression)(n) == expected


@pytest.mark.parametrize("expression", ["", "n +", "x", "n == ", "(n", "n ? 1", "1 2"])
def test_invalid_expression(expression):
    with pytest.raises(UnknownPluralForms):
        compile_expression(expression)


def test_c_integer_semantics():
    assert _c_div(-7, 2) == -3
    assert _c_mod(-7, 3) == -1
    assert _c_mod(7, 3) == 1


def test_division_by_zero():
    forms = PluralForms(2, "n / 0")
    with pytest.raises(PluralFormException):
        forms.select(1)


def test_parse_plural_forms():
    forms = parse_plural_forms("nplurals=3; plural=(n==1 ? 0 : n==2 ? 1 : 2);")
    assert forms.nplurals == 3
    assert [forms.select(n) for n in (0, 1, 2, 3)] == [2, 0, 1, 2]
    assert forms.header == "nplurals=3; plural=(n==1 ? 0 : n==2 ? 1 : 2);"


def test_single_form_header_may_omit_plural():
    forms = parse_plural_forms("nplurals=1;")
    assert forms.select(42) == 0


@pytest.mark.parametrize(
    "header",
    ["plural=(n != 1);", "nplurals=2;", "nplurals=0; plural=0;", "nplurals=2; plural=n +;"],
)
def test_bad_plural_forms_headers(header):
    with pytest.raises(UnknownPluralForms):
        parse_plural_forms(header)


def test_select_out_of_range():
    forms = PluralForms(2, "n")
    assert forms.select(1) == 1
    with pytest.raises(PluralFormException) as e:
        forms.select(5)
    assert "selected form 5 for count 5" in e.value.message


def test_select_negative_count():
    with pytest.raises(PluralFormException):
        PluralForms(2, "(n != 1)").select(-1)


def test_header_strips_expression():
    forms = PluralForms(2, " (n != 1) ")
    assert forms.header == "nplurals=2; plural=(n != 1);"
    assert repr(forms) == "PluralForms('nplurals=2; plural=(n != 1);')"


def test_plural_forms_rules():
    rules = PluralFormsRules()
    header = "nplurals=3; plural=(n==1 ? 0 : n==2 ? 1 : 2);"
    assert form_count(header, rules) == 3
    assert form_index(header, 2, rules) == 1

    # locale names go to the built-in table
    assert form_count("pl", rules) == 3
    assert form_index("pl", 5, rules) == 2

    forms = PluralForms(4, "n % 4")
    assert form_index(forms, 7, rules) == 3


class _Constant(PluralRules):
    def init(self, descriptor):
        return 0 if descriptor == "one" else 1

    def form_count(self, state):
        return 1 + state

    def form_index(self, state, count):
        return state if count else 0


def test_plural_forms_rules_custom_fallback():
    rules = PluralFormsRules(fallback=_Constant())
    assert form_count("one", rules) == 1
    assert form_count("two", rules) == 2
    assert form_index("two", 3, rules) == 1
    assert form_count("nplurals=1;", rules) == 1
