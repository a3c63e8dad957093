"""
Plural rules written as gettext `Plural-Forms` headers.

A header such as ``nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 ? 1 : 2);``
holds the number of forms and a C expression over the count ``n``. The
expression is parsed once with lark and compiled into a tree of closures.
"""
import operator
import re
from typing import Callable, Optional

from lark import Lark, Transformer
from lark.exceptions import LarkError

from potable.exceptions import PluralFormException, UnknownPluralForms
from potable.plural.base import PluralRules

PLURAL_EXPRESSION_GRAMMAR = """
    ?start: expr

    ?expr: or_expr "?" expr ":" expr -> ternary
         | or_expr

    ?or_expr: or_expr "||" and_expr -> or_
            | and_expr

    ?and_expr: and_expr "&&" eq_expr -> and_
             | eq_expr

    ?eq_expr: eq_expr EQ_OP rel_expr -> compare
            | rel_expr

    ?rel_expr: rel_expr REL_OP add_expr -> compare
             | add_expr

    ?add_expr: add_expr ADD_OP mul_expr -> arith
             | mul_expr

    ?mul_expr: mul_expr MUL_OP unary -> arith
             | unary

    ?unary: "!" unary -> not_
          | atom

    ?atom: INT -> number
         | "n" -> var
         | "(" expr ")"

    EQ_OP: "==" | "!="
    REL_OP: "<=" | ">=" | "<" | ">"
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/" | "%"

    %import common.INT
    %import common.WS
    %ignore WS
    """

_plural_parser = None


def plural_expression_parser() -> Lark:
    global _plural_parser
    if _plural_parser is None:
        _plural_parser = Lark(PLURAL_EXPRESSION_GRAMMAR, parser="lalr")
    return _plural_parser


Selector = Callable[[int], int]


def _c_div(a: int, b: int) -> int:
    # C integer division truncates towards zero
    if b == 0:
        raise PluralFormException("division by zero in plural expression")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _c_mod(a: int, b: int) -> int:
    return a - b * _c_div(a, b)


_COMPARISONS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _c_div,
    "%": _c_mod,
}


class PluralExpressionTransformer(Transformer):
    def number(self, children) -> Selector:
        value = int(children[0])
        return lambda n: value

    def var(self, children) -> Selector:
        return lambda n: n

    def not_(self, children) -> Selector:
        (operand,) = children
        return lambda n: int(not operand(n))

    def compare(self, children) -> Selector:
        left, op, right = children
        fn = _COMPARISONS[str(op)]
        return lambda n: int(fn(left(n), right(n)))

    def arith(self, children) -> Selector:
        left, op, right = children
        fn = _ARITHMETIC[str(op)]
        return lambda n: fn(left(n), right(n))

    def and_(self, children) -> Selector:
        left, right = children
        return lambda n: int(bool(left(n)) and bool(right(n)))

    def or_(self, children) -> Selector:
        left, right = children
        return lambda n: int(bool(left(n)) or bool(right(n)))

    def ternary(self, children) -> Selector:
        cond, then, otherwise = children
        return lambda n: then(n) if cond(n) else otherwise(n)


def compile_expression(expression: str) -> Selector:
    """
    Compile the C expression of a `plural=` clause into a function of ``n``.

    Raises ``UnknownPluralForms`` if the expression cannot be parsed.
    """
    try:
        tree = plural_expression_parser().parse(expression)
    except LarkError as e:
        raise UnknownPluralForms(f"invalid plural expression {expression!r}") from e
    selector = PluralExpressionTransformer().transform(tree)
    assert callable(selector)  # help mypy
    return selector


class PluralForms:
    """
    A compiled plural rule: the number of forms and the form selector.
    """

    def __init__(self, nplurals: int, expression: str):
        if nplurals < 1:
            raise UnknownPluralForms(f"nplurals must be positive, got {nplurals}")
        self.nplurals = nplurals
        self.expression = expression.strip()
        self._selector = compile_expression(self.expression)

    @property
    def header(self) -> str:
        return f"nplurals={self.nplurals}; plural={self.expression};"

    def select(self, count: int) -> int:
        if count < 0:
            raise PluralFormException(f"plural form requested for negative count {count}")
        index = self._selector(count)
        if not 0 <= index < self.nplurals:
            raise PluralFormException(
                f"plural expression {self.expression!r} selected form {index} for count "
                f"{count}, but only {self.nplurals} forms exist"
            )
        return index

    def __repr__(self):
        return f"PluralForms({self.header!r})"


_NPLURALS_RE = re.compile(r"\bnplurals\s*=\s*(\d+)")
_PLURAL_RE = re.compile(r"\bplural\s*=\s*([^;]+)")


def parse_plural_forms(header: str) -> PluralForms:
    """
    Parse the value of a `Plural-Forms` header.

    A header with a single form may leave out the `plural=` clause.
    """
    nplurals_match = _NPLURALS_RE.search(header)
    if nplurals_match is None:
        raise UnknownPluralForms(f"missing nplurals in plural forms header {header!r}")
    nplurals = int(nplurals_match.group(1))

    plural_match = _PLURAL_RE.search(header)
    if plural_match is None:
        if nplurals != 1:
            raise UnknownPluralForms(f"missing plural expression in plural forms header {header!r}")
        return PluralForms(1, "0")

    return PluralForms(nplurals, plural_match.group(1))


class PluralFormsRules(PluralRules):
    """
    Rule source driven by `Plural-Forms` headers.

    ``init`` accepts either a header value or a locale name; anything
    without an ``nplurals=`` clause is handed to the ``fallback`` source.
    """

    def __init__(self, fallback: Optional[PluralRules] = None):
        if fallback is None:
            from potable.plural.default import DefaultPluralRules

            fallback = DefaultPluralRules()
        self.fallback = fallback

    def init(self, descriptor):
        if isinstance(descriptor, PluralForms):
            return descriptor
        if isinstance(descriptor, str) and _NPLURALS_RE.search(descriptor):
            return parse_plural_forms(descriptor)
        return _Delegated(self.fallback.init(descriptor))

    def form_count(self, state) -> int:
        if isinstance(state, _Delegated):
            return self.fallback.form_count(state.state)
        return state.nplurals

    def form_index(self, state, count: int) -> int:
        if isinstance(state, _Delegated):
            return self.fallback.form_index(state.state, count)
        return state.select(count)


class _Delegated:
    def __init__(self, state):
        self.state = state
