from typing import Optional

from potable.plural.base import PluralRules
from potable.plural.default import DefaultPluralRules, plural_forms_header
from potable.plural.expression import PluralForms, PluralFormsRules, parse_plural_forms

DEFAULT_RULES = DefaultPluralRules()


def form_count(locale, rules: Optional[PluralRules] = None) -> int:
    """
    Return the number of plural forms of ``locale`` under ``rules`` (the
    built-in table by default).
    """
    rules = rules or DEFAULT_RULES
    return rules.form_count(rules.init(locale))


def form_index(locale, count: int, rules: Optional[PluralRules] = None) -> int:
    """
    Return the plural form ``count`` belongs to in ``locale``.
    """
    rules = rules or DEFAULT_RULES
    return rules.form_index(rules.init(locale), count)


__all__ = [
    "DEFAULT_RULES",
    "DefaultPluralRules",
    "PluralForms",
    "PluralFormsRules",
    "PluralRules",
    "form_count",
    "form_index",
    "parse_plural_forms",
    "plural_forms_header",
]
