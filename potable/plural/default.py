"""
Table-driven plural rules for the locales gettext commonly ships with.

Locales are grouped in families sharing a rule. Each rule is kept as the
gettext C expression, so the same table drives form selection and the
`Plural-Forms` headers written into merged catalogs.
"""
import functools
import re
from typing import Dict, Optional, Tuple

from potable.exceptions import PluralFormException
from potable.plural.base import PluralRules
from potable.plural.expression import PluralForms

_SLAVIC = "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"

# family name -> (nplurals, plural expression)
PLURAL_FAMILIES: Dict[str, Tuple[int, str]] = {
    "one_form": (1, "0"),
    "two_forms_one": (2, "(n != 1)"),
    "two_forms_many": (2, "(n > 1)"),
    "three_forms_slavic": (3, _SLAVIC),
    "three_forms_slavic_alt": (3, "(n==1 ? 0 : n>=2 && n<=4 ? 1 : 2)"),
    "ar": (6, "(n==0 ? 0 : n==1 ? 1 : n==2 ? 2 : n%100>=3 && n%100<=10 ? 3 : n%100>=11 ? 4 : 5)"),
    "csb": (3, "(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"),
    "cy": (4, "(n==1 ? 0 : n==2 ? 1 : n!=8 && n!=11 ? 2 : 3)"),
    "ga": (5, "(n==1 ? 0 : n==2 ? 1 : n>=3 && n<=6 ? 2 : n>=7 && n<=10 ? 3 : 4)"),
    "gd": (4, "(n==1 || n==11 ? 0 : n==2 || n==12 ? 1 : n>2 && n<20 ? 2 : 3)"),
    "is": (2, "(n%10!=1 || n%100==11)"),
    "jv": (2, "(n != 0)"),
    "kw": (4, "(n==1 ? 0 : n==2 ? 1 : n==3 ? 2 : 3)"),
    "lt": (3, "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && (n%100<10 || n%100>=20) ? 1 : 2)"),
    "lv": (3, "(n%10==1 && n%100!=11 ? 0 : n != 0 ? 1 : 2)"),
    "mk": (3, "(n%10==1 ? 0 : n%10==2 ? 1 : 2)"),
    "mnk": (3, "(n==0 ? 0 : n==1 ? 1 : 2)"),
    "mt": (4, "(n==1 ? 0 : n==0 || (n%100>1 && n%100<11) ? 1 : n%100>10 && n%100<20 ? 2 : 3)"),
    "pl": (3, "(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"),
    "ro": (3, "(n==1 ? 0 : n==0 || (n%100>0 && n%100<20) ? 1 : 2)"),
    "sl": (4, "(n%100==1 ? 1 : n%100==2 ? 2 : n%100==3 ? 3 : 0)"),
}

_ONE_FORM = (
    "ay bo cgg dz fa id ja jbo ka kk km ko ky lo ms my sah su th tt ug vi wo zh"
)
_TWO_FORMS_ONE = (
    "af an anp as ast az bg bn brx ca da de doi el en eo es et eu ff fi fo fur fy "
    "gl gu ha he hi hne hy hu ia it kl kn ku lb mai ml mn mni mr nah nap nb ne nl "
    "se nn no nso or ps pa pap pms pt rm rw sat sco sd si so son sq sw sv ta te tk "
    "ur yo"
)
_TWO_FORMS_MANY = "ach ak am arn br fil fr gun ln mfe mg mi oc tg ti tl tr uz wa"
_THREE_FORMS_SLAVIC = "be bs hr sr ru uk"
_THREE_FORMS_SLAVIC_ALT = "cs sk"


def _build_locale_table() -> Dict[str, str]:
    table = {}
    for family, locales in (
        ("one_form", _ONE_FORM),
        ("two_forms_one", _TWO_FORMS_ONE),
        ("two_forms_many", _TWO_FORMS_MANY),
        ("three_forms_slavic", _THREE_FORMS_SLAVIC),
        ("three_forms_slavic_alt", _THREE_FORMS_SLAVIC_ALT),
    ):
        for locale in locales.split():
            table[locale] = family

    for family in PLURAL_FAMILIES:
        if "_" not in family:
            table[family] = family

    # Brazilian Portuguese does not follow the `pt` rule
    table["pt_BR"] = "two_forms_many"
    return table


# locale -> family name
LOCALE_FAMILIES: Dict[str, str] = _build_locale_table()

FALLBACK_FAMILY = "two_forms_one"

_LOCALE_SEPARATORS = re.compile(r"[_\-.@]")


def locale_family(locale: Optional[str]) -> Optional[str]:
    """
    Return the rule family of ``locale``, or None if the locale is unknown.

    The locale is looked up as given first (`pt_BR`), then by its language
    part, i.e. the lowercased text before the first `_`, `-`, `.` or `@`.
    """
    if not locale:
        return None
    if locale in LOCALE_FAMILIES:
        return LOCALE_FAMILIES[locale]
    language = _LOCALE_SEPARATORS.split(locale, maxsplit=1)[0].lower()
    return LOCALE_FAMILIES.get(language)


def is_known_locale(locale: Optional[str]) -> bool:
    return locale_family(locale) is not None


@functools.lru_cache(maxsize=None)
def _family_plural_forms(family: str) -> PluralForms:
    nplurals, expression = PLURAL_FAMILIES[family]
    return PluralForms(nplurals, expression)


def plural_forms_for(locale: Optional[str]) -> PluralForms:
    """
    Return the compiled rule for ``locale``. Unknown locales get the
    two-form ``n != 1`` rule.
    """
    family = locale_family(locale) or FALLBACK_FAMILY
    return _family_plural_forms(family)


def plural_forms_header(locale: Optional[str]) -> str:
    """
    Return a complete `Plural-Forms` header value for ``locale``, e.g.
    ``nplurals=3; plural=(n==1 ? 0 : ...);``.
    """
    return plural_forms_for(locale).header


class DefaultPluralRules(PluralRules):
    """
    Plural rules from the built-in locale table. The state is the locale
    name itself, so ``init`` may be skipped.
    """

    def form_count(self, state) -> int:
        return plural_forms_for(state).nplurals

    def form_index(self, state, count: int) -> int:
        if count < 0:
            raise PluralFormException(f"plural form requested for negative count {count}")
        return plural_forms_for(state).select(count)
