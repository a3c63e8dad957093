"""
Runtime lookup of translations.

A `Translations` object indexes the live, translated and non-fuzzy entries
of any number of catalogs by ``(locale, domain, msgctxt, msgid)``. Lookups
are dictionary accesses; a message without a usable translation falls back
to its source string. Results are interpolated with the given bindings.
"""
from typing import Any, Dict, Mapping, Optional, Tuple

from potable.exceptions import PluralFormException
from potable.interpolation import render
from potable.plural import DEFAULT_RULES, PluralRules
from potable.po.nodes import Catalog, PluralEntry, SingularEntry

DEFAULT_DOMAIN = "default"

_SingularKey = Tuple[str, str, Optional[str], str]
_PluralKey = Tuple[str, str, Optional[str], str, str]


class Translations:
    def __init__(self, rules: Optional[PluralRules] = None):
        self.rules = rules or DEFAULT_RULES
        self._singular: Dict[_SingularKey, SingularEntry] = {}
        self._plural: Dict[_PluralKey, PluralEntry] = {}
        self._plural_states: Dict[Tuple[str, str], Any] = {}

    def add_catalog(
        self,
        locale: str,
        catalog: Catalog,
        domain: str = DEFAULT_DOMAIN,
        plural_descriptor=None,
    ) -> None:
        """
        Make the translations of ``catalog`` available for ``locale`` and
        ``domain``. Entries of an earlier catalog with the same key are
        replaced.

        ``plural_descriptor`` is handed to the rule source's ``init``, e.g. a
        `Plural-Forms` header value for `PluralFormsRules`. It defaults to
        the locale.
        """
        if plural_descriptor is None:
            plural_descriptor = locale
        self._plural_states[(locale, domain)] = self.rules.init(plural_descriptor)

        for entry in catalog.live_entries:
            if entry.is_fuzzy or not entry.is_translated:
                continue
            if isinstance(entry, PluralEntry):
                key = (locale, domain, entry.msgctxt_text, entry.msgid_text)
                self._plural[key + (entry.msgid_plural_text,)] = entry
            else:
                self._singular[(locale, domain, entry.msgctxt_text, entry.msgid_text)] = entry

    def gettext(
        self,
        locale: str,
        msgid: str,
        *,
        domain: str = DEFAULT_DOMAIN,
        msgctxt: Optional[str] = None,
        bindings: Optional[Mapping[str, Any]] = None,
    ) -> str:
        entry = self._singular.get((locale, domain, msgctxt, msgid))
        text = msgid if entry is None else entry.msgstr_text
        return render(text, bindings or {})

    def ngettext(
        self,
        locale: str,
        msgid: str,
        msgid_plural: str,
        n: int,
        *,
        domain: str = DEFAULT_DOMAIN,
        msgctxt: Optional[str] = None,
        bindings: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Look up the plural message for ``n``. ``n`` is available to the
        message as the ``count`` binding.

        Raises ``PluralFormException`` if the translation lacks the plural
        form that ``n`` selects.
        """
        bindings = {**(bindings or {}), "count": n}
        entry = self._plural.get((locale, domain, msgctxt, msgid, msgid_plural))

        text = None
        if entry is not None:
            state = self._plural_states[(locale, domain)]
            form = self.rules.form_index(state, n)
            if form not in entry.msgstr:
                raise PluralFormException(
                    f"plural form {form} is required for locale '{locale}' but is missing "
                    f"for msgid '{msgid}' and msgid_plural '{msgid_plural}'"
                )
            text = entry.msgstr_form_text(form)

        if not text:
            text = msgid if n == 1 else msgid_plural
        return render(text, bindings)

    def pgettext(self, locale: str, msgctxt: str, msgid: str, **kwargs) -> str:
        return self.gettext(locale, msgid, msgctxt=msgctxt, **kwargs)

    def npgettext(
        self, locale: str, msgctxt: str, msgid: str, msgid_plural: str, n: int, **kwargs
    ) -> str:
        return self.ngettext(locale, msgid, msgid_plural, n, msgctxt=msgctxt, **kwargs)
