from typing import Optional

from potable.exceptions import ExceptionList, PluralFormException, SourceLocation
from potable.interpolation import placeholders
from potable.po.nodes import Catalog, Entry, PluralEntry
from potable.utils import join_fragments
from potable.warnings import PlaceholderMismatch, potable_warn


def _entry_location(entry: Entry) -> Optional[SourceLocation]:
    if entry.lineno is None:
        return None
    return SourceLocation(entry.lineno)


def plural_form_problems(catalog: Catalog, form_count: int) -> ExceptionList:
    """
    Collect a `PluralFormException` for every plural msgstr index of a live
    entry which is outside ``[0, form_count)``.
    """
    problems = ExceptionList()
    for entry in catalog.live_entries:
        if not isinstance(entry, PluralEntry):
            continue
        for index in sorted(entry.msgstr):
            if index >= form_count:
                problems.append(
                    PluralFormException(
                        f"msgstr[{index}] of msgid '{entry.msgid_text}' is out of range, "
                        f"the locale has {form_count} plural forms",
                        _entry_location(entry),
                    )
                )
    return problems


def validate_plural_forms(catalog: Catalog, form_count: int) -> None:
    plural_form_problems(catalog, form_count).raise_if_not_empty()


def check_placeholders(catalog: Catalog) -> None:
    """
    Warn about translations using placeholders that their source strings
    (msgid or msgid_plural) do not have. Untranslated entries are skipped.
    """
    for entry in catalog.live_entries:
        if not entry.is_translated:
            continue

        known = placeholders(entry.msgid_text)
        if isinstance(entry, PluralEntry):
            known |= placeholders(entry.msgid_plural_text)
            translations = [join_fragments(f) for _, f in sorted(entry.msgstr.items())]
        else:
            translations = [entry.msgstr_text]

        unknown = set()
        for text in translations:
            unknown |= placeholders(text) - known
        if unknown:
            names = ", ".join(sorted(unknown))
            potable_warn(
                PlaceholderMismatch(
                    f"translation of msgid '{entry.msgid_text}' uses unknown placeholders: {names}",
                    _entry_location(entry),
                )
            )
