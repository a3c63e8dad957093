"""
Merging of a translated catalog with an updated template.

The template is authoritative for which messages exist and for everything
derived from the sources (references, extracted comments, flags, plural
shape). The translated catalog is authoritative for the translations and
the translator comments.
"""
import copy
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from potable.exceptions import PotablePanic
from potable.merge.fuzzy import carry_translation, find_fuzzy_match, fresh_entry, merge_fuzzy
from potable.plural import DEFAULT_RULES, PluralForms
from potable.plural.default import plural_forms_header
from potable.po.nodes import Catalog, Entry
from potable.settings import MergePolicy, ObsoletePolicy, read_nplurals
from potable.validation import plural_form_problems
from potable.warnings import PluralFormsMismatch, potable_warn

NEW_CATALOG_COMMENTS = [
    '## "msgid"s in this file come from a template (.pot) file.',
    "##",
    '## Do not add, change, or remove "msgid"s manually here as',
    "## they're tied to the ones in the corresponding template.",
    "##",
    "## Use `potable-merge` to merge template files into",
    "## translation files.",
]


@dataclass
class ChangeSummary:
    new: int = 0
    removed: int = 0
    unchanged: int = 0
    fuzzy: int = 0
    obsolete: int = 0

    @property
    def total_live_new(self) -> int:
        # live entries of the template
        return self.new + self.unchanged + self.fuzzy

    @property
    def total_live_old(self) -> int:
        # live entries of the translated catalog
        return self.unchanged + self.fuzzy + self.removed + self.obsolete

    def __str__(self):
        return (
            f"{self.new} new, {self.unchanged} unchanged, {self.fuzzy} fuzzy, "
            f"{self.removed} removed, {self.obsolete} obsolete"
        )


class MergeResult(NamedTuple):
    catalog: Catalog
    summary: ChangeSummary


def _resolve_plural_forms(old: Catalog, policy: MergePolicy) -> Tuple[Optional[str], str, int]:
    """
    Return the target locale, the `Plural-Forms` header value to write and
    the number of plural forms to size plural translations with.
    """
    locale = policy.locale or old.headers.get("Language") or None

    if policy.plural_forms_header is not None:
        header = policy.plural_forms_header
        nplurals = read_nplurals(header)
        if nplurals is None:
            # MergePolicy rejects such headers when it is built
            raise PotablePanic(f"policy Plural-Forms header has no nplurals: {header!r}")
        return locale, header, nplurals

    if locale is None and read_nplurals(old.headers.get("Plural-Forms")) is not None:
        header = old.headers["Plural-Forms"]
        return locale, header, read_nplurals(header)

    if policy.plural_rules is None:
        header = plural_forms_header(locale)
        return locale, header, DEFAULT_RULES.form_count(locale)

    rules = policy.plural_rules
    state = rules.init(locale)
    form_count = rules.form_count(state)
    if isinstance(state, PluralForms):
        return locale, state.header, form_count
    return locale, f"nplurals={form_count};", form_count


def merge(old: Catalog, new: Catalog, policy: Optional[MergePolicy] = None) -> MergeResult:
    """
    Merge the translated catalog ``old`` with the template ``new``.

    Neither input is modified. Live entries of the result follow the order
    of ``new``; obsolete entries come last, in the order of ``old``.

    Emits a `PluralFormsMismatch` warning for every plural translation with
    more forms than the target locale has.
    """
    if policy is None:
        policy = MergePolicy()
    locale, plural_forms, form_count = _resolve_plural_forms(old, policy)

    old_by_key = {e.key: e for e in old.live_entries}
    new_keys = {e.key for e in new.live_entries}
    # fuzzy match candidates, in declaration order
    candidates = [e for e in old.live_entries if e.key not in new_keys]

    summary = ChangeSummary()
    entries: List[Entry] = []

    for entry in new.live_entries:
        exact = old_by_key.get(entry.key)
        if exact is not None:
            entries.append(carry_translation(entry, exact, form_count))
            summary.unchanged += 1
            continue

        index = None
        if policy.fuzzy:
            index = find_fuzzy_match(entry, candidates, policy.fuzzy_threshold)

        if index is not None:
            match = candidates.pop(index)
            store_previous = policy.store_previous_message_on_fuzzy_match
            entries.append(merge_fuzzy(entry, match, form_count, store_previous))
            summary.fuzzy += 1
        else:
            entries.append(fresh_entry(entry, form_count))
            summary.new += 1

    live_keys = {e.key for e in entries}
    unmatched = {id(e) for e in candidates}
    mark = policy.on_obsolete == ObsoletePolicy.MARK_AS_OBSOLETE

    for entry in old.entries:
        if entry.obsolete:
            # entries obsoleted by an earlier merge are never revived
            if mark and entry.key not in live_keys:
                entries.append(copy.deepcopy(entry))
        elif id(entry) in unmatched:
            if mark:
                obsolete = copy.deepcopy(entry)
                obsolete.obsolete = True
                entries.append(obsolete)
                summary.obsolete += 1
            else:
                summary.removed += 1

    headers = dict(old.headers)
    if locale is not None:
        headers["Language"] = locale
    headers["Plural-Forms"] = plural_forms

    catalog = Catalog(top_comments=list(old.top_comments), headers=headers, entries=entries)

    # merged entries carry no line numbers, so the message is all there is
    for problem in plural_form_problems(catalog, form_count):
        potable_warn(PluralFormsMismatch(str(problem)))

    return MergeResult(catalog, summary)


def new_catalog(template: Catalog, policy: Optional[MergePolicy] = None) -> MergeResult:
    """
    Create a translation catalog from ``template`` when no translated
    catalog exists yet. This is a merge against an empty catalog carrying an
    informative comment at the top.
    """
    return merge(Catalog(top_comments=list(NEW_CATALOG_COMMENTS)), template, policy)
