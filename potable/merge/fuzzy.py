"""
Approximate matching of catalog entries.

Only the msgids are compared, as `msgmerge` does: the context and the
plural msgid of both entries are ignored when scoring.
"""
import copy
from typing import Dict, List, Optional, Sequence

from potable.merge.levenshtein_utils import similarity, similarity_upper_bound
from potable.po.nodes import Entry, Fragments, PluralEntry, SingularEntry


def find_fuzzy_match(entry: Entry, candidates: Sequence[Entry], threshold: float) -> Optional[int]:
    """
    Return the index in ``candidates`` of the entry whose msgid is most
    similar to the msgid of ``entry``, provided the similarity is at least
    ``threshold``. Ties go to the earliest candidate. Returns None when no
    candidate is close enough.
    """
    target = entry.msgid_text
    best_index = None
    best_score = -1.0

    for i, candidate in enumerate(candidates):
        source = candidate.msgid_text
        if similarity_upper_bound(source, target) < threshold:
            continue
        score = similarity(source, target)
        if score >= threshold and score > best_score:
            best_index, best_score = i, score

    return best_index


def empty_plural_msgstr(form_count: int) -> Dict[int, Fragments]:
    return {i: [""] for i in range(form_count)}


def convert_msgstr(old: Entry, new: Entry, form_count: int):
    """
    Return a copy of the msgstr of ``old`` in the shape of ``new``.

    A singular translation is copied into each of the ``form_count`` forms
    of a plural one; a plural
    translation keeps only its first form when it becomes singular.
    """
    if isinstance(new, PluralEntry):
        if isinstance(old, PluralEntry):
            return copy.deepcopy(old.msgstr)
        return {i: list(old.msgstr) for i in range(form_count)}

    if isinstance(old, PluralEntry):
        return list(old.msgstr.get(0, [""]))
    return list(old.msgstr)


def carry_translation(new: Entry, old: Entry, form_count: int) -> Entry:
    """
    Build the merged entry for a pair of matching entries.

    Everything comes from ``new`` (it reflects the current sources), except
    the translation and the translator comments, which come from ``old``.
    """
    merged = copy.deepcopy(new)
    merged.msgstr = convert_msgstr(old, new, form_count)
    merged.comments = list(old.comments)
    merged.flags.discard("fuzzy")
    merged.obsolete = False
    merged.previous_msgctxt = None
    merged.previous_msgid = None
    merged.previous_msgid_plural = None
    merged.lineno = None
    return merged


def merge_fuzzy(new: Entry, old: Entry, form_count: int, store_previous: bool = False) -> Entry:
    merged = carry_translation(new, old, form_count)
    merged.flags.add("fuzzy")
    if store_previous:
        merged.previous_msgctxt = copy.copy(old.msgctxt)
        merged.previous_msgid = list(old.msgid)
        if isinstance(old, PluralEntry):
            merged.previous_msgid_plural = list(old.msgid_plural)
    return merged


def strip_developer_comments(comments: List[str]) -> List[str]:
    # `##` comments are aimed at developers and are not copied to translations
    return [c for c in comments if not c.startswith("##")]


def fresh_entry(new: Entry, form_count: int) -> Entry:
    entry = copy.deepcopy(new)
    entry.comments = strip_developer_comments(entry.comments)
    entry.obsolete = False
    entry.previous_msgctxt = None
    entry.previous_msgid = None
    entry.previous_msgid_plural = None
    entry.lineno = None
    if isinstance(entry, SingularEntry):
        entry.msgstr = [""]
    else:
        entry.msgstr = empty_plural_msgstr(form_count)
    return entry
