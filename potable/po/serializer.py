from typing import List, Optional

from potable.po.nodes import (
    Catalog,
    Entry,
    PluralEntry,
    Reference,
    format_reference,
    is_header_entry,
)
from potable.utils import quote_string

REFERENCE_LINE_WIDTH = 80

OBSOLETE_PREFIX = "#~ "


def dump(catalog: Catalog) -> str:
    """
    Serialize ``catalog`` to catalog text.

    Parsing the result gives back a catalog equal to ``catalog``; only the
    wrapping of `#:` reference lines may differ from the original text.
    """
    blocks = []
    # an empty header is still written when the first entry would otherwise
    # be read back as the header
    first = catalog.entries[:1]
    if catalog.headers or catalog.top_comments or (first and is_header_entry(first[0])):
        blocks.append(_dump_header(catalog))
    blocks.extend(_dump_entry(entry) for entry in catalog.entries)
    return "\n".join("".join(f"{line}\n" for line in block) for block in blocks)


serialize = dump


def _dump_header(catalog: Catalog) -> List[str]:
    lines = list(catalog.top_comments)
    lines.append('msgid ""')
    lines.append('msgstr ""')
    lines.extend(quote_string(f"{key}: {value}\n") for key, value in catalog.headers.items())
    return lines


def _dump_strings(keyword: str, fragments: List[str]) -> List[str]:
    # one quoted literal per fragment, the first one on the keyword line
    first, *rest = fragments or [""]
    return [f"{keyword} {quote_string(first)}"] + [quote_string(f) for f in rest]


def _dump_entry(entry: Entry) -> List[str]:
    lines = list(entry.comments)
    lines.extend(f"#. {c}" if c else "#." for c in entry.extracted_comments)
    lines.extend(wrap_references(entry.references))
    if entry.flags:
        lines.append("#, " + ", ".join(sorted(entry.flags)))
    lines.extend(_dump_previous(entry))

    body = []
    if entry.msgctxt is not None:
        body += _dump_strings("msgctxt", entry.msgctxt)
    body += _dump_strings("msgid", entry.msgid)
    if isinstance(entry, PluralEntry):
        body += _dump_strings("msgid_plural", entry.msgid_plural)
        for form in sorted(entry.msgstr):
            body += _dump_strings(f"msgstr[{form}]", entry.msgstr[form])
    else:
        body += _dump_strings("msgstr", entry.msgstr)

    if entry.obsolete:
        body = [OBSOLETE_PREFIX + line for line in body]
    return lines + body


def _dump_previous(entry: Entry) -> List[str]:
    if entry.previous_msgid is None:
        return []

    lines: List[str] = []
    if entry.previous_msgctxt is not None:
        lines += _dump_strings("msgctxt", entry.previous_msgctxt)
    lines += _dump_strings("msgid", entry.previous_msgid)
    if entry.previous_msgid_plural is not None:
        lines += _dump_strings("msgid_plural", entry.previous_msgid_plural)
    return [f"#| {line}" for line in lines]


def wrap_references(references: List[Reference], width: int = REFERENCE_LINE_WIDTH) -> List[str]:
    """
    Pack references greedily onto as few `#:` lines as possible, none longer
    than ``width`` columns. A reference which is too long on its own gets a
    line to itself.

    A reference with a line number never follows one without on the same
    line: `a.ex b.ex:3` would be read back as the single path `a.ex b.ex`.
    """
    lines = []
    current: Optional[str] = None
    after_bare_path = False
    for ref in references:
        text = format_reference(ref)
        has_line = ref[1] is not None
        if current is None:
            current = f"#: {text}"
        elif len(current) + 1 + len(text) <= width and not (after_bare_path and has_line):
            current = f"{current} {text}"
        else:
            lines.append(current)
            current = f"#: {text}"
        after_bare_path = not has_line
    if current is not None:
        lines.append(current)
    return lines
