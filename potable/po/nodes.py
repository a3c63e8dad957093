"""
In-memory representation of a parsed catalog.

A catalog is made of a header (folded into a key/value mapping) and an
ordered list of entries. Entries come in two shapes: `SingularEntry` and
`PluralEntry`. String values are kept as the list of fragments they were
written as (one per quoted literal), so that serializing a parsed catalog
reproduces its multi-line layout.
"""
import enum
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from potable.utils import join_fragments

Fragments = List[str]
Reference = Tuple[str, Optional[int]]
EntryKey = Tuple[Optional[str], str]


class CommentKind(enum.Enum):
    TRANSLATOR = "#"
    EXTRACTED = "#."
    REFERENCE = "#:"
    FLAG = "#,"
    PREVIOUS = "#|"


_SIGILS = {
    ".": CommentKind.EXTRACTED,
    ":": CommentKind.REFERENCE,
    ",": CommentKind.FLAG,
    "|": CommentKind.PREVIOUS,
}


def classify_comment(text: str) -> Tuple[CommentKind, str]:
    """
    Split a raw comment line into its kind and its body (the text after the
    sigil). Translator comments keep their body verbatim including the
    leading `#`, since their exact spelling (`#`, `# `, `##`) matters.
    """
    assert text.startswith("#")
    kind = _SIGILS.get(text[1:2])
    if kind is None:
        return CommentKind.TRANSLATOR, text
    return kind, text[2:]


# the last `:digits` group before whitespace or the end of the line
_REFERENCE_RE = re.compile(r"(\S.*?):(\d+)(?=\s|$)")


def parse_references(body: str) -> List[Reference]:
    """
    Parse the body of a `#:` comment into `(path, line)` pairs.

    Paths may contain colons or spaces: the line number is the last group of
    digits following a colon. References without any line number are split
    on whitespace and get a line of None.
    """
    body = body.strip()
    refs: List[Reference] = []
    end = 0
    for m in _REFERENCE_RE.finditer(body):
        refs.append((m.group(1), int(m.group(2))))
        end = m.end()
    refs.extend((path, None) for path in body[end:].split())
    return refs


def parse_flags(body: str) -> Set[str]:
    flags = set()
    for piece in body.split(","):
        flags.update(piece.split())
    return flags


def format_reference(ref: Reference) -> str:
    path, line = ref
    if line is None:
        return path
    return f"{path}:{line}"


@dataclass
class _Entry:
    msgid: Fragments
    msgctxt: Optional[Fragments] = None
    comments: List[str] = field(default_factory=list)
    extracted_comments: List[str] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    flags: Set[str] = field(default_factory=set)
    obsolete: bool = False
    previous_msgctxt: Optional[Fragments] = None
    previous_msgid: Optional[Fragments] = None
    previous_msgid_plural: Optional[Fragments] = None
    lineno: Optional[int] = field(default=None, compare=False)

    @property
    def msgid_text(self) -> str:
        return join_fragments(self.msgid)

    @property
    def msgctxt_text(self) -> Optional[str]:
        return join_fragments(self.msgctxt)

    @property
    def key(self) -> EntryKey:
        return (self.msgctxt_text, self.msgid_text)

    @property
    def is_fuzzy(self) -> bool:
        return "fuzzy" in self.flags

    @property
    def is_plural(self) -> bool:
        return False


@dataclass
class SingularEntry(_Entry):
    msgstr: Fragments = field(default_factory=lambda: [""])

    @property
    def msgstr_text(self) -> str:
        return join_fragments(self.msgstr)

    @property
    def is_translated(self) -> bool:
        return self.msgstr_text != ""


@dataclass
class PluralEntry(_Entry):
    msgid_plural: Fragments = field(default_factory=lambda: [""])
    msgstr: Dict[int, Fragments] = field(default_factory=dict)

    @property
    def msgid_plural_text(self) -> str:
        return join_fragments(self.msgid_plural)

    @property
    def is_plural(self) -> bool:
        return True

    def msgstr_form_text(self, form: int) -> Optional[str]:
        return join_fragments(self.msgstr.get(form))

    @property
    def is_translated(self) -> bool:
        return any(join_fragments(v) != "" for v in self.msgstr.values())


Entry = SingularEntry | PluralEntry


def is_header_entry(entry: Entry) -> bool:
    # a live, context-less singular entry with an empty msgid
    return (
        isinstance(entry, SingularEntry)
        and not entry.obsolete
        and entry.msgctxt is None
        and entry.msgid_text == ""
    )


@dataclass
class Catalog:
    top_comments: List[str] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    entries: List[Entry] = field(default_factory=list)

    @property
    def live_entries(self) -> List[Entry]:
        return [e for e in self.entries if not e.obsolete]

    @property
    def obsolete_entries(self) -> List[Entry]:
        return [e for e in self.entries if e.obsolete]

    def find(self, msgid: str, msgctxt: Optional[str] = None) -> Optional[Entry]:
        key = (msgctxt, msgid)
        for entry in self.live_entries:
            if entry.key == key:
                return entry
        return None
