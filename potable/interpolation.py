"""
`%{name}` interpolation of translated strings.

A template is split once into literal segments and `Placeholder` segments.
`%{}` and an unterminated `%{` are not placeholders and are kept as literal
text, as is any `%` not followed by `{`.
"""
from typing import Any, List, Mapping, NamedTuple, Set, Union

from potable.exceptions import MissingBindings


class Placeholder(NamedTuple):
    name: str

    def __str__(self):
        return f"%{{{self.name}}}"


Segment = Union[str, Placeholder]


def to_interpolatable(template: str) -> List[Segment]:
    """
    Split ``template`` into literal strings and placeholders. Adjacent
    literal text is merged into a single segment, and empty literals are
    left out.
    """
    segments: List[Segment] = []
    current = ""
    pos = 0

    while True:
        start = template.find("%{", pos)
        if start == -1:
            current += template[pos:]
            break

        end = template.find("}", start + 2)
        if end == -1:
            # unterminated: the rest of the template is literal text
            current += template[pos:]
            break

        name = template[start + 2 : end]
        if not name:
            current += template[pos : end + 1]
            pos = end + 1
            continue

        current += template[pos:start]
        if current:
            segments.append(current)
            current = ""
        segments.append(Placeholder(name))
        pos = end + 1

    if current:
        segments.append(current)
    return segments


def placeholders(template: Union[str, List[Segment]]) -> Set[str]:
    if isinstance(template, str):
        template = to_interpolatable(template)
    return {seg.name for seg in template if isinstance(seg, Placeholder)}


def render(template: Union[str, List[Segment]], bindings: Mapping[str, Any]) -> str:
    """
    Substitute every placeholder of ``template`` with ``str()`` of its
    binding.

    Raises
    ------
    MissingBindings
        If any placeholder has no binding. The exception lists every missing
        name and carries the partially rendered string, with the unresolved
        placeholders left as written.
    """
    source = template if isinstance(template, str) else None
    if isinstance(template, str):
        template = to_interpolatable(template)

    pieces = []
    missing = set()
    for seg in template:
        if not isinstance(seg, Placeholder):
            pieces.append(seg)
        elif seg.name in bindings:
            pieces.append(str(bindings[seg.name]))
        else:
            missing.add(seg.name)
            pieces.append(str(seg))

    result = "".join(pieces)
    if missing:
        raise MissingBindings(missing, result, source)
    return result
