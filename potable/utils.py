import enum
from typing import Iterable, List, Optional


class StringEnum(enum.Enum):
    # Must be first, or else won't work, specifies what .value is
    @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return name.lower()

    @classmethod
    def values(cls) -> List[str]:
        return [v.value for v in cls]

    def __str__(self) -> str:
        return self.value


def join_fragments(fragments: Optional[Iterable[str]]) -> Optional[str]:
    """
    Concatenate the string fragments of a multi-line catalog value.

    ``None`` (an absent msgctxt, for instance) is passed through so that it
    stays distinct from an empty context.
    """
    if fragments is None:
        return None
    return "".join(fragments)


def escape_string(value: str) -> str:
    """
    Escape ``value`` for use inside a double-quoted catalog literal. This is
    the inverse of the escape decoding done by the tokenizer.
    """
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )


def quote_string(value: str) -> str:
    return f'"{escape_string(value)}"'


def annotate_source_code(
    source_code: str,
    lineno: int,
    col_offset: int = None,
    context_lines: int = 0,
    line_numbers: bool = False,
) -> str:
    """
    Annotate the location specified by ``lineno`` and ``col_offset`` in the
    catalog text given by ``source_code`` with a location marker and optional
    line numbers and context lines.

    :param source_code: The catalog text containing the source location.
    :param lineno: The 1-indexed line number of the source location.
    :param col_offset: The 0-indexed column offset of the source location.
    :param context_lines: The number of contextual lines to include above and
        below the source location.
    :param line_numbers: If true, line numbers are included in the location
        representation.

    :return: A string containing the annotated source code location.
    """
    if lineno is None:
        return ""

    source_lines = source_code.splitlines(keepends=True)
    if lineno < 1 or lineno > len(source_lines):
        raise ValueError("Line number is out of range")

    line_offset = lineno - 1
    start_offset = max(0, line_offset - context_lines)
    end_offset = min(len(source_lines), line_offset + context_lines + 1)

    line_repr = source_lines[line_offset]
    if "\n" not in line_repr[-2:]:  # last line without a trailing newline
        line_repr += "\n"
    if col_offset is None:
        mark_repr = ""
    else:
        mark_repr = "-" * col_offset + "^" + "\n"

    before_lines = "".join(source_lines[start_offset:line_offset])
    after_lines = "".join(source_lines[line_offset + 1 : end_offset])
    location_repr = "".join((before_lines, line_repr, mark_repr, after_lines))

    if line_numbers:
        lineno_reprs = [f"{i} " for i in range(start_offset + 1, end_offset + 1)]

        # highlight the line identified by `lineno`
        local_line_off = line_offset - start_offset
        lineno_reprs[local_line_off] = "---> " + lineno_reprs[local_line_off]

        max_len = max(len(i) for i in lineno_reprs)
        justified_reprs = [i.rjust(max_len) for i in lineno_reprs]
        if col_offset is not None:
            justified_reprs.insert(local_line_off + 1, "-" * max_len)

        location_repr = "".join(
            f"{lno}{line}" for lno, line in zip(justified_reprs, location_repr.splitlines(True))
        )

    return location_repr.rstrip("\n")
