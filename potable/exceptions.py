import contextlib
import copy
import textwrap
from typing import NamedTuple, Optional


class SourceLocation(NamedTuple):
    lineno: int
    col_offset: Optional[int] = None


class ExceptionList(list):
    """
    List subclass for storing exceptions.
    To deliver multiple catalog errors to the user at once, append each
    raised Exception to this list and call raise_if_not_empty once the task
    is completed.
    """

    def raise_if_not_empty(self):
        if len(self) == 1:
            raise self[0]
        elif len(self) > 1:
            err_msg = ["Catalog check failed with the following errors:"]
            err_msg += [f"{type(i).__name__}: {i}" for i in self]
            raise PotableException("\n\n".join(err_msg))


class _BasePotableException(Exception):
    """
    Base potable exception class.

    This exception is not raised directly. Other exceptions inherit it in
    order to display source annotations in the error string.
    """

    def __init__(
        self,
        message="Error Message not found.",
        location=None,
        hint=None,
        prev_decl=None,
        source_code=None,
        path=None,
    ):
        """
        Exception initializer.

        Arguments
        ---------
        message : str
            Error message to display with the exception.
        location : SourceLocation | Token | Tuple[int, int], optional
            Anything with ``lineno`` (and optionally ``col_offset``)
            attributes, or a ``(lineno, col_offset)`` tuple, pointing at the
            place in the catalog text where the problem was found.
        prev_decl : SourceLocation, optional
            A second location which is reported as the previous declaration,
            e.g. the first occurrence of a duplicated message.
        """
        self._message = message
        self._hint = hint
        self.source_code = source_code
        self.path = path

        self.lineno, self.col_offset = _unpack_location(location)
        self.prev_decl = prev_decl

    def with_source(self, source_code, path=None):
        """
        Creates a copy of this exception which annotates ``source_code``.

        Returns
        -------
        A copy of the exception with the source text (and path) applied.
        """
        exc = copy.copy(self)
        exc.source_code = source_code
        if path is not None:
            exc.path = path
        return exc

    @property
    def hint(self):
        # hints may be expensive to compute, so they are only computed when
        # the formatted message is actually requested.
        if callable(self._hint):
            return self._hint()
        return self._hint

    @property
    def message(self):
        msg = self._message
        if self.hint:
            msg += f"\n\n  (hint: {self.hint})"
        return msg

    def format_annotation(self, lineno, col_offset):
        try:
            source_annotation = _annotate(self.source_code, lineno, col_offset)
        except ValueError:
            # the location is past the end of the text, e.g. `end of input`
            return None

        node_msg = ""
        if self.path is not None:
            node_msg = f'catalog "{self.path}:{lineno}", '

        col_offset_str = "" if col_offset is None else str(col_offset)
        node_msg = f"{node_msg}line {lineno}:{col_offset_str} \n{source_annotation}\n"
        return textwrap.indent(node_msg, "  ")

    def __str__(self):
        if self.lineno is None:
            return self.message

        if self.source_code is None:
            prefix = "" if self.path is None else f"{self.path}:"
            if self.col_offset is not None:
                return f"{prefix}line {self.lineno}:{self.col_offset} {self.message}"
            return f"{prefix}line {self.lineno}: {self.message}"

        annotation_list = []

        if self.prev_decl is not None:
            formatted_decl = self.format_annotation(*self.prev_decl)
            if formatted_decl is not None:
                annotation_list.append(f" (previously declared at):\n{formatted_decl}")

        formatted = self.format_annotation(self.lineno, self.col_offset)
        if formatted is None:
            formatted = textwrap.indent(f"line {self.lineno}\n", "  ")
        annotation_list.append(formatted)

        annotation_msg = "\n".join(annotation_list)
        return f"{self.message}\n\n{annotation_msg}"


def _unpack_location(location):
    if location is None:
        return None, None
    if isinstance(location, tuple) and not isinstance(location, SourceLocation):
        lineno, col_offset = (tuple(location) + (None,))[:2]
        return lineno, col_offset
    return location.lineno, getattr(location, "col_offset", None)


def _annotate(source_code, lineno, col_offset):
    from potable.settings import POTABLE_ERROR_CONTEXT_LINES, POTABLE_ERROR_LINE_NUMBERS
    from potable.utils import annotate_source_code

    return annotate_source_code(
        source_code,
        lineno,
        col_offset,
        context_lines=POTABLE_ERROR_CONTEXT_LINES,
        line_numbers=POTABLE_ERROR_LINE_NUMBERS,
    )


class PotableException(_BasePotableException):
    pass


class SyntaxException(PotableException):
    """Catalog text does not follow the catalog grammar."""


class LexException(SyntaxException):
    """Catalog text cannot be split into tokens."""


class DuplicateKeyException(PotableException):
    """Two live entries share the same (msgctxt, msgid) key."""

    def __init__(self, location, original_location, msgid, msgid_plural=None):
        self.original_lineno = original_location.lineno
        self.msgid = msgid
        self.msgid_plural = msgid_plural

        message = f"found duplicate on line {self.original_lineno} for msgid: '{msgid}'"
        if msgid_plural is not None:
            message += f" and msgid_plural: '{msgid_plural}'"
        super().__init__(message, location, prev_decl=original_location)


class MissingBindings(PotableException):
    """Interpolation bindings are missing for one or more placeholders."""

    def __init__(self, missing, partial, template=None):
        self.missing = frozenset(missing)
        self.partial = partial
        self.template = template

        names = ", ".join(sorted(self.missing))
        message = f"missing interpolation bindings: {names}"
        if template is not None:
            message += f" (template {template!r})"
        super().__init__(message)


class PolicyException(PotableException):
    """Invalid merge policy configuration."""


class PluralFormException(PotableException):
    """A plural form is invalid or missing for a locale."""


class UnknownPluralForms(PluralFormException):
    """A plural rule descriptor (e.g. a Plural-Forms header) cannot be understood."""


class PotableInternalException(_BasePotableException):
    """
    Base potable internal exception class.

    Internal exceptions are raised as a means of telling the user that the
    library has panicked, and that filing a bug report would be appropriate.
    """

    def __str__(self):
        return f"{super().__str__()}\n\nThis is an unhandled internal error in potable."


class PotablePanic(PotableInternalException):
    """General unexpected error while processing a catalog."""


@contextlib.contextmanager
def tag_source(source_code, path=None):
    """
    Attach ``source_code`` (and ``path``) to any potable exception escaping
    the block so that its message carries an annotated excerpt.
    """
    try:
        yield
    except _BasePotableException as e:
        if e.source_code is not None:
            raise e from None
        tb = e.__traceback__
        raise e.with_source(source_code, path).with_traceback(tb) from None
