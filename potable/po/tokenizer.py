"""
Turn catalog text into a flat list of tokens.

There are four kinds of tokens:

  * KEYWORD: `msgid`, `msgid_plural`, `msgctxt` or `msgstr`
  * PLURAL_FORM: `msgstr[N]`, carrying the index `N`
  * STRING: a double-quoted literal, carrying the decoded contents
  * COMMENT: a whole `#...` line, carrying the raw text including the sigil

Lines starting with `#~` hold commented-out (obsolete) entries. Their
contents are tokenized like any other line, and the resulting tokens are
flagged as obsolete.
"""
import enum
from dataclasses import dataclass
from typing import List, Optional, Union

from potable.exceptions import LexException
from potable.utils import quote_string

KEYWORDS = ("msgid", "msgid_plural", "msgctxt", "msgstr")

_WHITESPACE = (" ", "\t", "\r", "\n", "\f", "\v")
_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


class TokenType(enum.Enum):
    KEYWORD = enum.auto()
    PLURAL_FORM = enum.auto()
    STRING = enum.auto()
    COMMENT = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Union[str, int]
    lineno: int
    col_offset: int = 0
    obsolete: bool = False

    @property
    def literal(self) -> str:
        """The token as it would be written in catalog text."""
        if self.type == TokenType.STRING:
            return quote_string(self.value)
        if self.type == TokenType.PLURAL_FORM:
            return f"msgstr[{self.value}]"
        return str(self.value)

    def is_keyword(self, name: str) -> bool:
        return self.type == TokenType.KEYWORD and self.value == name


class _Scanner:
    def __init__(self, source: str, lineno: int = 1, col_offset: int = 0):
        self._source = source
        self._pos = 0
        self._lineno = lineno
        self._line_start = -col_offset
        self._obsolete = False
        self.tokens: List[Token] = []

    @property
    def _col(self) -> int:
        return self._pos - self._line_start

    def _peek(self, offset: int = 0) -> Optional[str]:
        i = self._pos + offset
        if i < len(self._source):
            return self._source[i]
        return None

    def _emit(self, type_, value, lineno, col_offset):
        self.tokens.append(Token(type_, value, lineno, col_offset, self._obsolete))

    def _newline(self):
        self._pos += 1
        self._lineno += 1
        self._line_start = self._pos
        self._obsolete = False

    def scan(self) -> List[Token]:
        while (char := self._peek()) is not None:
            if char == "\n":
                self._newline()
            elif char in _WHITESPACE:
                self._pos += 1
            elif char == "#":
                self._scan_comment()
            elif char == '"':
                self._scan_string()
            elif char.isalpha() or char == "_":
                self._scan_keyword()
            else:
                raise LexException(
                    f"unexpected character {char!r}", (self._lineno, self._col)
                )
        return self.tokens

    def _scan_comment(self):
        if self._obsolete:
            raise LexException("unexpected character '#'", (self._lineno, self._col))

        end = self._source.find("\n", self._pos)
        if end == -1:
            end = len(self._source)
        text = self._source[self._pos : end].rstrip("\r")

        if text.startswith("#~|"):
            # previous msgid of an obsolete entry
            self._emit(TokenType.COMMENT, "#" + text[2:], self._lineno, self._col)
            self._pos = end
            return

        if text.startswith("#~"):
            # the rest of the line is a commented-out part of an entry
            self._obsolete = True
            self._pos += 2
            return

        self._emit(TokenType.COMMENT, text, self._lineno, self._col)
        self._pos = end

    def _scan_keyword(self):
        start = self._pos
        lineno, col_offset = self._lineno, self._col
        while (char := self._peek()) is not None and (char.isalnum() or char == "_"):
            self._pos += 1
        word = self._source[start : self._pos]

        if word == "msgstr" and self._peek() == "[":
            index = self._scan_plural_index()
            self._expect_space(f"msgstr[{index}]", lineno, col_offset)
            self._emit(TokenType.PLURAL_FORM, index, lineno, col_offset)
            return

        if word not in KEYWORDS:
            raise LexException(f"unknown keyword '{word}'", (lineno, col_offset))

        self._expect_space(word, lineno, col_offset)
        self._emit(TokenType.KEYWORD, word, lineno, col_offset)

    def _scan_plural_index(self) -> int:
        lineno, col_offset = self._lineno, self._col
        end = self._source.find("]", self._pos)
        newline = self._source.find("\n", self._pos)
        if end == -1 or (newline != -1 and newline < end):
            raise LexException("invalid plural form index", (lineno, col_offset))

        digits = self._source[self._pos + 1 : end]
        if not digits.isdigit() or not digits.isascii():
            raise LexException("invalid plural form index", (lineno, col_offset))

        self._pos = end + 1
        return int(digits)

    def _expect_space(self, keyword, lineno, col_offset):
        if self._peek() not in _WHITESPACE:
            raise LexException(f"no space after '{keyword}'", (lineno, col_offset))

    def _scan_string(self):
        lineno, col_offset = self._lineno, self._col
        self._pos += 1  # opening quote
        chars = []

        while True:
            char = self._peek()
            if char is None:
                raise LexException(
                    "missing terminator for string literal", (lineno, col_offset)
                )
            if char == "\n":
                raise LexException("newline in string", (self._lineno, self._col))
            if char == '"':
                self._pos += 1
                break
            if char == "\\":
                escaped = self._peek(1)
                if escaped not in _ESCAPES:
                    shown = "" if escaped is None or escaped == "\n" else escaped
                    raise LexException(
                        f"unsupported escape code '\\{shown}'", (self._lineno, self._col)
                    )
                chars.append(_ESCAPES[escaped])
                self._pos += 2
                continue
            chars.append(char)
            self._pos += 1

        self._emit(TokenType.STRING, "".join(chars), lineno, col_offset)


def tokenize(source: str, lineno: int = 1, col_offset: int = 0) -> List[Token]:
    """
    Tokenize catalog text.

    ``lineno`` and ``col_offset`` give the position of the start of
    ``source``, for tokenizing a fragment of a larger text (e.g. the body of
    a `#|` comment).

    Raises ``LexException`` on the first lexical error.
    """
    return _Scanner(source, lineno, col_offset).scan()
