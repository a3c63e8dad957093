from typing import Dict, List, Optional

from potable.exceptions import (
    DuplicateKeyException,
    SourceLocation,
    SyntaxException,
    tag_source,
)
from potable.po.nodes import (
    Catalog,
    CommentKind,
    Entry,
    EntryKey,
    PluralEntry,
    SingularEntry,
    classify_comment,
    is_header_entry,
    parse_flags,
    parse_references,
)
from potable.po.tokenizer import Token, TokenType, tokenize
from potable.warnings import MalformedHeader, potable_warn


def parse_string(source: str, path: Optional[str] = None) -> Catalog:
    """
    Parse catalog text into a `Catalog`.

    Arguments
    ---------
    source : str
        The catalog text.
    path : str, optional
        Where the text was read from. Only used in error messages.

    Raises
    ------
    LexException, SyntaxException, DuplicateKeyException
        On the first problem found. No partial catalog is ever returned.
    """
    with tag_source(source, path):
        return parse_tokens(tokenize(source))


def parse_tokens(tokens: List[Token]) -> Catalog:
    return _Parser(tokens).parse()


class _Parser:
    def __init__(self, tokens: List[Token], lineno: int = 1):
        self._tokens = tokens
        self._pos = 0
        self._last_lineno = tokens[0].lineno if tokens else lineno

    def _peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        self._last_lineno = token.lineno
        return token

    def _error(self, token: Optional[Token]) -> SyntaxException:
        if token is None:
            return SyntaxException("syntax error before: end of input", (self._last_lineno, None))
        return SyntaxException(f"syntax error before: {token.literal}", token)

    def _accept(self, type_: TokenType, obsolete: bool, value=None) -> Optional[Token]:
        token = self._peek()
        if token is None or token.type != type_ or token.obsolete != obsolete:
            return None
        if value is not None and token.value != value:
            return None
        return self._next()

    def _expect(self, type_: TokenType, obsolete: bool, value=None) -> Token:
        token = self._accept(type_, obsolete, value)
        if token is None:
            raise self._error(self._peek())
        return token

    def _parse_strings(self, obsolete: bool) -> List[str]:
        fragments = [self._expect(TokenType.STRING, obsolete).value]
        while (token := self._accept(TokenType.STRING, obsolete)) is not None:
            fragments.append(token.value)
        return fragments

    def parse(self) -> Catalog:
        catalog = Catalog()
        seen: Dict[EntryKey, Entry] = {}
        at_start = True

        while self._peek() is not None:
            comments = self._parse_comments()
            entry = self._parse_entry(comments)

            if at_start and is_header_entry(entry):
                catalog.top_comments = [c.value for c in comments]
                catalog.headers = _parse_headers(entry)
                at_start = False
                continue
            at_start = False

            if not entry.obsolete:
                original = seen.get(entry.key)
                if original is not None:
                    raise DuplicateKeyException(
                        SourceLocation(entry.lineno),
                        SourceLocation(original.lineno),
                        entry.msgid_text,
                        entry.msgid_plural_text if isinstance(entry, PluralEntry) else None,
                    )
                seen[entry.key] = entry

            catalog.entries.append(entry)

        return catalog

    def _parse_comments(self) -> List[Token]:
        comments = []
        while (token := self._peek()) is not None and token.type == TokenType.COMMENT:
            comments.append(self._next())
        return comments

    def _parse_entry(self, comments: List[Token]) -> Entry:
        token = self._peek()
        if token is None:
            raise self._error(None)
        obsolete = token.obsolete

        msgctxt = None
        if self._accept(TokenType.KEYWORD, obsolete, "msgctxt") is not None:
            msgctxt = self._parse_strings(obsolete)

        msgid_token = self._expect(TokenType.KEYWORD, obsolete, "msgid")
        msgid = self._parse_strings(obsolete)

        entry: Entry
        if self._accept(TokenType.KEYWORD, obsolete, "msgid_plural") is not None:
            msgid_plural = self._parse_strings(obsolete)
            entry = PluralEntry(
                msgid=msgid,
                msgctxt=msgctxt,
                msgid_plural=msgid_plural,
                msgstr=self._parse_plural_msgstr(obsolete),
            )
        else:
            self._expect(TokenType.KEYWORD, obsolete, "msgstr")
            msgstr = self._parse_strings(obsolete)
            entry = SingularEntry(msgid=msgid, msgctxt=msgctxt, msgstr=msgstr)

        entry.obsolete = obsolete
        entry.lineno = msgid_token.lineno
        _apply_comments(entry, comments)
        return entry

    def _parse_plural_msgstr(self, obsolete: bool) -> Dict[int, List[str]]:
        msgstr: Dict[int, List[str]] = {}

        token = self._expect(TokenType.PLURAL_FORM, obsolete)
        while token is not None:
            if token.value in msgstr:
                raise SyntaxException(f"duplicate plural form {token.literal}", token)
            msgstr[token.value] = self._parse_strings(obsolete)
            token = self._accept(TokenType.PLURAL_FORM, obsolete)

        return msgstr

    def parse_previous(self) -> Dict[str, Optional[List[str]]]:
        # msgctxt? msgid msgid_plural?, scoped to one block of `#|` lines
        result: Dict[str, Optional[List[str]]] = {
            "msgctxt": None,
            "msgid": None,
            "msgid_plural": None,
        }
        if self._accept(TokenType.KEYWORD, False, "msgctxt") is not None:
            result["msgctxt"] = self._parse_strings(False)
        self._expect(TokenType.KEYWORD, False, "msgid")
        result["msgid"] = self._parse_strings(False)
        if self._accept(TokenType.KEYWORD, False, "msgid_plural") is not None:
            result["msgid_plural"] = self._parse_strings(False)

        if (token := self._peek()) is not None:
            raise self._error(token)
        return result


def _apply_comments(entry: Entry, comments: List[Token]) -> None:
    previous_tokens: List[Token] = []
    previous_lineno = None

    for token in comments:
        kind, body = classify_comment(token.value)
        match kind:
            case CommentKind.TRANSLATOR:
                entry.comments.append(body)
            case CommentKind.EXTRACTED:
                entry.extracted_comments.append(body.strip())
            case CommentKind.REFERENCE:
                entry.references.extend(parse_references(body))
            case CommentKind.FLAG:
                entry.flags.update(parse_flags(body))
            case CommentKind.PREVIOUS:
                if previous_lineno is None:
                    previous_lineno = token.lineno
                previous_tokens.extend(tokenize(body, token.lineno, token.col_offset + 2))

    if previous_lineno is not None:
        result = _Parser(previous_tokens, previous_lineno).parse_previous()
        entry.previous_msgctxt = result["msgctxt"]
        entry.previous_msgid = result["msgid"]
        entry.previous_msgid_plural = result["msgid_plural"]


def _parse_headers(entry: SingularEntry) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for line in entry.msgstr_text.split("\n"):
        if not line.strip():
            continue
        if ":" not in line:
            potable_warn(
                MalformedHeader(f"malformed header line {line!r}", SourceLocation(entry.lineno))
            )
            continue
        key, value = line.split(":", 1)
        headers[key.strip()] = value.strip()
    return headers
