from potable.po.nodes import Catalog, CommentKind, PluralEntry, SingularEntry
from potable.po.parser import parse_string, parse_tokens
from potable.po.serializer import dump, serialize
from potable.po.tokenizer import Token, TokenType, tokenize

__all__ = [
    "Catalog",
    "CommentKind",
    "PluralEntry",
    "SingularEntry",
    "Token",
    "TokenType",
    "dump",
    "parse_string",
    "parse_tokens",
    "serialize",
    "tokenize",
]
