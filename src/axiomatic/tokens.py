"""Token kinds and token representation for the definition lexer."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Structural symbols
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    EQUALS = auto()
    BANG = auto()

    # Keywords
    DEF = auto()
    FORALL = auto()
    EXISTS = auto()
    AND = auto()
    OR = auto()
    IMPLIES = auto()
    IFF = auto()

    # Literals
    TYPE = auto()
    SYMBOL = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __str__(self) -> str:
        return f'{self.kind.name}: "{self.text}" @{self.offset} len={self.length}'


STRUCTURAL: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUALS,
    "!": TokenKind.BANG,
}

KEYWORDS: dict[str, TokenKind] = {
    "def": TokenKind.DEF,
    "forall": TokenKind.FORALL,
    "exists": TokenKind.EXISTS,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "=>": TokenKind.IMPLIES,
    "<=>": TokenKind.IFF,
}

WHITESPACE: frozenset[str] = frozenset(" \t\r\n")

# A keyword run stops at any of these.
DELIMITERS: frozenset[str] = WHITESPACE | frozenset("(){},!")

SYMBOL_CHARS: frozenset[str] = frozenset(
    string.ascii_letters + string.digits + "+-*/^_\\"
)

TYPE_PREFIX = "type["
TYPE_SUFFIX = "]"

CONNECTIVES: frozenset[TokenKind] = frozenset({
    TokenKind.AND,
    TokenKind.OR,
    TokenKind.IMPLIES,
    TokenKind.IFF,
})

QUANTIFIERS: frozenset[TokenKind] = frozenset({
    TokenKind.FORALL,
    TokenKind.EXISTS,
})
