"""Tokenizer for definition source text.

Scans with two cursors: ``committed`` marks the start of the next token and
``peek`` probes ahead of it. Each lexing rule advances ``peek`` and either
commits the scanned span as a token or resets ``peek`` back to ``committed``
so the next rule starts from the same place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from axiomatic.errors import LexError
from axiomatic.tokens import (
    DELIMITERS,
    KEYWORDS,
    STRUCTURAL,
    SYMBOL_CHARS,
    TYPE_PREFIX,
    TYPE_SUFFIX,
    WHITESPACE,
    Token,
    TokenKind,
)

log = logging.getLogger(__name__)


class Tokenizer:
    """Produces tokens from definition source, one per ``next_token()`` call.

    Iterating a tokenizer starts a fresh scan from the beginning of the
    source and yields every token up to and including EOF.
    """

    def __init__(self, source: str) -> None:
        self.source = source.strip()
        self.committed = 0
        self.peek = 0

    def __iter__(self) -> Iterator[Token]:
        scanner = Tokenizer(self.source)
        while True:
            tok = scanner.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def next_token(self) -> Token:
        """Return the next token. Keeps returning EOF once the source is spent."""
        self._skip_whitespace()
        if self.committed >= len(self.source):
            return Token(TokenKind.EOF, "", len(self.source), 0)

        for rule in (
            self._lex_structural,
            self._lex_keyword,
            self._lex_type,
            self._lex_symbol,
        ):
            tok = rule()
            if tok is not None:
                return tok

        ch = self.source[self.committed]
        log.debug("no lexing rule matches %r at offset %d", ch, self.committed)
        raise LexError(f"unexpected character {ch!r}", self.committed)

    # ── Helpers ───────────────────────────────────────────────────

    def _at_end(self) -> bool:
        return self.peek >= len(self.source)

    def _commit(self, kind: TokenKind) -> Token:
        text = self.source[self.committed:self.peek]
        tok = Token(kind, text, self.committed, self.peek - self.committed)
        self.committed = self.peek
        return tok

    def _reset(self) -> None:
        self.peek = self.committed

    def _skip_whitespace(self) -> None:
        self.peek = self.committed
        while not self._at_end() and self.source[self.peek] in WHITESPACE:
            self.peek += 1
        self.committed = self.peek

    def _scan_run(self) -> str:
        """Advance ``peek`` over the maximal run of non-delimiters."""
        while not self._at_end() and self.source[self.peek] not in DELIMITERS:
            self.peek += 1
        return self.source[self.committed:self.peek]

    # ── Rules ────────────────────────────────────────────────────

    def _lex_structural(self) -> Token | None:
        kind = STRUCTURAL.get(self.source[self.committed])
        if kind is None:
            self._reset()
            return None
        # '=' opening '=>' belongs to the keyword table
        if self._scan_run() in KEYWORDS:
            self._reset()
            return None
        self.peek = self.committed + 1
        return self._commit(kind)

    def _lex_keyword(self) -> Token | None:
        run = self._scan_run()
        kind = KEYWORDS.get(run)
        if kind is None:
            self._reset()
            return None
        return self._commit(kind)

    def _lex_type(self) -> Token | None:
        if not self.source.startswith(TYPE_PREFIX, self.committed):
            self._reset()
            return None
        self.peek = self.committed + len(TYPE_PREFIX)
        while not self._at_end() and self.source[self.peek] != TYPE_SUFFIX:
            self.peek += 1
        if self._at_end():
            log.debug("unterminated type literal at offset %d", self.committed)
            raise LexError("unterminated type literal", self.committed)
        self.peek += 1
        return self._commit(TokenKind.TYPE)

    def _lex_symbol(self) -> Token | None:
        while not self._at_end() and self.source[self.peek] in SYMBOL_CHARS:
            self.peek += 1
        if self.peek == self.committed:
            self._reset()
            return None
        return self._commit(TokenKind.SYMBOL)


def tokenize(source: str) -> list[Token]:
    """Lex the whole source, EOF included."""
    return list(Tokenizer(source))
