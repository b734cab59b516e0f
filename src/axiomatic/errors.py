"""Error types raised by the lexer, the parser front door and the iterator."""

from __future__ import annotations


class AxiomaticError(Exception):
    """Failure tied to an offset in the (trimmed) source text."""

    def __init__(self, message: str, offset: int) -> None:
        self.message = message
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


class LexError(AxiomaticError):
    """No lexing rule matches at the current offset. Not recoverable."""


class ParseError(AxiomaticError):
    """The source does not match the ``definition`` rule.

    The offset is the furthest token the parser pulled from the lexer
    before every alternative gave up.
    """


class CheckpointError(RuntimeError):
    """A checkpointing iterator was driven out of order.

    This signals a parser bug, never malformed input.
    """
