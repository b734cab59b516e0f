"""Lexer and backtracking parser for algebraic-structure definitions."""

from __future__ import annotations

from axiomatic.ast_nodes import DefNode
from axiomatic.errors import CheckpointError, LexError, ParseError
from axiomatic.parser import Parser
from axiomatic.tokenizer import Tokenizer, tokenize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CheckpointError",
    "DefNode",
    "LexError",
    "ParseError",
    "Parser",
    "Tokenizer",
    "parse",
    "tokenize",
]


def parse(source: str) -> DefNode:
    """Parse one definition document.

    Raises LexError on a character no rule accepts and ParseError when the
    tokens do not form a definition.
    """
    parser = Parser(Tokenizer(source))
    root = parser.parse()
    if root is None:
        raise ParseError("source is not a definition", parser.furthest_offset)
    return root
