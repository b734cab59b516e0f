"""Backtracking recursive-descent parser for definition documents.

Grammar (ordered choice, the first alternative that matches wins)::

    definition       := 'def' TYPE '{' formula '}'
    formula          := binaryConnective | parenthesized | quantifier
                      | negation | equality | predicate
    binaryConnective := binaryLhs ('and' | 'or' | '=>' | '<=>') formula
    binaryLhs        := parenthesized | quantifier | negation | equality | predicate
    parenthesized    := '(' formula ')'
    quantifier       := ('forall' | 'exists') variable formula
    negation         := '!' formula
    equality         := term '=' term
    predicate        := (TYPE | 'in') '(' termList ')'
    term             := function | variable
    function         := SYMBOL '(' termList ')'
    variable         := SYMBOL
    termList         := ε | term (',' term)*

``binaryLhs`` leaves out ``binaryConnective`` so the grammar is not left
recursive; chained connectives therefore nest to the right.

Every rule method returns its node, or ``None`` when it does not match. A
rule runs inside its own checkpoint on the token iterator, so a rule that
does not match leaves the iterator exactly where it found it. Only lexer
errors escape as exceptions.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from axiomatic.ast_nodes import (
    BinaryConnective,
    Connective,
    DefNode,
    Equal,
    Formula,
    FunctionCall,
    Negation,
    Predicate,
    Quantifier,
    QuantifierKind,
    SymbolLiteral,
    Term,
    TypeLiteral,
    Variable,
)
from axiomatic.rollback import CheckpointingIterator
from axiomatic.tokens import CONNECTIVES, QUANTIFIERS, Token, TokenKind

log = logging.getLogger(__name__)

R = TypeVar("R")

_CONNECTIVE_OF: dict[TokenKind, Connective] = {
    TokenKind.AND: Connective.AND,
    TokenKind.OR: Connective.OR,
    TokenKind.IMPLIES: Connective.IMPLIES,
    TokenKind.IFF: Connective.IFF,
}

_QUANTIFIER_OF: dict[TokenKind, QuantifierKind] = {
    TokenKind.FORALL: QuantifierKind.FORALL,
    TokenKind.EXISTS: QuantifierKind.EXISTS,
}

_IN = "in"


def _rule(method: Callable[[Parser], R | None]) -> Callable[[Parser], R | None]:
    """Run a rule inside one checkpoint: commit on a match, roll back otherwise."""

    @functools.wraps(method)
    def attempt(self: Parser) -> R | None:
        with self.tokens.checkpoint() as cp:
            result = method(self)
            if result is not None:
                cp.commit()
            else:
                log.debug("%s: no match from token %d", method.__name__, cp.position)
            return result

    return attempt


class Parser:
    """Parses a token stream into a ``DefNode``."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: CheckpointingIterator[Token] = CheckpointingIterator(tokens)

    # ── Token access ─────────────────────────────────────────────

    def _next(self) -> Token | None:
        try:
            return next(self.tokens)
        except StopIteration:
            return None

    def _expect(self, kind: TokenKind) -> Token | None:
        tok = self._next()
        if tok is None or tok.kind != kind:
            return None
        return tok

    def _first_of(self, *alternatives: Callable[[], R | None]) -> R | None:
        for alternative in alternatives:
            node = alternative()
            if node is not None:
                return node
        return None

    @property
    def furthest_offset(self) -> int:
        """Source offset of the furthest token pulled from the lexer so far."""
        tok = self.tokens.furthest
        return tok.offset if tok is not None else 0

    # ── Top level ────────────────────────────────────────────────

    @_rule
    def parse(self) -> DefNode | None:
        """Parse a complete document: one definition followed by EOF."""
        root = self.definition()
        if root is None:
            return None
        if self._expect(TokenKind.EOF) is None:
            return None
        return root

    @_rule
    def definition(self) -> DefNode | None:
        def_tok = self._expect(TokenKind.DEF)
        if def_tok is None:
            return None
        name_tok = self._expect(TokenKind.TYPE)
        if name_tok is None:
            return None
        if self._expect(TokenKind.LBRACE) is None:
            return None
        body = self.formula()
        if body is None:
            return None
        if self._expect(TokenKind.RBRACE) is None:
            return None
        return DefNode(name=TypeLiteral(name_tok), body=body, token=def_tok)

    # ── Formulas ─────────────────────────────────────────────────

    @_rule
    def formula(self) -> Formula | None:
        return self._first_of(
            self.binary_connective,
            self.parenthesized,
            self.quantifier,
            self.negation,
            self.equality,
            self.predicate,
        )

    @_rule
    def binary_connective(self) -> BinaryConnective | None:
        """binaryLhs connective formula, with chains read in one loop.

        The right operand of a link is itself tried as a connective first,
        and only a lone ``binaryLhs`` is left when that fails, so a chain is
        the run of ``binaryLhs connective`` pairs followed by one last
        ``binaryLhs``. A connective with no operand after it is left unread
        and the chain ends before it.
        """
        operands: list[Formula] = []
        ops: list[Token] = []
        while True:
            lhs = self.binary_lhs()
            if lhs is None:
                break
            operands.append(lhs)
            op_tok = self._next()
            if op_tok is None or op_tok.kind not in CONNECTIVES:
                if op_tok is not None:
                    self.tokens.step_back()
                break
            ops.append(op_tok)

        if ops and len(ops) == len(operands):
            self.tokens.step_back()
            ops.pop()
        if not ops:
            return None

        node = operands[-1]
        for lhs, op_tok in zip(reversed(operands[:-1]), reversed(ops)):
            node = BinaryConnective(
                op=_CONNECTIVE_OF[op_tok.kind], lhs=lhs, rhs=node, token=op_tok,
            )
        return node

    @_rule
    def binary_lhs(self) -> Formula | None:
        return self._first_of(
            self.parenthesized,
            self.quantifier,
            self.negation,
            self.equality,
            self.predicate,
        )

    @_rule
    def parenthesized(self) -> Formula | None:
        if self._expect(TokenKind.LPAREN) is None:
            return None
        inner = self.formula()
        if inner is None:
            return None
        if self._expect(TokenKind.RPAREN) is None:
            return None
        return inner

    @_rule
    def quantifier(self) -> Quantifier | None:
        kw = self._next()
        if kw is None or kw.kind not in QUANTIFIERS:
            return None
        # The bound variable is a bare identifier, never a general term.
        bound = self.variable()
        if bound is None:
            return None
        body = self.formula()
        if body is None:
            return None
        return Quantifier(
            kind=_QUANTIFIER_OF[kw.kind], bound=bound, body=body, token=kw,
        )

    @_rule
    def negation(self) -> Negation | None:
        bang = self._expect(TokenKind.BANG)
        if bang is None:
            return None
        inner = self.formula()
        if inner is None:
            return None
        return Negation(inner=inner, token=bang)

    @_rule
    def equality(self) -> Equal | None:
        lhs = self.term()
        if lhs is None:
            return None
        eq = self._expect(TokenKind.EQUALS)
        if eq is None:
            return None
        rhs = self.term()
        if rhs is None:
            return None
        return Equal(lhs=lhs, rhs=rhs, token=eq)

    @_rule
    def predicate(self) -> Predicate | None:
        name_tok = self._next()
        if name_tok is None:
            return None
        if name_tok.kind == TokenKind.TYPE:
            name: TypeLiteral | SymbolLiteral = TypeLiteral(name_tok)
        elif name_tok.kind == TokenKind.SYMBOL and name_tok.text == _IN:
            name = SymbolLiteral(name_tok)
        else:
            return None
        args = self._arguments()
        if args is None:
            return None
        return Predicate(name=name, args=args, token=name_tok)

    # ── Terms ────────────────────────────────────────────────────

    @_rule
    def term(self) -> Term | None:
        return self._first_of(self.function, self.variable)

    @_rule
    def function(self) -> FunctionCall | None:
        sym = self._expect(TokenKind.SYMBOL)
        if sym is None:
            return None
        args = self._arguments()
        if args is None:
            return None
        return FunctionCall(symbol=sym.text, args=args, token=sym)

    @_rule
    def variable(self) -> Variable | None:
        sym = self._expect(TokenKind.SYMBOL)
        if sym is None:
            return None
        return Variable(symbol=sym.text, token=sym)

    @_rule
    def term_list(self) -> tuple[Term, ...] | None:
        """Zero or more comma-separated terms.

        A comma must be followed by a term; a dangling comma fails the whole
        list rather than truncating it.
        """
        first = self.term()
        if first is None:
            return ()
        terms = [first]
        while True:
            sep = self._next()
            if sep is None or sep.kind != TokenKind.COMMA:
                if sep is not None:
                    self.tokens.step_back()
                return tuple(terms)
            term = self.term()
            if term is None:
                return None
            terms.append(term)

    def _arguments(self) -> tuple[Term, ...] | None:
        """'(' termList ')', run inside the caller's checkpoint."""
        if self._expect(TokenKind.LPAREN) is None:
            return None
        args = self.term_list()
        if args is None:
            return None
        if self._expect(TokenKind.RPAREN) is None:
            return None
        return args
