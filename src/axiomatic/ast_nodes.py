"""AST node definitions for definition documents.

Every node keeps the token that anchors it in the source and is frozen once
constructed. ``accept`` dispatches to the matching ``visit_*`` method of a
visitor; see ``axiomatic.visitor``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from axiomatic.tokens import TYPE_PREFIX, TYPE_SUFFIX, Token


class Connective(Enum):
    AND = "and"
    OR = "or"
    IMPLIES = "=>"
    IFF = "<=>"


class QuantifierKind(Enum):
    FORALL = "forall"
    EXISTS = "exists"


# ── Literals ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class TypeLiteral:
    token: Token

    @property
    def name(self) -> str:
        """The bracketed name, ``field`` for ``type[field]``."""
        return self.token.text[len(TYPE_PREFIX):-len(TYPE_SUFFIX)]

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_type_literal(self)


@dataclass(frozen=True)
class SymbolLiteral:
    token: Token

    @property
    def name(self) -> str:
        return self.token.text

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_symbol_literal(self)


# ── Terms ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Variable:
    symbol: str
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_variable(self)


@dataclass(frozen=True)
class FunctionCall:
    symbol: str
    args: tuple[Term, ...]
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_function_call(self)


Term = Union[Variable, FunctionCall]


# ── Formulas ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Equal:
    lhs: Term
    rhs: Term
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_equal(self)


@dataclass(frozen=True)
class Negation:
    inner: Formula
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_negation(self)


@dataclass(frozen=True)
class BinaryConnective:
    op: Connective
    lhs: Formula
    rhs: Formula
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_binary_connective(self)


@dataclass(frozen=True)
class Quantifier:
    kind: QuantifierKind
    bound: Variable
    body: Formula
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_quantifier(self)


@dataclass(frozen=True)
class Predicate:
    name: TypeLiteral | SymbolLiteral
    args: tuple[Term, ...]
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_predicate(self)


Formula = Union[Equal, Negation, BinaryConnective, Quantifier, Predicate]


# ── Document root ────────────────────────────────────────────────


@dataclass(frozen=True)
class DefNode:
    name: TypeLiteral
    body: Formula
    token: Token

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_definition(self)


Node = Union[
    DefNode, Equal, Negation, BinaryConnective, Quantifier, Predicate,
    Variable, FunctionCall, TypeLiteral, SymbolLiteral,
]
