"""Visitor capability set for the AST, and a structural walker.

A node's ``accept(visitor)`` calls exactly one ``visit_*`` method with the
node itself. Nothing recurses on its own: a visitor that wants the children
must call ``accept`` on them, which is what ``Walker`` does.
"""

from __future__ import annotations

from typing import Any

from axiomatic.ast_nodes import (
    BinaryConnective,
    DefNode,
    Equal,
    FunctionCall,
    Negation,
    Node,
    Predicate,
    Quantifier,
    SymbolLiteral,
    TypeLiteral,
    Variable,
)


class Visitor:
    """One method per node shape. Unhandled shapes raise NotImplementedError."""

    def _unhandled(self, node: Node) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} does not handle {type(node).__name__}"
        )

    def visit_definition(self, node: DefNode) -> Any:
        return self._unhandled(node)

    def visit_equal(self, node: Equal) -> Any:
        return self._unhandled(node)

    def visit_negation(self, node: Negation) -> Any:
        return self._unhandled(node)

    def visit_binary_connective(self, node: BinaryConnective) -> Any:
        return self._unhandled(node)

    def visit_quantifier(self, node: Quantifier) -> Any:
        return self._unhandled(node)

    def visit_predicate(self, node: Predicate) -> Any:
        return self._unhandled(node)

    def visit_variable(self, node: Variable) -> Any:
        return self._unhandled(node)

    def visit_function_call(self, node: FunctionCall) -> Any:
        return self._unhandled(node)

    def visit_type_literal(self, node: TypeLiteral) -> Any:
        return self._unhandled(node)

    def visit_symbol_literal(self, node: SymbolLiteral) -> Any:
        return self._unhandled(node)


class Walker(Visitor):
    """Visits every node depth-first, parents before children, in source order.

    Subclasses override ``enter`` to observe nodes.
    """

    def enter(self, node: Node) -> None:
        pass

    def visit_definition(self, node: DefNode) -> None:
        self.enter(node)
        node.name.accept(self)
        node.body.accept(self)

    def visit_equal(self, node: Equal) -> None:
        self.enter(node)
        node.lhs.accept(self)
        node.rhs.accept(self)

    def visit_negation(self, node: Negation) -> None:
        self.enter(node)
        node.inner.accept(self)

    def visit_binary_connective(self, node: BinaryConnective) -> None:
        self.enter(node)
        node.lhs.accept(self)
        node.rhs.accept(self)

    def visit_quantifier(self, node: Quantifier) -> None:
        self.enter(node)
        node.bound.accept(self)
        node.body.accept(self)

    def visit_predicate(self, node: Predicate) -> None:
        self.enter(node)
        node.name.accept(self)
        for arg in node.args:
            arg.accept(self)

    def visit_variable(self, node: Variable) -> None:
        self.enter(node)

    def visit_function_call(self, node: FunctionCall) -> None:
        self.enter(node)
        for arg in node.args:
            arg.accept(self)

    def visit_type_literal(self, node: TypeLiteral) -> None:
        self.enter(node)

    def visit_symbol_literal(self, node: SymbolLiteral) -> None:
        self.enter(node)


class NodeCounter(Walker):
    """Counts nodes per shape name."""

    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def enter(self, node: Node) -> None:
        name = type(node).__name__
        self.counts[name] = self.counts.get(name, 0) + 1
