"""Recursive-descent parser producing syntax trees from a token stream."""

from __future__ import annotations

from collections.abc import Iterator

from .lexer import TokenStream, tokenize
from .types import LVar, Node, NodeKind, TokenKind

_SLOT_SIZE = 8
_STACK_ALIGN = 16


class LocalVars:
    """Local variables in declaration order, each with its own stack slot."""

    def __init__(self) -> None:
        # The head entry only anchors the offset chain and is never found by name.
        self._vars: list[LVar] = [LVar("__dummy", 12, 0)]

    def __len__(self) -> int:
        return len(self._vars) - 1

    def __iter__(self) -> Iterator[LVar]:
        return iter(self._vars[1:])

    def find(self, name: str) -> LVar | None:
        """Return the variable called ``name``, or None if it is not declared."""
        return next((var for var in self._vars[1:] if var.name == name), None)

    def declare(self, name: str) -> LVar:
        """Add ``name`` with the next free stack offset and return it."""
        var = LVar(name, len(name), self._vars[-1].offset + _SLOT_SIZE)
        self._vars.append(var)
        return var


class Parser:
    """Parses statements from a TokenStream, recording local variables."""

    def __init__(self, tokens: TokenStream) -> None:
        self.tokens = tokens
        self.lvars = LocalVars()

    def program(self) -> list[Node]:
        """Parse statements until the end of input."""
        nodes = []
        while not self.tokens.at_eof():
            nodes.append(self.stmt())
        return nodes

    def stack_size(self) -> int:
        """Bytes of stack needed for the locals, rounded up to 16."""
        raw = len(self.lvars) * _SLOT_SIZE
        return (raw + _STACK_ALIGN - 1) // _STACK_ALIGN * _STACK_ALIGN

    def stmt(self) -> Node:
        """stmt = expr ";" | "return" expr ";" | "if" "(" expr ")" stmt ("else" stmt)? | "{" stmt* "}" """
        tokens = self.tokens
        if tokens.consume_keyword(TokenKind.IF):
            tokens.expect("(")
            cond = self._expr()
            tokens.expect(")")
            then = self.stmt()
            els = self.stmt() if tokens.consume_keyword(TokenKind.ELSE) else None
            return Node.if_(cond, then, els)

        if tokens.consume("{"):
            stmts = []
            while not tokens.consume("}"):
                stmts.append(self.stmt())
            return Node.block(stmts)

        if tokens.consume_keyword(TokenKind.RETURN):
            node = Node(NodeKind.RETURN, lhs=self._expr())
        else:
            node = self._expr()
        tokens.expect(";")
        return node

    def _expr(self) -> Node:
        return self._assign()

    def _assign(self) -> Node:
        node = self._equality()
        if self.tokens.consume("="):
            return Node(NodeKind.ASSIGN, lhs=node, rhs=self._equality())
        return node

    def _equality(self) -> Node:
        node = self._relational()
        while True:
            if self.tokens.consume("=="):
                node = Node(NodeKind.EQ, lhs=node, rhs=self._relational())
            elif self.tokens.consume("!="):
                node = Node(NodeKind.NE, lhs=node, rhs=self._relational())
            else:
                return node

    def _relational(self) -> Node:
        node = self._add()
        while True:
            if self.tokens.consume("<="):
                node = Node(NodeKind.LE, lhs=node, rhs=self._add())
            elif self.tokens.consume("<"):
                node = Node(NodeKind.LT, lhs=node, rhs=self._add())
            elif self.tokens.consume(">="):
                node = Node(NodeKind.LE, lhs=self._add(), rhs=node)
            elif self.tokens.consume(">"):
                node = Node(NodeKind.LT, lhs=self._add(), rhs=node)
            else:
                return node

    def _add(self) -> Node:
        node = self._mul()
        while True:
            if self.tokens.consume("+"):
                node = Node(NodeKind.ADD, lhs=node, rhs=self._mul())
            elif self.tokens.consume("-"):
                node = Node(NodeKind.SUB, lhs=node, rhs=self._mul())
            else:
                return node

    def _mul(self) -> Node:
        node = self._unary()
        while True:
            if self.tokens.consume("*"):
                node = Node(NodeKind.MUL, lhs=node, rhs=self._unary())
            elif self.tokens.consume("/"):
                node = Node(NodeKind.DIV, lhs=node, rhs=self._unary())
            else:
                return node

    def _unary(self) -> Node:
        if self.tokens.consume("+"):
            return self._primary()
        if self.tokens.consume("-"):
            return Node(NodeKind.SUB, lhs=Node.num(0), rhs=self._primary())
        return self._primary()

    def _primary(self) -> Node:
        tokens = self.tokens
        if tokens.consume("("):
            node = self._expr()
            tokens.expect(")")
            return node

        ident = tokens.consume_ident()
        if ident is not None:
            if tokens.consume("("):
                tokens.expect(")")
                return Node.call(ident.text)
            var = self.lvars.find(ident.text) or self.lvars.declare(ident.text)
            return Node.lvar(var.offset, var.name)

        return Node.num(tokens.expect_number())


def parse(source: str) -> list[Node]:
    """Tokenize and parse every statement of ``source``."""
    return Parser(TokenStream(tokenize(source), source)).program()