"""Tokens, syntax tree nodes and local variables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    RETURN = auto()
    IF = auto()
    ELSE = auto()
    RESERVED = auto()
    IDENT = auto()
    NUM = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    length: int
    pos: int
    val: int | None = None


class NodeKind(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    NUM = auto()
    LE = auto()
    LT = auto()
    EQ = auto()
    NE = auto()
    ASSIGN = auto()
    LVAR = auto()
    RETURN = auto()
    IF = auto()
    ELSE = auto()
    BLOCK = auto()
    FN = auto()


_STATEMENT_KINDS = frozenset({NodeKind.BLOCK, NodeKind.RETURN, NodeKind.IF, NodeKind.FN})


@dataclass
class Node:
    """A syntax tree node; which fields are set depends on ``kind``."""

    kind: NodeKind
    lhs: Node | None = None
    rhs: Node | None = None
    cond: Node | None = None
    then: Node | None = None
    els: Node | None = None
    val: int | None = None
    offset: int | None = None
    stmts: list[Node] | None = None
    ident_name: str | None = None
    fn_name: str | None = None

    @classmethod
    def num(cls, val: int) -> Node:
        return cls(NodeKind.NUM, val=val)

    @classmethod
    def lvar(cls, offset: int, name: str) -> Node:
        return cls(NodeKind.LVAR, offset=offset, ident_name=name)

    @classmethod
    def if_(cls, cond: Node, then: Node, els: Node | None) -> Node:
        return cls(NodeKind.IF, cond=cond, then=then, els=els)

    @classmethod
    def block(cls, stmts: list[Node]) -> Node:
        return cls(NodeKind.BLOCK, stmts=list(stmts))

    @classmethod
    def call(cls, name: str) -> Node:
        return cls(NodeKind.FN, fn_name=name)

    def is_statement(self) -> bool:
        """True for nodes that leave no value on the stack."""
        return self.kind in _STATEMENT_KINDS


@dataclass(frozen=True)
class LVar:
    name: str
    length: int
    offset: int