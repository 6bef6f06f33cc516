"""Stack-machine x86-64 code generation straight from the syntax tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

from .types import Node, NodeKind

_T = TypeVar("_T")

_EPILOGUE = ("  mov rsp, rbp", "  pop rbp", "  ret")

_BINARY_OPS: dict[NodeKind, tuple[str, ...]] = {
    NodeKind.ADD: ("  add rax, rdi",),
    NodeKind.SUB: ("  sub rax, rdi",),
    NodeKind.MUL: ("  imul rax, rdi",),
    NodeKind.DIV: ("  cqo", "  idiv rdi"),
    NodeKind.LE: ("  cmp rax, rdi", "  setle al", "  movzb rax, al"),
    NodeKind.LT: ("  cmp rax, rdi", "  setl al", "  movzb rax, al"),
    NodeKind.EQ: ("  cmp rax, rdi", "  sete al", "  movzb rax, al"),
    NodeKind.NE: ("  cmp rax, rdi", "  setne al", "  movzb rax, al"),
}


@dataclass
class CodegenContext:
    """State shared across generated statements: the next label number."""

    label_count: int = 1

    def next_label(self) -> int:
        count = self.label_count
        self.label_count += 1
        return count


def _require(value: _T | None, field: str, node: Node) -> _T:
    if value is None:
        raise ValueError(f"{node.kind.name} node is missing {field}")
    return value


def _gen_lvar_address(node: Node) -> Iterator[str]:
    if node.kind is not NodeKind.LVAR:
        raise ValueError("left side of assignment is not a variable")
    offset = _require(node.offset, "offset", node)
    yield "  mov rax, rbp"
    yield f"  sub rax, {offset}"
    yield "  push rax"


def _gen_stmt(node: Node, ctx: CodegenContext) -> Iterator[str]:
    yield from _gen(node, ctx)
    if not node.is_statement():
        yield "  pop rax"


def _gen_if(node: Node, ctx: CodegenContext) -> Iterator[str]:
    label = ctx.next_label()
    yield from _gen(_require(node.cond, "cond", node), ctx)
    yield "  pop rax"
    yield "  cmp rax, 0"
    then = _require(node.then, "then", node)
    if node.els is not None:
        yield f"  je .Lelse{label}"
        yield from _gen_stmt(then, ctx)
        yield f"  jmp .Lend{label}"
        yield f".Lelse{label}: "
        yield from _gen_stmt(node.els, ctx)
    else:
        yield f"  je .Lend{label}"
        yield from _gen_stmt(then, ctx)
    yield f".Lend{label}: "


def _gen(node: Node, ctx: CodegenContext) -> Iterator[str]:
    kind = node.kind
    if kind is NodeKind.NUM:
        yield f"  push {_require(node.val, 'val', node)}"
    elif kind is NodeKind.LVAR:
        yield from _gen_lvar_address(node)
        yield "  pop rax"
        yield "  mov rax, [rax]"
        yield "  push rax"
    elif kind is NodeKind.RETURN:
        yield from _gen_stmt(_require(node.lhs, "lhs", node), ctx)
        yield from _EPILOGUE
    elif kind is NodeKind.ASSIGN:
        yield from _gen_lvar_address(_require(node.lhs, "lhs", node))
        yield from _gen(_require(node.rhs, "rhs", node), ctx)
        yield "  pop rdi"
        yield "  pop rax"
        yield "  mov [rax], rdi"
        yield "  push rdi"
    elif kind is NodeKind.IF:
        yield from _gen_if(node, ctx)
    elif kind is NodeKind.BLOCK:
        for stmt in _require(node.stmts, "stmts", node):
            yield from _gen_stmt(stmt, ctx)
    elif kind is NodeKind.FN:
        yield f"  call {_require(node.fn_name, 'fn_name', node)}"
    elif kind in _BINARY_OPS:
        yield from _gen(_require(node.lhs, "lhs", node), ctx)
        yield from _gen(_require(node.rhs, "rhs", node), ctx)
        yield "  pop rdi"
        yield "  pop rax"
        yield from _BINARY_OPS[kind]
        yield "  push rax"
    else:
        raise ValueError(f"cannot generate code for {kind.name}")


def generate(node: Node, context: CodegenContext) -> list[str]:
    """Assembly lines for ``node``; expressions leave their value on the stack."""
    return list(_gen(node, context))


def generate_statement(node: Node, context: CodegenContext) -> list[str]:
    """Assembly lines for ``node`` as a statement, discarding any value left."""
    return list(_gen_stmt(node, context))