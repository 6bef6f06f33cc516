"""Lowering of syntax trees into three-address code."""

from __future__ import annotations

from typing import TypeVar

from ..types import Node, NodeKind
from .types import (
    Assign,
    BinOp,
    BinOpCode,
    GoTo,
    IfFalse,
    Imm,
    Instruction,
    Label,
    LabelKind,
    LabelMark,
    LoadImm,
    LoadVar,
    Reg,
    Return,
    VirtualReg,
)

_T = TypeVar("_T")

_BINOPS: dict[NodeKind, BinOp] = {
    NodeKind.ADD: BinOp.ADD,
    NodeKind.SUB: BinOp.SUB,
    NodeKind.MUL: BinOp.MUL,
    NodeKind.DIV: BinOp.DIV,
    NodeKind.LE: BinOp.LE,
    NodeKind.LT: BinOp.LT,
    NodeKind.EQ: BinOp.EQ,
    NodeKind.NE: BinOp.NE,
}


class GenIrContext:
    """Collects emitted instructions and hands out registers and labels."""

    def __init__(self) -> None:
        self.code: list[Instruction] = []
        self._register_count = 0
        self._label_count = 0
        self._var_map: dict[str, VirtualReg] = {}

    def emit(self, instr: Instruction) -> None:
        self.code.append(instr)

    def new_reg(self) -> VirtualReg:
        """A fresh virtual register."""
        reg = VirtualReg(self._register_count)
        self._register_count += 1
        return reg

    def var_reg(self, name: str) -> VirtualReg:
        """The register bound to variable ``name``, binding a new one if needed."""
        reg = self._var_map.get(name)
        if reg is None:
            reg = self.new_reg()
            self._var_map[name] = reg
        return reg

    def next_label(self) -> int:
        count = self._label_count
        self._label_count += 1
        return count


def _require(value: _T | None, field: str, node: Node) -> _T:
    if value is None:
        raise ValueError(f"{node.kind.name} node is missing {field}")
    return value


def node_to_ir(node: Node, context: GenIrContext) -> VirtualReg:
    """Emit instructions for ``node`` into ``context``; return the register holding its value."""
    kind = node.kind

    if kind is NodeKind.NUM:
        reg = context.new_reg()
        context.emit(LoadImm(reg, _require(node.val, "val", node)))
        return reg

    if kind in _BINOPS:
        left = Reg(node_to_ir(_require(node.lhs, "lhs", node), context))
        right = Reg(node_to_ir(_require(node.rhs, "rhs", node), context))
        dest = context.new_reg()
        context.emit(BinOpCode(dest, left, _BINOPS[kind], right))
        return dest

    if kind is NodeKind.ASSIGN:
        dest = node_to_ir(_require(node.lhs, "lhs", node), context)
        rhs = _require(node.rhs, "rhs", node)
        if rhs.kind is NodeKind.NUM:
            src = Imm(_require(rhs.val, "val", rhs))
        else:
            src = Reg(node_to_ir(rhs, context))
        context.emit(Assign(dest, src))
        return dest

    if kind is NodeKind.LVAR:
        name = _require(node.ident_name, "ident_name", node)
        dest = context.var_reg(name)
        context.emit(LoadVar(dest, name))
        return dest

    if kind is NodeKind.RETURN:
        src = node_to_ir(_require(node.lhs, "lhs", node), context)
        context.emit(Return(src))
        return src

    if kind is NodeKind.IF:
        cond = node_to_ir(_require(node.cond, "cond", node), context)
        then = _require(node.then, "then", node)
        if node.els is not None:
            label_else = Label(LabelKind.ELSE, context.next_label())
            context.emit(IfFalse(cond, label_else))
            node_to_ir(then, context)
            label_end = Label(LabelKind.END, context.next_label())
            context.emit(GoTo(label_end))
            context.emit(LabelMark(label_else))
            result = node_to_ir(node.els, context)
            context.emit(LabelMark(label_end))
            return result
        label_end = Label(LabelKind.END, context.next_label())
        context.emit(IfFalse(cond, label_end))
        result = node_to_ir(then, context)
        context.emit(LabelMark(label_end))
        return result

    raise ValueError(f"cannot lower {kind.name} to IR")