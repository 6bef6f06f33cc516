"""Three-address code instructions and their operands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


@dataclass(frozen=True)
class VirtualReg:
    id: int


@dataclass(frozen=True)
class Reg:
    vreg: VirtualReg


@dataclass(frozen=True)
class Imm:
    value: int


Operand = Union[Reg, Imm]


class BinOp(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    LE = auto()
    LT = auto()
    EQ = auto()
    NE = auto()


class LabelKind(Enum):
    ELSE = "else"
    END = "end"


@dataclass(frozen=True)
class Label:
    kind: LabelKind
    count: int

    def __str__(self) -> str:
        return f".L{self.kind.value}{self.count}"


def _regs_of(*operands: Operand) -> list[VirtualReg]:
    return [op.vreg for op in operands if isinstance(op, Reg)]


@dataclass(frozen=True)
class LoadImm:
    dest: VirtualReg
    value: int

    def using_regs(self) -> list[VirtualReg]:
        return [self.dest]


@dataclass(frozen=True)
class BinOpCode:
    dest: VirtualReg
    left: Operand
    op: BinOp
    right: Operand

    def using_regs(self) -> list[VirtualReg]:
        return [self.dest, *_regs_of(self.left, self.right)]


@dataclass(frozen=True)
class Assign:
    dest: VirtualReg
    src: Operand

    def using_regs(self) -> list[VirtualReg]:
        return [self.dest, *_regs_of(self.src)]


@dataclass(frozen=True)
class LoadVar:
    dest: VirtualReg
    var: str

    def using_regs(self) -> list[VirtualReg]:
        return [self.dest]


@dataclass(frozen=True)
class Return:
    src: VirtualReg

    def using_regs(self) -> list[VirtualReg]:
        return [self.src]


@dataclass(frozen=True)
class IfFalse:
    """Jump to ``label`` when ``cond`` is zero."""

    cond: VirtualReg
    label: Label

    def using_regs(self) -> list[VirtualReg]:
        return [self.cond]


@dataclass(frozen=True)
class GoTo:
    label: Label

    def using_regs(self) -> list[VirtualReg]:
        return []


@dataclass(frozen=True)
class LabelMark:
    label: Label

    def using_regs(self) -> list[VirtualReg]:
        return []


Instruction = Union[LoadImm, BinOpCode, Assign, LoadVar, Return, IfFalse, GoTo, LabelMark]