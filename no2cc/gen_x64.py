"""x86-64 assembly from register-allocated three-address code."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from .ir.types import (
    Assign,
    BinOp,
    BinOpCode,
    GoTo,
    IfFalse,
    Imm,
    Instruction,
    LabelMark,
    LoadImm,
    LoadVar,
    Operand,
    Return,
    VirtualReg,
)

_ARITH = {BinOp.ADD: "add", BinOp.SUB: "sub", BinOp.MUL: "imul"}
_SETCC = {BinOp.LE: "setle", BinOp.LT: "setl", BinOp.EQ: "sete", BinOp.NE: "setne"}


class Generator:
    """Turns instructions into assembly lines using physical register names."""

    def __init__(self, regs: Sequence[str], codes: Sequence[Instruction]) -> None:
        self.regs = list(regs)
        self.codes = list(codes)

    def gen_all(self, vreg_to_reg: Mapping[VirtualReg, int]) -> list[str]:
        """Assembly lines for every instruction, given each register's index in ``regs``."""
        return [line for instr in self.codes for line in self._generate(instr, vreg_to_reg)]

    def _reg_name(self, vreg: VirtualReg, vreg_to_reg: Mapping[VirtualReg, int]) -> str:
        try:
            idx = vreg_to_reg[vreg]
        except KeyError:
            raise KeyError(f"missing {vreg!r} in register map") from None
        if not 0 <= idx < len(self.regs):
            raise IndexError(f"register index {idx} for {vreg!r} is out of range")
        return self.regs[idx]

    def _operand(self, operand: Operand, vreg_to_reg: Mapping[VirtualReg, int]) -> str:
        if isinstance(operand, Imm):
            return str(operand.value)
        return self._reg_name(operand.vreg, vreg_to_reg)

    def _generate(
        self, instr: Instruction, vreg_to_reg: Mapping[VirtualReg, int]
    ) -> Iterator[str]:
        if isinstance(instr, LoadImm):
            yield f"  mov {self._reg_name(instr.dest, vreg_to_reg)}, {instr.value}"
        elif isinstance(instr, BinOpCode):
            left = self._operand(instr.left, vreg_to_reg)
            right = self._operand(instr.right, vreg_to_reg)
            dest = self._reg_name(instr.dest, vreg_to_reg)
            if instr.op in _ARITH:
                yield f"  {_ARITH[instr.op]} {left}, {right}"
                if dest != left:
                    yield f"  mov {dest}, {left}"
            elif instr.op is BinOp.DIV:
                yield f"  mov rax, {left}"
                yield "  cqo"
                yield f"  idiv {right}"
                yield f"  mov {dest}, rax"
            else:
                yield f"  cmp {left}, {right}"
                yield f"  {_SETCC[instr.op]} al"
                yield f"  movzb {dest}, al"
        elif isinstance(instr, Assign):
            dest = self._reg_name(instr.dest, vreg_to_reg)
            yield f"  mov {dest}, {self._operand(instr.src, vreg_to_reg)}"
        elif isinstance(instr, LoadVar):
            return
        elif isinstance(instr, Return):
            yield f"  mov rax, {self._reg_name(instr.src, vreg_to_reg)}"
            yield "  mov rsp, rbp"
            yield "  pop rbp"
            yield "  ret"
        elif isinstance(instr, IfFalse):
            yield f"  cmp {self._reg_name(instr.cond, vreg_to_reg)}, 0"
            yield f"  je {instr.label}"
        elif isinstance(instr, GoTo):
            yield f"  jmp {instr.label}"
        elif isinstance(instr, LabelMark):
            yield f"{instr.label}:"
        else:
            raise TypeError(f"unknown instruction {instr!r}")