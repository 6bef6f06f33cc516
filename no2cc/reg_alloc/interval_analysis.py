"""Live-interval analysis over three-address code."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..ir.types import Instruction, VirtualReg


@dataclass
class Interval:
    """The span of instructions over which ``vreg`` is live, and its assigned register."""

    vreg: VirtualReg
    start: int
    end: int
    reg: int | None = None


def scan_interval(codes: Sequence[Instruction]) -> list[Interval]:
    """One interval per register: from its first use to its last use."""
    start: dict[VirtualReg, int] = {}
    end: dict[VirtualReg, int] = {}
    for i, instr in enumerate(codes):
        for reg in instr.using_regs():
            start.setdefault(reg, i)
            end[reg] = i
    return [Interval(vreg, first, end[vreg]) for vreg, first in start.items()]