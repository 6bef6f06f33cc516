"""Linear-scan register allocation."""

from __future__ import annotations

from .interval_analysis import Interval
from ..ir.types import VirtualReg


def _free_register(active: list[Interval], reg_count: int) -> int | None:
    used = {interval.reg for interval in active if interval.reg is not None}
    return next((i for i in range(reg_count) if i not in used), None)


def linear_reg_alloc(intervals: list[Interval], reg_count: int) -> dict[VirtualReg, int]:
    """Assign each interval a register index in ``range(reg_count)``.

    ``intervals`` is sorted by start in place and each one's ``reg`` is set.
    Raises ValueError when more registers are live at once than are available.
    """
    intervals.sort(key=lambda i: i.start)
    active: list[Interval] = []
    for interval in intervals:
        active = [a for a in active if a.end > interval.start]
        reg = _free_register(active, reg_count) if len(active) < reg_count else None
        if reg is None:
            raise ValueError("no free register: spilling is not supported")
        interval.reg = reg
        active.append(interval)
    return {interval.vreg: interval.reg for interval in intervals}