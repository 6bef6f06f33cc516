import pytest

from no2cc.ir.types import VirtualReg
from no2cc.reg_alloc.interval_analysis import Interval
from no2cc.reg_alloc.register_allocation import linear_reg_alloc


def sorted_result(mapping):
    return sorted(mapping.items(), key=lambda item: item[0].id)


def test_alloc_binop():
    intervals = [
        Interval(VirtualReg(0), 0, 2),
        Interval(VirtualReg(1), 1, 2),
        Interval(VirtualReg(2), 2, 2),
    ]
    assert sorted_result(linear_reg_alloc(intervals, 8)) == [
        (VirtualReg(0), 0),
        (VirtualReg(1), 1),
        (VirtualReg(2), 0),
    ]


def test_alloc_longer_op1():
    intervals = [
        Interval(VirtualReg(0), 0, 2),
        Interval(VirtualReg(1), 1, 2),
        Interval(VirtualReg(2), 2, 4),
        Interval(VirtualReg(3), 3, 4),
        Interval(VirtualReg(4), 4, 4),
    ]
    assert sorted_result(linear_reg_alloc(intervals, 8)) == [
        (VirtualReg(0), 0),
        (VirtualReg(1), 1),
        (VirtualReg(2), 0),
        (VirtualReg(3), 1),
        (VirtualReg(4), 0),
    ]


def test_alloc_longer_op2():
    intervals = [
        Interval(VirtualReg(0), 0, 4),
        Interval(VirtualReg(1), 1, 3),
        Interval(VirtualReg(2), 2, 3),
        Interval(VirtualReg(3), 3, 4),
        Interval(VirtualReg(4), 4, 4),
    ]
    assert sorted_result(linear_reg_alloc(intervals, 8)) == [
        (VirtualReg(0), 0),
        (VirtualReg(1), 1),
        (VirtualReg(2), 2),
        (VirtualReg(3), 1),
        (VirtualReg(4), 0),
    ]


def test_intervals_sorted_and_marked_in_place():
    intervals = [Interval(VirtualReg(1), 1, 1), Interval(VirtualReg(0), 0, 0)]
    linear_reg_alloc(intervals, 2)
    assert [i.start for i in intervals] == [0, 1]
    assert all(i.reg is not None for i in intervals)


def test_overlapping_intervals_get_distinct_registers():
    intervals = [Interval(VirtualReg(i), i, 5) for i in range(4)]
    mapping = linear_reg_alloc(intervals, 4)
    assert sorted(mapping.values()) == [0, 1, 2, 3]


def test_too_few_registers_raises():
    intervals = [Interval(VirtualReg(0), 0, 2), Interval(VirtualReg(1), 1, 2)]
    with pytest.raises(ValueError):
        linear_reg_alloc(intervals, 1)


def test_empty_input():
    assert linear_reg_alloc([], 4) == {}