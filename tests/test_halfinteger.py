"""半整数算术与宇称单元测试

测试 halfinteger.py 与 parity.py 模块。
"""

from fractions import Fraction

import pytest
import sympy as sp

from atomlevels.errors import DomainError
from atomlevels.halfinteger import (
    half_integer,
    half_integer_range,
    is_half_integer,
    projection_range,
    triangle_range,
)
from atomlevels.orbitals import Orbital
from atomlevels.parity import EVEN, ODD, Parity, parity_of
from atomlevels.parsing import parse_configuration

half = sp.Rational(1, 2)


@pytest.mark.halfint
@pytest.mark.quick
@pytest.mark.parametrize("value", ["3/2", 1.5, Fraction(3, 2), sp.Rational(3, 2)])
def test_half_integer_accepts_common_inputs(value):
    """测试多种输入类型都规范化为 sympy.Rational(3, 2)。"""
    assert half_integer(value) == sp.Rational(3, 2)


@pytest.mark.halfint
@pytest.mark.quick
def test_half_integer_rejects_other_rationals():
    """测试分母不为 1 或 2 的有理数被拒绝。"""
    with pytest.raises(DomainError, match="不是整数或半奇数"):
        half_integer("1/3")
    with pytest.raises(DomainError):
        half_integer(True)
    assert not is_half_integer(0.25)
    assert is_half_integer(-2)


@pytest.mark.halfint
def test_half_integer_range():
    """测试闭区间生成，含空区间。"""
    assert half_integer_range(half, sp.Rational(5, 2)) == [half, sp.Rational(3, 2), sp.Rational(5, 2)]
    assert half_integer_range(2, 1) == []


@pytest.mark.halfint
def test_half_integer_range_non_integer_span():
    """测试从整数走到半奇数的区间被拒绝。"""
    with pytest.raises(DomainError, match="跨度不是整数"):
        half_integer_range(0, half)


@pytest.mark.halfint
@pytest.mark.quick
def test_triangle_and_projection_ranges():
    """测试三角条件与投影区间。"""
    assert triangle_range(1, half) == [half, sp.Rational(3, 2)]
    assert triangle_range(2, 2) == [0, 1, 2, 3, 4]
    assert projection_range(1) == [-1, 0, 1]
    assert projection_range(half) == [-half, half]
    with pytest.raises(DomainError):
        projection_range(-1)


@pytest.mark.halfint
@pytest.mark.quick
def test_parity_group():
    """测试宇称乘法、幂与取反。"""
    assert ODD * ODD == EVEN
    assert EVEN * ODD == ODD
    assert ODD ** 3 == ODD
    assert ODD ** 0 == EVEN
    assert -EVEN == ODD
    assert int(ODD) == -1


@pytest.mark.halfint
def test_parity_order_and_str():
    """测试 odd < even 与字符串形式。"""
    assert ODD < EVEN
    assert sorted([EVEN, ODD]) == [ODD, EVEN]
    assert str(Parity.from_int(1)) == "even"
    assert str(ODD) == "odd"
    assert ODD.isodd() and EVEN.iseven()


@pytest.mark.halfint
def test_parity_invalid():
    """测试非法宇称值。"""
    with pytest.raises(DomainError, match="宇称只能为"):
        Parity(0)


@pytest.mark.halfint
def test_parity_of_objects():
    """测试轨道、组态与宇称本身的宇称。"""
    assert parity_of(Orbital(2, 1)) == ODD
    assert parity_of(parse_configuration("1s2 2p2")) == EVEN
    assert parity_of(parse_configuration("1s 2p")) == ODD
    assert parity_of(EVEN) == EVEN
