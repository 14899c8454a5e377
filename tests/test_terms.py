"""谱项类型、Xu 多重度与 jj 耦合单元测试

测试 terms/term.py、terms/xu.py、terms/jj.py 与 terms/allowed.py。
"""

import numpy as np
import pytest
import sympy as sp

from atomlevels.errors import DomainError, InvalidOccupancyError
from atomlevels.orbitals import Orbital, RelativisticOrbital, SpinOrbital
from atomlevels.parity import EVEN, ODD
from atomlevels.terms import (
    IntermediateTerm,
    Term,
    TermMultiplicityCache,
    count_microstates,
    count_terms,
    jj_terms,
    multiplicity_table,
    terms,
    xu_terms,
    xu_x,
)

half = sp.Rational(1, 2)


@pytest.mark.terms
@pytest.mark.quick
def test_term_basic_properties():
    """测试 3Po 的多重度、J 值与统计权重。"""
    t = Term(1, 1, -1)
    assert str(t) == "3Po"
    assert t.multiplicity == 3
    assert t.J_values() == [0, 1, 2]
    assert t.weight == 9
    assert t.parity == ODD


@pytest.mark.terms
@pytest.mark.parametrize("L,S,p", [(-1, 0, 1), (0, -half, 1), (sp.Rational(1, 3), 0, 1), (0, 0, 0)])
def test_term_invalid(L, S, p):
    """测试非法 L、S 或宇称。"""
    with pytest.raises(DomainError):
        Term(L, S, p)


@pytest.mark.terms
def test_term_ordering():
    """测试谱项先按 S、再按 L、最后按宇称排序。"""
    ts = [Term(1, 1, 1), Term(2, 0, 1), Term(0, 0, 1), Term(0, 0, -1)]
    assert [str(t) for t in sorted(ts)] == ["1So", "1S", "1D", "3P"]


@pytest.mark.terms
def test_intermediate_term_ordering_and_str():
    """测试中间谱项按 (辛弱数, 谱项) 排序。"""
    a = IntermediateTerm(Term(2, half, 1), 1)
    b = IntermediateTerm(Term(1, half, 1), 3)
    c = IntermediateTerm(Term(2, half, 1), 3)
    assert sorted([c, b, a]) == [a, b, c]
    assert str(a) == "2D_1"
    assert str(IntermediateTerm(sp.Rational(3, 2), 1)) == "3/2_1"
    with pytest.raises(DomainError):
        IntermediateTerm(Term(0, 0, 1), -1)


@pytest.mark.terms
@pytest.mark.quick
def test_xu_x_reference_values():
    """测试 Xu 多重度：s^1 的 2S 为 1，f^3 的 2F 为 2。"""
    assert xu_x(1, 0, 1, 0) == 1
    assert xu_x(3, 3, 1, 3) == 2


@pytest.mark.terms
@pytest.mark.quick
def test_terms_d3():
    """测试 d^3 的全部谱项（含重复的 2D）。"""
    ts = terms(Orbital(3, 2), 3)
    assert [str(t) for t in ts] == ["2P", "2D", "2D", "2F", "2G", "2H", "4P", "4F"]


@pytest.mark.terms
@pytest.mark.quick
def test_terms_p2_and_p3():
    """测试 p^2 与 p^3 的谱项及宇称。"""
    assert [str(t) for t in terms(Orbital(2, 1), 2)] == ["1S", "1D", "3P"]
    assert [str(t) for t in terms(Orbital(2, 1), 3)] == ["2Po", "2Do", "4So"]


@pytest.mark.terms
def test_count_terms_f_shell():
    """测试 f^3 与 f^5 中 2Do 出现的次数。"""
    t = Term(2, half, -1)
    assert count_terms(Orbital(4, 3), 3, t) == 2
    assert count_terms(Orbital(4, 3), 5, t) == 5


@pytest.mark.terms
def test_count_terms_parity_mismatch():
    """测试宇称不符的谱项计数为 0。"""
    assert count_terms(Orbital(2, 1), 1, Term(1, half, 1)) == 0
    assert count_terms(Orbital(2, 1), 1, Term(1, half, -1)) == 1


@pytest.mark.terms
@pytest.mark.quick
def test_empty_and_full_shells():
    """测试空壳层与满壳层只有 1S。"""
    assert terms(Orbital(2, 1), 0) == [Term(0, 0, EVEN)]
    assert terms(Orbital(2, 1), 6) == [Term(0, 0, EVEN)]
    assert terms(Orbital(4, 3), 14) == [Term(0, 0, EVEN)]
    assert count_terms(Orbital(2, 1), 6, Term(0, 0, EVEN)) == 1
    assert count_terms(Orbital(2, 1), 6, Term(1, 1, EVEN)) == 0


@pytest.mark.terms
@pytest.mark.parametrize(
    "orbital,occupancy",
    [
        (Orbital(2, 1), 2),
        (Orbital(3, 2), 3),
        (Orbital(3, 2), 5),
        (Orbital(4, 3), 4),
        (RelativisticOrbital(3, -3), 3),
        (RelativisticOrbital(4, -4), 4),
    ],
)
def test_weights_sum_to_microstates(orbital, occupancy):
    """测试谱项统计权重之和等于微观态数 C(g, N)。"""
    ts = terms(orbital, occupancy)
    if isinstance(orbital, RelativisticOrbital):
        total = sum(int(2 * J + 1) for J in ts)
    else:
        total = sum(t.weight for t in ts)
    assert total == count_microstates(orbital, occupancy)


@pytest.mark.terms
def test_count_microstates_values():
    """测试微观态数。"""
    assert count_microstates(Orbital(3, 2), 3) == 120
    assert count_microstates(Orbital(2, 1), 0) == 1


@pytest.mark.terms
def test_terms_invalid_input():
    """测试占据数越界与不支持的轨道类型。"""
    with pytest.raises(InvalidOccupancyError):
        terms(Orbital(2, 1), 7)
    with pytest.raises(InvalidOccupancyError):
        xu_terms(1, -1)
    so = Orbital(1, 0).spin_orbitals()[0]
    assert isinstance(so, SpinOrbital)
    with pytest.raises(TypeError):
        terms(so, 1)


@pytest.mark.terms
def test_multiplicity_table_p2():
    """测试 p^2 的多重度表 X[2S, L]。"""
    expected = np.array([[1, 0, 1], [0, 0, 0], [0, 1, 0]])
    np.testing.assert_array_equal(multiplicity_table(1, 2), expected)
    full = multiplicity_table(1, 6)
    assert full[0, 0] == 1
    assert full.sum() == 1


@pytest.mark.terms
def test_cache_reuse():
    """测试缓存可在多次计算间复用与清空。"""
    cache = TermMultiplicityCache()
    first = terms(Orbital(4, 3), 3, cache)
    n = len(cache)
    assert n > 0
    assert terms(Orbital(4, 3), 3, cache) == first
    assert len(cache) == n
    cache.clear()
    assert len(cache) == 0


@pytest.mark.terms
@pytest.mark.quick
def test_jj_terms():
    """测试 jj 耦合 J 值。"""
    assert jj_terms(RelativisticOrbital(2, -2), 2) == [0, 2]
    assert jj_terms(RelativisticOrbital(2, -2), 1) == [sp.Rational(3, 2)]
    assert jj_terms(RelativisticOrbital(3, -3), 3) == [sp.Rational(3, 2), sp.Rational(5, 2), sp.Rational(9, 2)]
    assert jj_terms(RelativisticOrbital(2, -2), 4) == [0]
    assert terms(RelativisticOrbital(2, 1), 2) == [0]


@pytest.mark.terms
def test_count_terms_relativistic():
    """测试 jj 支壳层的 J 计数。"""
    orb = RelativisticOrbital(3, -3)
    assert count_terms(orb, 3, sp.Rational(5, 2)) == 1
    assert count_terms(orb, 3, sp.Rational(7, 2)) == 0
