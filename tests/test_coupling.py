"""中间谱项与角动量耦合单元测试

测试 terms/intermediate.py 与 terms/coupling.py。
"""

import pytest
import sympy as sp

from atomlevels.errors import InvalidOccupancyError
from atomlevels.orbitals import Orbital, RelativisticOrbital
from atomlevels.parity import EVEN
from atomlevels.parsing import parse_configuration, parse_term
from atomlevels.terms import (
    IntermediateCoupling,
    IntermediateTerm,
    Term,
    configuration_terms,
    couple_term_lists,
    couple_terms,
    final_terms,
    intermediate_couplings,
    intermediate_terms,
    terms,
)

half = sp.Rational(1, 2)


def _strs(items):
    return [str(x) for x in items]


@pytest.mark.coupling
@pytest.mark.quick
def test_intermediate_terms_d3():
    """测试 d^3 的辛弱数：一个 2D 来自 d^1，其余在 ν=3 首次出现。"""
    its = intermediate_terms(Orbital(3, 2), 3)
    assert _strs(its) == ["2D_1", "2P_3", "2D_3", "2F_3", "2G_3", "2H_3", "4P_3", "4F_3"]
    assert len(its) == len(terms(Orbital(3, 2), 3))


@pytest.mark.coupling
def test_intermediate_terms_p2():
    """测试 p^2：1S 的辛弱数为 0。"""
    assert _strs(intermediate_terms(Orbital(2, 1), 2)) == ["1S_0", "1D_2", "3P_2"]


@pytest.mark.coupling
def test_intermediate_terms_seniority_bounds():
    """测试辛弱数与占据数同奇偶且不超过 min(N, g-N)。"""
    orb = Orbital(4, 3)
    for n in range(orb.degeneracy + 1):
        for it in intermediate_terms(orb, n):
            assert it.seniority % 2 == n % 2
            assert it.seniority <= min(n, orb.degeneracy - n)


@pytest.mark.coupling
def test_intermediate_terms_configuration_and_jj():
    """测试组态输入与 jj 支壳层。"""
    its = intermediate_terms(parse_configuration("1s 2p"))
    assert [_strs(level) for level in its] == [["2S_1"], ["2Po_1"]]
    jj = intermediate_terms(RelativisticOrbital(2, -2), 2)
    assert jj == [IntermediateTerm(0, 0), IntermediateTerm(2, 2)]
    with pytest.raises(InvalidOccupancyError):
        intermediate_terms(Orbital(2, 1))


@pytest.mark.coupling
@pytest.mark.quick
def test_couple_terms_ls():
    """测试 3Po ⊗ 2S → 2Po, 4Po。"""
    result = couple_terms(Term(1, 1, -1), Term(0, half, 1))
    assert result == [Term(1, half, -1), Term(1, sp.Rational(3, 2), -1)]
    assert _strs(result) == ["2Po", "4Po"]


@pytest.mark.coupling
def test_couple_terms_order():
    """测试 L 为外层、S 为内层的输出顺序，宇称相乘。"""
    result = couple_terms(parse_term("2Po"), parse_term("2Po"))
    assert _strs(result) == ["1S", "3S", "1P", "3P", "1D", "3D"]


@pytest.mark.coupling
def test_couple_terms_jj_and_mixed():
    """测试 jj 耦合与混合耦合的拒绝。"""
    assert couple_terms(sp.Rational(3, 2), half) == [1, 2]
    with pytest.raises(TypeError):
        couple_terms(Term(0, 0, 1), half)


@pytest.mark.coupling
def test_couple_term_lists_keeps_duplicates():
    """测试列表耦合直接拼接、不去重。"""
    ts1 = [parse_term("2S"), parse_term("2S")]
    ts2 = [parse_term("2Po")]
    result = couple_term_lists(ts1, ts2)
    assert _strs(result) == ["1Po", "3Po", "1Po", "3Po"]


@pytest.mark.coupling
@pytest.mark.quick
def test_final_terms():
    """测试空组态与 1s 2p 的最终谱项。"""
    assert final_terms([]) == [Term(0, 0, EVEN)]
    assert _strs(final_terms([terms(Orbital(1, 0), 1), terms(Orbital(2, 1), 1)])) == ["1Po", "3Po"]


@pytest.mark.coupling
def test_configuration_terms():
    """测试组态的不同最终谱项，闭壳层只贡献 1S。"""
    assert _strs(configuration_terms(parse_configuration("1s2 2s2 2p2"))) == ["1S", "1D", "3P"]
    assert _strs(configuration_terms(parse_configuration("2p 3p"))) == ["1S", "1P", "1D", "3S", "3P", "3D"]


@pytest.mark.coupling
@pytest.mark.quick
def test_intermediate_couplings_ls():
    """测试 2s 2p 的耦合链。"""
    its = intermediate_terms(parse_configuration("2s 2p"))
    paths = intermediate_couplings(its)
    assert [" ".join(_strs(p.terms)) for p in paths] == ["1S 2S 1Po", "1S 2S 3Po"]
    assert [str(p) for p in paths] == ["1S 2S_1(2S) 2Po_1(1Po)", "1S 2S_1(2S) 2Po_1(3Po)"]


@pytest.mark.coupling
def test_intermediate_couplings_start_term():
    """测试给定起始耦合态。"""
    its = [[IntermediateTerm(Term(0, half, 1), 1)]]
    paths = intermediate_couplings(its, t0=Term(1, 1, -1))
    assert [" ".join(_strs(p.terms)) for p in paths] == ["3Po 2Po", "3Po 4Po"]
    assert all(p.its == (its[0][0],) for p in paths)


@pytest.mark.coupling
def test_intermediate_couplings_jj_and_empty():
    """测试 jj 耦合链与空输入。"""
    its = [[IntermediateTerm(sp.Rational(3, 2), 1)], [IntermediateTerm(half, 1)]]
    paths = intermediate_couplings(its)
    assert [p.terms for p in paths] == [(0, sp.Rational(3, 2), 1), (0, sp.Rational(3, 2), 2)]
    empty = intermediate_couplings([])
    assert [p.terms for p in empty] == [(Term(0, 0, EVEN),)]
    assert empty[0].its == ()
    assert empty[0].final_term == Term(0, 0, EVEN)


@pytest.mark.coupling
def test_intermediate_couplings_final_terms_consistent():
    """测试耦合链的末项与 final_terms 一一对应（含重复）。"""
    config = parse_configuration("2p2 3d")
    its = intermediate_terms(config)
    ends = sorted(p.final_term for p in intermediate_couplings(its))
    assert ends == sorted(final_terms([terms(o, w) for o, w, _ in config]))


@pytest.mark.coupling
def test_intermediate_couplings_keep_seniority():
    """测试 3d3 4s 中辛弱数 1 与 3 的 2D 母项给出不同的耦合链。"""
    its = intermediate_terms(parse_configuration("3d3 4s"))
    paths = intermediate_couplings(its)
    assert len(paths) == 16
    assert len(set(paths)) == 16
    # 只看耦合谱项时两个 2D 母项无法区分
    assert len({p.terms for p in paths}) == 14

    d_term = Term(2, half, EVEN)
    via_2d = [p for p in paths if p.its[0].term == d_term]
    assert sorted(p.its[0].seniority for p in via_2d) == [1, 1, 3, 3]
    by_seniority = {}
    for p in via_2d:
        by_seniority.setdefault(p.its[0].seniority, []).append(p)
    assert [p.terms for p in by_seniority[1]] == [p.terms for p in by_seniority[3]]
    assert [str(p) for p in by_seniority[1]] == ["1S 2D_1(2D) 2S_1(1D)", "1S 2D_1(2D) 2S_1(3D)"]
    assert [str(p) for p in by_seniority[3]] == ["1S 2D_3(2D) 2S_1(1D)", "1S 2D_3(2D) 2S_1(3D)"]


@pytest.mark.coupling
def test_intermediate_coupling_length_check():
    """测试耦合链的谱项数与中间谱项数不匹配时报错。"""
    it = IntermediateTerm(Term(0, half, EVEN), 1)
    with pytest.raises(ValueError):
        IntermediateCoupling((it,), (Term(0, 0, EVEN),))
