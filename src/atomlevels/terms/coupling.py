r"""角动量耦合

不同支壳层的电子是非等价的，彼此之间没有 Pauli 限制，谱项按矢量模型相乘：

.. math::

    L \in \{|L_1-L_2|, \ldots, L_1+L_2\}, \qquad
    S \in \{|S_1-S_2|, \ldots, S_1+S_2\}, \qquad
    \pi = \pi_1 \pi_2

jj 耦合时只耦合总角动量 J（三角条件），宇称平凡。

输出顺序
========

- :func:`couple_terms`：L 为外层循环、S 为内层循环，均升序。
- :func:`couple_term_lists`：对 ``ts1 × ts2`` 按行优先逐对耦合后直接拼接，不去重
  （同一物理谱项可由不同母项对得到，应计为不同的态）。
- :func:`final_terms`：从左到右折叠 :func:`couple_term_lists`。
- :func:`intermediate_couplings`：深度优先，第 k 层按第 k 个支壳层的中间谱项顺序、
  再按 :func:`couple_terms` 的顺序展开。
  每条链是一个 :class:`IntermediateCoupling`，同时记录所选中间谱项与逐步耦合的谱项。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Sequence, Tuple

import sympy as sp

from ..configurations import Configuration
from ..halfinteger import half_integer, triangle_range
from ..parity import EVEN
from .allowed import terms
from .term import IntermediateTerm, Term

__all__ = [
    "couple_terms",
    "couple_term_lists",
    "final_terms",
    "IntermediateCoupling",
    "intermediate_couplings",
    "configuration_terms",
]


def couple_terms(t1, t2) -> list:
    """耦合两个非等价电子群的谱项。

    Parameters
    ----------
    t1, t2 : Term | half-integer
        两个 LS 谱项，或两个 jj 总角动量。

    Returns
    -------
    list[Term] | list[sympy.Rational]

    Examples
    --------
    >>> [str(t) for t in couple_terms(Term(1, 1, -1), Term(0, sympy.Rational(1, 2), 1))]
    ['2Po', '4Po']
    """
    if isinstance(t1, Term) and isinstance(t2, Term):
        parity = t1.parity * t2.parity
        return [
            Term(L, S, parity)
            for L in triangle_range(t1.L, t2.L)
            for S in triangle_range(t1.S, t2.S)
        ]
    if isinstance(t1, Term) or isinstance(t2, Term):
        raise TypeError(f"不能将 LS 谱项与 jj 角动量耦合: {t1!s}, {t2!s}")
    return triangle_range(t1, t2)


def couple_term_lists(ts1: Sequence, ts2: Sequence) -> list:
    """逐对耦合两个谱项列表，结果直接拼接。"""
    return [t for a in ts1 for b in ts2 for t in couple_terms(a, b)]


def final_terms(term_lists: Sequence[Sequence]) -> list:
    """把各支壳层的谱项列表从左到右耦合为组态的最终谱项。

    空列表视为只有 :math:`^1S` 的空组态。
    """
    term_lists = [list(ts) for ts in term_lists]
    if not term_lists:
        return [Term(0, 0, EVEN)]
    return reduce(couple_term_lists, term_lists[1:], term_lists[0])


def _coupling_identity(its: list[list]):
    for level in its:
        for it in level:
            term = it.term if isinstance(it, IntermediateTerm) else it
            return Term(0, 0, EVEN) if isinstance(term, Term) else sp.Integer(0)
    return Term(0, 0, EVEN)


@dataclass(frozen=True)
class IntermediateCoupling:
    r"""一条耦合链：各支壳层选用的中间谱项与逐步耦合得到的谱项。

    Attributes
    ----------
    its : tuple
        :math:`(it_1, \ldots, it_n)`，第 k 个支壳层的中间谱项（含辛弱数）。
    terms : tuple
        :math:`(t_0, t_1, \ldots, t_n)`，:math:`t_k \in` ``couple_terms(t_{k-1}, it_k)``。

    Examples
    --------
    >>> its = [[IntermediateTerm(Term(0, sympy.Rational(1, 2), 1), 1)]]
    >>> str(intermediate_couplings(its)[0])
    '1S 2S_1(2S)'
    """

    its: Tuple
    terms: Tuple

    def __post_init__(self):
        if len(self.terms) != len(self.its) + 1:
            raise ValueError(
                f"耦合链的谱项数必须比中间谱项数多 1，当前 {len(self.terms)} 与 {len(self.its)}"
            )

    @property
    def final_term(self):
        return self.terms[-1]

    def __str__(self) -> str:
        steps = " ".join(f"{it}({t})" for it, t in zip(self.its, self.terms[1:]))
        return f"{self.terms[0]} {steps}".rstrip()


def _couplings(its: list[list], k: int, t) -> list[tuple[tuple, tuple]]:
    if k == len(its):
        return [((), (t,))]
    paths = []
    for it in its[k]:
        term = it.term if isinstance(it, IntermediateTerm) else it
        for t_next in couple_terms(t, term):
            for tail_its, tail_terms in _couplings(its, k + 1, t_next):
                paths.append(((it,) + tail_its, (t,) + tail_terms))
    return paths


def intermediate_couplings(its: Sequence[Sequence], t0=None) -> list[IntermediateCoupling]:
    r"""枚举全部耦合链（耦合树）。

    每条链记录 :math:`(t_0, t_1, \ldots, t_n)`，其中 :math:`t_k` 取自
    ``couple_terms(t_{k-1}, it_k)``，:math:`it_k` 为第 k 个支壳层的某个中间谱项；
    链上同时保存所选的 :math:`it_k`，因此只差辛弱数的两条链也互不相同。
    结构上不同的中间态即使最终谱项相同也各自成链，这正是构造组态态函数（CSF）所需的完全展开。

    Parameters
    ----------
    its : sequence of sequence of IntermediateTerm
        每个支壳层的中间谱项列表（也接受裸 :class:`Term` 或 J）。
    t0 : Term | half-integer, optional
        起始耦合态；缺省为 :math:`^1S`（LS）或 0（jj）。

    Returns
    -------
    list[IntermediateCoupling]
        深度优先顺序的耦合链列表。

    Examples
    --------
    >>> its = [[IntermediateTerm(Term(0, sympy.Rational(1, 2), 1), 1)],
    ...        [IntermediateTerm(Term(1, sympy.Rational(1, 2), -1), 1)]]
    >>> [str(c) for c in intermediate_couplings(its)]
    ['1S 2S_1(2S) 2Po_1(1Po)', '1S 2S_1(2S) 2Po_1(3Po)']
    """
    its = [list(level) for level in its]
    if t0 is None:
        t0 = _coupling_identity(its)
    elif not isinstance(t0, Term):
        t0 = half_integer(t0)
    return [IntermediateCoupling(path_its, path_terms) for path_its, path_terms in _couplings(its, 0, t0)]


def configuration_terms(configuration: Configuration) -> list:
    """组态允许的全部不同最终谱项（升序）。"""
    lists = [terms(orb, w) for orb, w, _ in configuration]
    return sorted(set(final_terms(lists)))
