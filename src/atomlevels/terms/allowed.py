"""单个支壳层允许的谱项

按轨道类型分派：

- :class:`~atomlevels.orbitals.Orbital` → LS 谱项（Xu 算法，见 :mod:`.xu`）
- :class:`~atomlevels.orbitals.RelativisticOrbital` → jj 总角动量 J（见 :mod:`.jj`）
"""

from __future__ import annotations

from scipy.special import comb

from ..errors import InvalidOccupancyError
from ..orbitals import Orbital, RelativisticOrbital
from .jj import jj_terms
from .xu import TermMultiplicityCache, xu_terms, xu_x

__all__ = ["terms", "count_terms", "count_microstates"]


def _check(orbital, occupancy: int) -> None:
    if not isinstance(orbital, (Orbital, RelativisticOrbital)):
        raise TypeError(f"只支持 Orbital 与 RelativisticOrbital，当前类型: {type(orbital).__name__}")
    if not 0 <= occupancy <= orbital.degeneracy:
        raise InvalidOccupancyError(
            f"{orbital} 的占据数必须在 [0, {orbital.degeneracy}] 内，当前值: {occupancy}"
        )


def terms(orbital, occupancy: int, cache: TermMultiplicityCache | None = None) -> list:
    """支壳层 ``orbital^occupancy`` 的全部谱项（含重复）。

    Returns
    -------
    list[Term] | list[sympy.Rational]
        非相对论轨道返回按 (S, L) 排序的 :class:`Term`；相对论轨道返回升序的 J。

    Examples
    --------
    >>> [str(t) for t in terms(Orbital(3, 2), 3)]
    ['2P', '2D', '2D', '2F', '2G', '2H', '4P', '4F']
    """
    _check(orbital, occupancy)
    if isinstance(orbital, RelativisticOrbital):
        return jj_terms(orbital, occupancy)
    return xu_terms(orbital.l, occupancy, orbital.parity ** occupancy, cache)


def count_terms(orbital, occupancy: int, term, cache: TermMultiplicityCache | None = None) -> int:
    """谱项 ``term`` 在 ``orbital^occupancy`` 中出现的次数。

    Examples
    --------
    >>> count_terms(Orbital(4, 3), 3, Term(2, sympy.Rational(1, 2), -1))
    2
    """
    _check(orbital, occupancy)
    if isinstance(orbital, RelativisticOrbital):
        return jj_terms(orbital, occupancy).count(term)

    if term.parity != orbital.parity ** occupancy:
        return 0
    if occupancy == 0 or occupancy == orbital.degeneracy:
        return 1 if (term.L == 0 and term.S == 0) else 0
    if not term.L.is_integer or (2 * term.S) % 2 != occupancy % 2:
        return 0
    return xu_x(occupancy, orbital.l, int(2 * term.S), int(term.L), cache)


def count_microstates(orbital, occupancy: int) -> int:
    r"""支壳层的微观态（Slater 行列式）总数 :math:`\binom{g}{N}`。

    各谱项的 :math:`(2L+1)(2S+1)`（或 :math:`2J+1`）之和必须等于该值。
    """
    _check(orbital, occupancy)
    return int(comb(orbital.degeneracy, occupancy, exact=True))
