r"""中间谱项与辛弱数

同一 :math:`(L, S)` 谱项可能在 :math:`\ell^N` 中出现多次，需要用辛弱数 :math:`\nu`
区分：:math:`\nu` 是该谱项首次出现的占据数。由于 :math:`2S` 与 :math:`N` 同奇偶，
谱项只可能在 :math:`\nu \equiv N \pmod 2` 的占据数处出现，因此

.. math::

    \nu = N \bmod 2,\; N \bmod 2 + 2,\; \ldots,\; \min(N, g - N)

在每个 :math:`\nu` 处新增的个数为 :math:`X(\nu) - \sum_{\nu' < \nu}(\text{已分配})`。
"""

from __future__ import annotations

from ..configurations import Configuration
from ..errors import InvalidOccupancyError
from .allowed import count_terms, terms
from .term import IntermediateTerm
from .xu import TermMultiplicityCache

__all__ = ["intermediate_terms"]


def _subshell_intermediate_terms(orbital, occupancy: int, cache: TermMultiplicityCache) -> list[IntermediateTerm]:
    g = orbital.degeneracy
    its: list[IntermediateTerm] = []
    for t in dict.fromkeys(terms(orbital, occupancy, cache)):
        assigned = 0
        for nu in range(occupancy % 2, min(occupancy, g - occupancy) + 1, 2):
            n_new = count_terms(orbital, nu, t, cache) - assigned
            if n_new > 0:
                its.extend([IntermediateTerm(t, nu)] * n_new)
                assigned += n_new
    return sorted(its)


def intermediate_terms(obj, occupancy: int | None = None, cache: TermMultiplicityCache | None = None):
    """带辛弱数的中间谱项。

    Parameters
    ----------
    obj : Orbital | RelativisticOrbital | Configuration
        单个支壳层（需给出 ``occupancy``），或整个组态。
    occupancy : int, optional
        支壳层电子数。
    cache : TermMultiplicityCache, optional
        复用的 Xu 缓存。

    Returns
    -------
    list[IntermediateTerm] | list[list[IntermediateTerm]]
        单个支壳层返回按 (辛弱数, 谱项) 排序的列表，重复谱项各占一项；
        组态返回每个支壳层一个列表，顺序与组态一致。

    Examples
    --------
    >>> [str(it) for it in intermediate_terms(Orbital(3, 2), 3)]
    ['2D_1', '2P_3', '2D_3', '2F_3', '2G_3', '2H_3', '4P_3', '4F_3']
    """
    if cache is None:
        cache = TermMultiplicityCache()
    if isinstance(obj, Configuration):
        return [_subshell_intermediate_terms(orb, w, cache) for orb, w, _ in obj]
    if occupancy is None:
        raise InvalidOccupancyError(f"必须给出 {obj} 的占据数")
    return _subshell_intermediate_terms(obj, occupancy, cache)
