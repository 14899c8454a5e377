r"""jj 耦合下等价电子的总角动量

:math:`N` 个电子占据同一 :math:`j` 支壳层时，:math:`m_j` 互不相同。
设 :math:`n(M)` 为总投影为 :math:`M` 的微观态数，则总角动量 :math:`J` 出现
:math:`n(J) - n(J+1)` 次。

:math:`n(M)` 由子集和计数表求得：把 :math:`m_j + j \in \{0, \ldots, 2j\}` 视为整数，
逐个加入候选值，用 numpy 数组累加 "已选 k 个、和为 s" 的方案数。
"""

from __future__ import annotations

import numpy as np
import sympy as sp

from ..errors import InvalidOccupancyError
from ..orbitals import RelativisticOrbital

__all__ = ["jj_terms"]


def _subset_sum_counts(two_j: int, N: int) -> np.ndarray:
    """从 {0, ..., 2j} 中取 N 个不同整数，返回各和值的方案数（下标为和）。"""
    max_sum = N * two_j
    dp = np.zeros((N + 1, max_sum + 1), dtype=np.int64)
    dp[0, 0] = 1
    for v in range(two_j + 1):
        # k 倒序，保证每个值至多使用一次
        for k in range(min(N, v + 1), 0, -1):
            dp[k, v:] += dp[k - 1, : max_sum + 1 - v]
    return dp[N]


def jj_terms(orbital: RelativisticOrbital, occupancy: int) -> list[sp.Rational]:
    r""":math:`j^N` 等价电子允许的总角动量 J（升序，含重复）。

    Parameters
    ----------
    orbital : RelativisticOrbital
        相对论支壳层。
    occupancy : int
        电子数，:math:`0 \le N \le 2j+1`。

    Returns
    -------
    list[sympy.Rational]
        空壳层与满壳层为 ``[0]``。

    Examples
    --------
    >>> jj_terms(RelativisticOrbital(2, -2), 2)  # 2p_{3/2}^2
    [0, 2]
    """
    two_j = int(2 * orbital.j)
    g = two_j + 1
    if not 0 <= occupancy <= g:
        raise InvalidOccupancyError(f"{orbital} 的占据数必须在 [0, {g}] 内，当前值: {occupancy}")
    if occupancy == 0 or occupancy == g:
        return [sp.Integer(0)]

    counts = _subset_sum_counts(two_j, occupancy)
    shift = occupancy * two_j  # 2 * N * j
    n_max = len(counts) - 1
    Js: list[sp.Rational] = []
    for two_J in range(occupancy % 2, 2 * n_max - shift + 1, 2):
        s = (two_J + shift) // 2
        n_J = int(counts[s])
        n_J1 = int(counts[s + 1]) if s + 1 <= n_max else 0
        Js.extend([sp.Rational(two_J, 2)] * (n_J - n_J1))
    return Js
