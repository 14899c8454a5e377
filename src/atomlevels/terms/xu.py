r"""等价电子 LS 谱项多重度：Xu 算法

对 :math:`\ell^N` 等价电子组态，直接计算每个 :math:`(L, S)` 谱项出现的次数，
而无需显式枚举 Slater 行列式。

算法
====

令 :math:`M_S = 2S`（加倍以保持整数），:math:`M_L = L`。谱项多重度为

.. math::

    X(N,\ell,S,L) = A(N,\ell,\ell,2S,L) - A(N,\ell,\ell,2S,L+1)
                  + A(N,\ell,\ell,2S+2,L+1) - A(N,\ell,\ell,2S+2,L)

其中 :math:`A(N,\ell,\ell_b,M_S,M_L)` 为总投影 :math:`(M_S, M_L)` 的微观态数，递归定义：

1. **基本情形** :math:`N = 1, M_S = 1`：若 :math:`-\ell \le M_L \le \ell_b` 则为 1。
2. **偶分裂** :math:`2-N \le M_S \le N-2`：自旋向上 :math:`b=(N+M_S)/2` 个、向下
   :math:`a=(N-M_S)/2` 个电子相互独立，

   .. math::

       A = \sum_{M_L^a} A(a,\ell,\ell,a,M_L^a)\,A(b,\ell,\ell,b,M_L-M_L^a),
       \qquad |M_L| \le f(a-1) + f(b-1)

3. **满自旋** :math:`M_S = N, |M_L| \le f(N-1)`：逐个加入电子，记录已用的最大 :math:`m_\ell`
   （即 :math:`\ell_b`）以避免重复计数排列，

   .. math::

       A = \sum_{m_\ell} A(N-1,\ell,m_\ell-1,N-1,M_L-m_\ell),
       \quad \left\lceil \frac{M_L}{N} + \frac{N-1}{2} \right\rceil
       \le m_\ell \le \min(\ell_b, M_L + f(N-2))

4. 其余情形为 0。

辅助函数 :math:`f(n) = \sum_{m=0}^{n} (\ell - m)`（:math:`n \ge 0`，否则为 0）是
:math:`n+1` 个不同 :math:`m_\ell` 之和的上限。

空壳层与满壳层只有 :math:`^1S`，不调用一般公式。

缓存
====

:math:`A` 的递归高度重叠，:class:`TermMultiplicityCache` 以
``(N, l, l_b, M_S, M_L)`` 为键显式缓存。模块不持有全局缓存：各函数的 ``cache``
参数缺省时新建一个，调用方也可以传入同一缓存在多次计算间复用。

References
----------
.. [Xu2006] Xu, R. & Dai, Z. (2006)
   "Alternative mathematical technique to determine LS spectral terms"
   J. Phys. B: At. Mol. Opt. Phys. 39, 3221
"""

from __future__ import annotations

import numpy as np
import sympy as sp

from ..errors import InvalidOccupancyError
from ..parity import Parity
from .term import Term

__all__ = [
    "TermMultiplicityCache",
    "xu_a",
    "xu_x",
    "xu_terms",
    "multiplicity_table",
]


def _f(n: int, l: int) -> int:
    """n+1 个不同 m_ℓ（从 ℓ 往下取）之和，n < 0 时为 0。"""
    if n < 0:
        return 0
    return (n + 1) * l - n * (n + 1) // 2


def _xu_a(N: int, l: int, l_b: int, M_S: int, M_L: int, cache: "TermMultiplicityCache") -> int:
    if N == 1 and M_S == 1:
        return 1 if -l <= M_L <= l_b else 0

    if N > 1 and abs(M_S) < N and (N - M_S) % 2 == 0:
        a = (N - M_S) // 2
        b = (N + M_S) // 2
        fa = _f(a - 1, l)
        fb = _f(b - 1, l)
        if abs(M_L) > fa + fb:
            return 0
        return sum(
            cache.get(a, l, l, a, M_La) * cache.get(b, l, l, b, M_L - M_La)
            for M_La in range(-fa, fa + 1)
        )

    if N > 1 and M_S == N:
        if abs(M_L) > _f(N - 1, l):
            return 0
        # 最大 m_ℓ 的下限：其余 N-1 个电子之和不超过 (N-1)m - N(N-1)/2
        num = 2 * M_L + N * (N - 1)
        lo = -(-num // (2 * N))
        hi = min(l_b, M_L + _f(N - 2, l))
        return sum(cache.get(N - 1, l, m - 1, N - 1, M_L - m) for m in range(lo, hi + 1))

    return 0


class TermMultiplicityCache:
    """Xu 递归函数 A 的缓存。

    Attributes
    ----------
    cache : dict
        键为 ``(N, l, l_b, M_S, M_L)``，值为微观态数。

    Notes
    -----
    每个键只在首次请求时计算并写入一次；填充完成后可被多次计算只读共享。
    多线程同时填充同一实例需要调用方自行加锁。

    Examples
    --------
    >>> cache = TermMultiplicityCache()
    >>> xu_x(3, 2, 1, 2, cache=cache)  # d^3 的 2D 出现两次
    2
    >>> len(cache) > 0
    True
    """

    def __init__(self):
        """初始化空缓存。"""
        self.cache: dict[tuple[int, int, int, int, int], int] = {}

    def get(self, N: int, l: int, l_b: int, M_S: int, M_L: int) -> int:
        """返回 :math:`A(N,\\ell,\\ell_b,M_S,M_L)`（未命中时计算并缓存）。"""
        key = (N, l, l_b, M_S, M_L)
        if key in self.cache:
            return self.cache[key]
        value = _xu_a(N, l, l_b, M_S, M_L, self)
        self.cache[key] = value
        return value

    def clear(self):
        """清空缓存。"""
        self.cache.clear()

    def __len__(self):
        """返回缓存项数量。"""
        return len(self.cache)


def xu_a(N: int, l: int, l_b: int, M_S: int, M_L: int, cache: TermMultiplicityCache | None = None) -> int:
    r"""总投影为 :math:`(M_S/2, M_L)` 的 :math:`\ell^N` 微观态数（:math:`m_\ell \le \ell_b` 约束见模块说明）。"""
    if cache is None:
        cache = TermMultiplicityCache()
    return cache.get(N, l, l_b, M_S, M_L)


def xu_x(N: int, l: int, two_S: int, L: int, cache: TermMultiplicityCache | None = None) -> int:
    r"""谱项 :math:`^{2S+1}L` 在 :math:`\ell^N` 中出现的次数。

    Parameters
    ----------
    N : int
        电子数。
    l : int
        轨道角动量 :math:`\ell`。
    two_S : int
        加倍的总自旋 :math:`2S`（即 :math:`M_S`）。
    L : int
        总轨道角动量。
    cache : TermMultiplicityCache, optional
        复用的缓存；缺省时新建。

    Returns
    -------
    int
        多重度（非负整数）。

    Examples
    --------
    >>> xu_x(1, 0, 1, 0)  # s^1 的 2S
    1
    >>> xu_x(3, 3, 1, 3)  # f^3 的 2F
    2
    """
    if cache is None:
        cache = TermMultiplicityCache()
    A = cache.get
    return (
        A(N, l, l, two_S, L)
        - A(N, l, l, two_S, L + 1)
        + A(N, l, l, two_S + 2, L + 1)
        - A(N, l, l, two_S + 2, L)
    )


def _check_occupancy(l: int, N: int) -> int:
    if l < 0:
        raise ValueError(f"角动量量子数必须非负: l={l}")
    g = 2 * (2 * l + 1)
    if not 0 <= N <= g:
        raise InvalidOccupancyError(f"ℓ={l} 支壳层的占据数必须在 [0, {g}] 内，当前值: {N}")
    return g


def xu_terms(
    l: int,
    N: int,
    parity: Parity | None = None,
    cache: TermMultiplicityCache | None = None,
) -> list[Term]:
    r""":math:`\ell^N` 的全部 LS 谱项（含重复）。

    Parameters
    ----------
    l : int
        轨道角动量。
    N : int
        电子数，:math:`0 \le N \le 2(2\ell+1)`。
    parity : Parity, optional
        谱项宇称，缺省为 :math:`(-1)^{\ell N}`。
    cache : TermMultiplicityCache, optional
        复用的缓存。

    Returns
    -------
    list[Term]
        按 S 升序、同 S 按 L 升序排列；多重度为 X 的谱项重复 X 次。

    Examples
    --------
    >>> [str(t) for t in xu_terms(1, 2)]
    ['1S', '1D', '3P']
    """
    g = _check_occupancy(l, N)
    if parity is None:
        parity = Parity((-1) ** (l * N))
    if N == 0 or N == g:
        return [Term(0, 0, parity)]
    if cache is None:
        cache = TermMultiplicityCache()

    terms: list[Term] = []
    for two_S in range(N % 2, N + 1, 2):
        S = sp.Rational(two_S, 2)
        for L in range(0, N * l + 1):
            x = xu_x(N, l, two_S, L, cache)
            terms.extend([Term(L, S, parity)] * x)
    return terms


def multiplicity_table(l: int, N: int, cache: TermMultiplicityCache | None = None) -> np.ndarray:
    r"""谱项多重度表 ``X[2S, L]``。

    Returns
    -------
    numpy.ndarray
        形状 ``(N+1, N*l+1)`` 的整数数组；空壳层与满壳层只有 ``X[0, 0] = 1``。

    Examples
    --------
    >>> multiplicity_table(1, 2)
    array([[1, 0, 1],
           [0, 0, 0],
           [0, 1, 0]])
    """
    g = _check_occupancy(l, N)
    table = np.zeros((N + 1, N * l + 1), dtype=int)
    if N == 0 or N == g:
        table[0, 0] = 1
        return table
    if cache is None:
        cache = TermMultiplicityCache()
    for two_S in range(N % 2, N + 1, 2):
        for L in range(0, N * l + 1):
            table[two_S, L] = xu_x(N, l, two_S, L, cache)
    return table
