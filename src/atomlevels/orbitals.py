r"""原子轨道模型

本模块提供三类轨道标签，它们共享同一组能力接口（排序、简并度、宇称、角动量访问器）：

- :class:`Orbital`：非相对论轨道 :math:`n\ell`，简并度 :math:`2(2\ell+1)`
- :class:`RelativisticOrbital`：相对论轨道 :math:`n\kappa`，简并度 :math:`2j+1`
- :class:`SpinOrbital`：投影量子数全部给定的单个自旋轨道

严格地说，前两类标记的是一个支壳层（同一角对称与径向行为的一组轨道）。

κ 量子数
========

对每个物理允许的 :math:`(\ell, j)` 对，:math:`j = \ell \pm 1/2`，有唯一的非零整数

.. math::

    \kappa = \mp (j + 1/2), \qquad
    j = |\kappa| - 1/2, \qquad
    \ell = \begin{cases} \kappa & \kappa > 0 \\ -\kappa - 1 & \kappa < 0 \end{cases}

主量子数
========

主量子数可以是正整数，也可以是单个字母（连续态标签，如 ``k``）。
排序时连续态排在所有整数之后，彼此之间按字典序。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import total_ordering
from itertools import product
from typing import Tuple, Union

import sympy as sp

from .errors import InvalidOrbitalError
from .halfinteger import half_integer, projection_range
from .notation import l_to_letter
from .parity import Parity

__all__ = [
    "MainQuantumNumber",
    "AbstractOrbital",
    "Orbital",
    "RelativisticOrbital",
    "SpinOrbital",
    "kappa_to_l",
    "kappa_to_j",
    "lj_to_kappa",
]

MainQuantumNumber = Union[int, str]

SPIN_HALF = sp.Rational(1, 2)


def _check_n(n) -> None:
    if isinstance(n, bool):
        raise InvalidOrbitalError(f"主量子数不能是布尔值: {n!r}")
    if isinstance(n, int):
        if n < 1:
            raise InvalidOrbitalError(f"主量子数必须为正整数，当前值: n={n}")
    elif isinstance(n, str):
        if len(n) != 1 or not n.isalpha():
            raise InvalidOrbitalError(f"连续态标签必须为单个字母，当前值: n={n!r}")
    else:
        raise InvalidOrbitalError(f"主量子数必须为整数或字母，当前类型: {type(n).__name__}")


def _n_key(n) -> tuple:
    # 整数在前，连续态标签在后
    return (0, n, "") if isinstance(n, int) else (1, 0, n)


def kappa_to_l(kappa: int) -> int:
    r"""由 κ 计算 :math:`\ell`。"""
    if kappa == 0:
        raise InvalidOrbitalError("κ 不能为 0")
    return kappa if kappa > 0 else -kappa - 1


def kappa_to_j(kappa: int) -> sp.Rational:
    r"""由 κ 计算 :math:`j = |\kappa| - 1/2`。"""
    if kappa == 0:
        raise InvalidOrbitalError("κ 不能为 0")
    return sp.Rational(2 * abs(kappa) - 1, 2)


def lj_to_kappa(l: int, j) -> int:
    r"""由合法的 :math:`(\ell, j)` 对计算 κ。

    Raises
    ------
    InvalidOrbitalError
        若 :math:`j \ne \ell \pm 1/2` 或 :math:`\ell < 0`。

    Examples
    --------
    >>> lj_to_kappa(1, sympy.Rational(1, 2))
    1
    >>> lj_to_kappa(1, sympy.Rational(3, 2))
    -2
    """
    j = half_integer(j)
    if l < 0:
        raise InvalidOrbitalError(f"角动量量子数必须非负: l={l}")
    if j == l + SPIN_HALF:
        return -int(j + SPIN_HALF)
    if j == l - SPIN_HALF and j > 0:
        return int(j + SPIN_HALF)
    raise InvalidOrbitalError(f"j={j} 与 l={l} 不满足 j = l ± 1/2")


class AbstractOrbital(ABC):
    """轨道能力接口：组态（:class:`~atomlevels.configurations.Configuration`）只依赖这些方法。"""

    @property
    @abstractmethod
    def degeneracy(self) -> int:
        """支壳层可容纳的最大电子数。"""

    @property
    @abstractmethod
    def parity(self) -> Parity:
        """单电子宇称 :math:`(-1)^\\ell`。"""

    @property
    @abstractmethod
    def isbound(self) -> bool:
        """主量子数为整数时为束缚态。"""

    @property
    @abstractmethod
    def sort_key(self) -> tuple:
        """组态内排序所用的键。"""

    @abstractmethod
    def angular_momenta(self) -> tuple:
        """可自由取投影的角动量量子数。"""

    @abstractmethod
    def angular_momentum_ranges(self) -> tuple:
        """每个自由角动量的投影闭区间。"""

    def spin_orbitals(self) -> list["SpinOrbital"]:
        """列出该支壳层的全部自旋轨道（投影的笛卡尔积）。

        Examples
        --------
        >>> [str(so) for so in Orbital(1, 0).spin_orbitals()]
        ['1s(0,β)', '1s(0,α)']
        """
        return [SpinOrbital(self, m) for m in product(*self.angular_momentum_ranges())]

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key >= other.sort_key


@dataclass(frozen=True, eq=True, order=False)
class Orbital(AbstractOrbital):
    r"""非相对论原子轨道 :math:`n\ell`。

    Parameters
    ----------
    n : int | str
        主量子数（正整数）或连续态标签（单个字母）。
    l : int
        轨道角动量；整数 n 要求 :math:`0 \le \ell < n`。

    Examples
    --------
    >>> Orbital(2, 1)
    Orbital(n=2, l=1)
    >>> str(Orbital("k", 2))
    'kd'
    >>> Orbital(2, 1).degeneracy
    6
    """

    n: MainQuantumNumber
    l: int

    def __post_init__(self):
        _check_n(self.n)
        if isinstance(self.l, bool) or not isinstance(self.l, int):
            raise InvalidOrbitalError(f"角动量量子数必须为整数: l={self.l!r}")
        if self.l < 0:
            raise InvalidOrbitalError(f"角动量量子数必须非负: l={self.l}")
        if isinstance(self.n, int) and self.l >= self.n:
            raise InvalidOrbitalError(f"要求 0 <= l < n，当前 n={self.n}, l={self.l}")

    @property
    def degeneracy(self) -> int:
        return 2 * (2 * self.l + 1)

    @property
    def parity(self) -> Parity:
        return Parity((-1) ** self.l)

    @property
    def symmetry(self) -> int:
        """角对称标签，即 ℓ。"""
        return self.l

    @property
    def isbound(self) -> bool:
        return isinstance(self.n, int)

    @property
    def sort_key(self) -> tuple:
        return (_n_key(self.n), self.l)

    def ml_range(self) -> list[int]:
        r""":math:`m_\ell = -\ell, \ldots, \ell`。"""
        return list(range(-self.l, self.l + 1))

    def angular_momenta(self) -> tuple:
        return (self.l, SPIN_HALF)

    def angular_momentum_ranges(self) -> tuple:
        return (tuple(projection_range(self.l)), tuple(projection_range(SPIN_HALF)))

    def __str__(self) -> str:
        return f"{self.n}{l_to_letter(self.l)}"


@dataclass(frozen=True, eq=True, order=False)
class RelativisticOrbital(AbstractOrbital):
    r"""相对论原子轨道 :math:`n\kappa`（总角动量 j 确定）。

    打印记号：:math:`j = \ell + 1/2` 记作 ``2p``，:math:`j = \ell - 1/2` 记作 ``2p-``。

    Examples
    --------
    >>> RelativisticOrbital(2, 1)
    RelativisticOrbital(n=2, kappa=1)
    >>> str(RelativisticOrbital(2, 1)), str(RelativisticOrbital(2, -2))
    ('2p-', '2p')
    >>> RelativisticOrbital.from_lj(2, 1, sympy.Rational(1, 2)).degeneracy
    2
    """

    n: MainQuantumNumber
    kappa: int

    def __post_init__(self):
        _check_n(self.n)
        if isinstance(self.kappa, bool) or not isinstance(self.kappa, int):
            raise InvalidOrbitalError(f"κ 必须为整数: κ={self.kappa!r}")
        if self.kappa == 0:
            raise InvalidOrbitalError("κ 不能为 0")
        if isinstance(self.n, int) and kappa_to_l(self.kappa) >= self.n:
            raise InvalidOrbitalError(
                f"要求 0 <= l < n，当前 n={self.n}, κ={self.kappa} (l={kappa_to_l(self.kappa)})"
            )

    @classmethod
    def from_lj(cls, n: MainQuantumNumber, l: int, j) -> "RelativisticOrbital":
        """由 :math:`(n, \\ell, j)` 构造。"""
        return cls(n, lj_to_kappa(l, j))

    @property
    def l(self) -> int:
        return kappa_to_l(self.kappa)

    @property
    def j(self) -> sp.Rational:
        return kappa_to_j(self.kappa)

    @property
    def degeneracy(self) -> int:
        return int(2 * self.j + 1)

    @property
    def parity(self) -> Parity:
        return Parity((-1) ** self.l)

    @property
    def symmetry(self) -> int:
        """角对称标签，即 κ。"""
        return self.kappa

    @property
    def isbound(self) -> bool:
        return isinstance(self.n, int)

    @property
    def sort_key(self) -> tuple:
        return (_n_key(self.n), self.l, self.j)

    def angular_momenta(self) -> tuple:
        return (self.j,)

    def angular_momentum_ranges(self) -> tuple:
        return (tuple(projection_range(self.j)),)

    def __str__(self) -> str:
        suffix = "-" if self.kappa > 0 else ""
        return f"{self.n}{l_to_letter(self.l)}{suffix}"


def _spin_label(ms) -> str:
    return "α" if ms > 0 else "β"


@dataclass(frozen=True, eq=True, order=False)
class SpinOrbital(AbstractOrbital):
    r"""投影量子数全部给定的自旋轨道。

    Parameters
    ----------
    orbital : Orbital | RelativisticOrbital
        所属支壳层。
    m : tuple
        投影量子数，与 ``orbital.angular_momenta()`` 一一对应：
        非相对论为 :math:`(m_\ell, m_s)`，相对论为 :math:`(m_j,)`。
    """

    orbital: AbstractOrbital
    m: Tuple

    def __post_init__(self):
        if not isinstance(self.orbital, (Orbital, RelativisticOrbital)):
            raise InvalidOrbitalError(f"自旋轨道必须基于 Orbital 或 RelativisticOrbital: {self.orbital!r}")
        ranges = self.orbital.angular_momentum_ranges()
        if len(self.m) != len(ranges):
            raise InvalidOrbitalError(
                f"{self.orbital} 需要 {len(ranges)} 个投影量子数，实际给出 {len(self.m)} 个"
            )
        try:
            m = tuple(half_integer(mi) for mi in self.m)
        except ValueError as exc:
            raise InvalidOrbitalError(f"投影量子数必须为半整数: {self.m!r}") from exc
        for mi, allowed in zip(m, ranges):
            if mi not in allowed:
                raise InvalidOrbitalError(f"投影 {mi} 超出 {self.orbital} 的允许范围 {allowed[0]}..{allowed[-1]}")
        object.__setattr__(self, "m", m)

    @property
    def degeneracy(self) -> int:
        return 1

    @property
    def parity(self) -> Parity:
        return self.orbital.parity

    @property
    def isbound(self) -> bool:
        return self.orbital.isbound

    @property
    def sort_key(self) -> tuple:
        return (self.orbital.sort_key, self.m)

    def angular_momenta(self) -> tuple:
        return self.orbital.angular_momenta()

    def angular_momentum_ranges(self) -> tuple:
        # 投影已全部固定
        return tuple((mi,) for mi in self.m)

    def spin_orbitals(self) -> list["SpinOrbital"]:
        return [self]

    def __str__(self) -> str:
        if isinstance(self.orbital, Orbital):
            ml, ms = self.m
            return f"{self.orbital}({ml},{_spin_label(ms)})"
        return f"{self.orbital}({self.m[0]})"
