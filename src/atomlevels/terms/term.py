r"""谱项代数

- :class:`Term`：LS 耦合谱项 :math:`^{2S+1}L^{\pi}`
- :class:`IntermediateTerm`：谱项加辛弱数（seniority），用于区分重复出现的谱项

谱项的有序关系：先比较 S，再比较 L，最后比较宇称（odd < even），
与光谱学惯用的列表顺序一致。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Union

import sympy as sp

from ..errors import DomainError
from ..halfinteger import half_integer, triangle_range
from ..notation import L_to_letter
from ..parity import Parity

__all__ = ["Term", "IntermediateTerm"]


@total_ordering
@dataclass(frozen=True)
class Term:
    r"""LS 耦合谱项。

    Parameters
    ----------
    L : int | sympy.Rational
        总轨道角动量（非负半整数）。
    S : int | sympy.Rational
        总自旋（非负半整数）。
    parity : Parity | int
        宇称；整数 ±1 会被转换为 :class:`Parity`。

    Examples
    --------
    >>> t = Term(1, 1, -1)
    >>> str(t), t.multiplicity
    ('3Po', 3)
    >>> t.J_values()
    [0, 1, 2]
    """

    L: sp.Rational
    S: sp.Rational
    parity: Parity

    def __post_init__(self):
        L = half_integer(self.L)
        S = half_integer(self.S)
        if L < 0:
            raise DomainError(f"谱项 L 必须非负，当前值: L={L}")
        if S < 0:
            raise DomainError(f"谱项 S 必须非负，当前值: S={S}")
        p = self.parity
        if not isinstance(p, Parity):
            if isinstance(p, bool) or not isinstance(p, (int, sp.Integer)):
                raise DomainError(f"谱项宇称必须为 Parity 或 ±1，当前值: {p!r}")
            p = Parity(int(p))
        object.__setattr__(self, "L", L)
        object.__setattr__(self, "S", S)
        object.__setattr__(self, "parity", p)

    @property
    def multiplicity(self) -> int:
        """自旋多重度 2S+1。"""
        return int(2 * self.S + 1)

    def J_values(self) -> list[sp.Rational]:
        r"""允许的总角动量 :math:`|L-S| \le J \le L+S`。"""
        return triangle_range(self.L, self.S)

    @property
    def weight(self) -> int:
        """谱项包含的微观态数 :math:`(2L+1)(2S+1)`。"""
        return int((2 * self.L + 1) * (2 * self.S + 1))

    def _key(self) -> tuple:
        return (self.S, self.L, self.parity)

    def __lt__(self, other: "Term") -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        suffix = "o" if self.parity.isodd() else ""
        return f"{self.multiplicity}{L_to_letter(self.L)}{suffix}"


def _term_key(term) -> tuple:
    # jj 耦合下 term 为半整数 J
    if isinstance(term, Term):
        return term._key()
    return (term,)


@total_ordering
@dataclass(frozen=True)
class IntermediateTerm:
    """带辛弱数的中间谱项。

    Attributes
    ----------
    term : Term | sympy.Rational
        LS 谱项，或 jj 耦合下的总角动量 J。
    seniority : int
        该谱项在同一 ℓ 支壳层中首次出现的占据数 ν。
    """

    term: Union[Term, sp.Rational]
    seniority: int

    def __post_init__(self):
        if not isinstance(self.term, Term):
            object.__setattr__(self, "term", half_integer(self.term))
        if self.seniority < 0:
            raise DomainError(f"辛弱数必须非负，当前值: {self.seniority}")

    def __lt__(self, other: "IntermediateTerm") -> bool:
        if not isinstance(other, IntermediateTerm):
            return NotImplemented
        return (self.seniority, _term_key(self.term)) < (other.seniority, _term_key(other.term))

    def __str__(self) -> str:
        return f"{self.term}_{self.seniority}"
