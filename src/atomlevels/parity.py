"""宇称代数

宇称取值 {+1 (even), -1 (odd)}，在乘法下构成二元群，并有全序 odd < even。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from .errors import DomainError

__all__ = ["Parity", "EVEN", "ODD", "parity_of"]


@total_ordering
@dataclass(frozen=True)
class Parity:
    """系统的宇称。

    Attributes
    ----------
    value : int
        +1 表示偶宇称，-1 表示奇宇称。

    Examples
    --------
    >>> Parity(-1) * Parity(-1)
    Parity(value=1)
    >>> str(Parity.from_int(-1))
    'odd'
    """

    value: int

    def __post_init__(self):
        if self.value not in (1, -1):
            raise DomainError(f"宇称只能为 +1 或 -1，当前值: {self.value!r}")

    @classmethod
    def from_int(cls, value: int) -> "Parity":
        """由整数 ±1 构造。"""
        return cls(int(value))

    def __mul__(self, other: "Parity") -> "Parity":
        if not isinstance(other, Parity):
            return NotImplemented
        return Parity(self.value * other.value)

    def __pow__(self, n: int) -> "Parity":
        # 只有奇数次幂保留奇宇称
        return Parity(self.value ** (int(n) % 2))

    def __neg__(self) -> "Parity":
        return Parity(-self.value)

    def __lt__(self, other: "Parity") -> bool:
        if not isinstance(other, Parity):
            return NotImplemented
        return self.value < other.value

    def __int__(self) -> int:
        return self.value

    def iseven(self) -> bool:
        return self.value == 1

    def isodd(self) -> bool:
        return self.value == -1

    def __str__(self) -> str:
        return "even" if self.value == 1 else "odd"


EVEN = Parity(1)
ODD = Parity(-1)


def parity_of(obj) -> Parity:
    """返回任意带宇称对象（轨道、组态、谱项）的宇称。"""
    if isinstance(obj, Parity):
        return obj
    p = getattr(obj, "parity")
    return p() if callable(p) else p
