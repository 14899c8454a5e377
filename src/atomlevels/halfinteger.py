r"""半整数算术模块

角动量耦合中的量子数（:math:`s`、:math:`j`、:math:`L`、:math:`S` 及其投影）只取整数或半奇数。
本模块以 ``sympy.Rational`` 精确表示这些量，并提供耦合所需的区间生成：

- :func:`half_integer`：校验并规范化为 ``sympy.Rational``（分母为 1 或 2）
- :func:`half_integer_range`：闭区间 :math:`a, a+1, \ldots, b`
- :func:`triangle_range`：两角动量耦合的三角条件 :math:`|j_1-j_2| \le J \le j_1+j_2`
- :func:`projection_range`：投影 :math:`m = -j, \ldots, j`

所有运算均为精确有理运算，不存在舍入。
"""

from __future__ import annotations

from fractions import Fraction

import sympy as sp

from .errors import DomainError

__all__ = [
    "HalfInteger",
    "half_integer",
    "is_half_integer",
    "half_integer_range",
    "triangle_range",
    "projection_range",
]

HalfInteger = sp.Rational


def half_integer(value) -> sp.Rational:
    """将输入转换为半整数（``sympy.Rational``）。

    Parameters
    ----------
    value : int | sympy.Rational | fractions.Fraction | float | str
        待转换的量，例如 ``1``、``sympy.Rational(3, 2)``、``0.5`` 或 ``"3/2"``。

    Returns
    -------
    sympy.Rational
        分母为 1 或 2 的有理数。

    Raises
    ------
    DomainError
        若输入不是整数或半奇数。

    Examples
    --------
    >>> half_integer("3/2")
    3/2
    >>> half_integer(2)
    2
    """
    if isinstance(value, sp.Rational):
        r = value
    elif isinstance(value, Fraction):
        r = sp.Rational(value.numerator, value.denominator)
    elif isinstance(value, bool):
        raise DomainError(f"布尔值不是半整数: {value!r}")
    elif isinstance(value, (int, float, str)):
        try:
            r = sp.Rational(value)
        except (TypeError, ValueError, sp.SympifyError) as exc:
            raise DomainError(f"无法解析为半整数: {value!r}") from exc
    else:
        raise DomainError(f"不支持的半整数类型: {type(value).__name__}")
    if r.q not in (1, 2):
        raise DomainError(f"{value!r} 不是整数或半奇数")
    return r


def is_half_integer(value) -> bool:
    """判断 ``value`` 是否可以精确表示为半整数。"""
    try:
        half_integer(value)
    except DomainError:
        return False
    return True


def half_integer_range(a, b) -> list[sp.Rational]:
    r"""生成闭区间 :math:`a, a+1, \ldots, b`。

    Parameters
    ----------
    a, b
        区间端点（整数或半奇数）。

    Returns
    -------
    list[sympy.Rational]
        步长为 1 的序列；若 :math:`a > b` 则为空列表。

    Raises
    ------
    DomainError
        若 :math:`b - a` 不是整数（例如从整数走到半奇数，违反耦合不变量）。
    """
    a = half_integer(a)
    b = half_integer(b)
    span = b - a
    if not span.is_integer:
        raise DomainError(f"区间 [{a}, {b}] 的跨度不是整数")
    return [a + k for k in range(int(span) + 1)]


def triangle_range(j1, j2) -> list[sp.Rational]:
    r"""两个角动量耦合的所有总角动量 :math:`|j_1-j_2|, \ldots, j_1+j_2`。"""
    j1 = half_integer(j1)
    j2 = half_integer(j2)
    return half_integer_range(abs(j1 - j2), j1 + j2)


def projection_range(j) -> list[sp.Rational]:
    r"""角动量 :math:`j` 的投影 :math:`m = -j, -j+1, \ldots, j`。"""
    j = half_integer(j)
    if j < 0:
        raise DomainError(f"角动量必须非负: j={j}")
    return half_integer_range(-j, j)
