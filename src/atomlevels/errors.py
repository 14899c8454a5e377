"""异常类型

所有错误均在违规处同步抛出，表示输入或调用方式错误（而非瞬时故障），不做重试。
它们都派生自 :class:`ValueError`，因此既可按具体类型捕获，也可统一按 ``ValueError`` 处理。
"""

from __future__ import annotations

__all__ = [
    "InvalidOrbitalError",
    "DuplicateOrbitalError",
    "InvalidOccupancyError",
    "StateConflictError",
    "DomainError",
]


class InvalidOrbitalError(ValueError):
    """非法的 (n, ℓ) / κ 组合，或投影量子数超出轨道允许范围。"""


class DuplicateOrbitalError(ValueError):
    """组态中同一轨道出现多次。"""


class InvalidOccupancyError(ValueError):
    """占据数超出 :math:`[0, g]`（g 为简并度），或闭壳层未填满。"""


class StateConflictError(ValueError):
    """组态相加时同一轨道的状态（open/closed/inactive）不一致。"""


class DomainError(ValueError):
    """半整数区间跨度不是整数，或谱项的 L、S、宇称不合法。"""
