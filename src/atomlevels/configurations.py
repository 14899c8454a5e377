r"""电子组态模型

组态是 (轨道, 占据数, 状态) 三元组的有序列表：

- 轨道两两不同，占据数 :math:`0 \le w \le g`（g 为简并度）
- 状态为 ``"open"``、``"closed"``（核心，必须填满）或 ``"inactive"``（不参与激发）
- ``sorted=True`` 时轨道按轨道自身的有序关系排列，否则保持插入顺序

除 :meth:`Configuration.close_inplace`、:meth:`Configuration.fill_inplace`、
:meth:`Configuration.delete` 这三个显式的原地修改入口外，所有操作都返回新组态。
同一实例在原地修改期间只归调用方独占，跨线程共享需自行同步。
"""

from __future__ import annotations

import builtins
from typing import Callable, Iterable, Iterator, Literal, Sequence, Tuple, Union

from .errors import DuplicateOrbitalError, InvalidOccupancyError, StateConflictError
from .orbitals import AbstractOrbital, Orbital, RelativisticOrbital
from .parity import EVEN, Parity

__all__ = [
    "State",
    "STATES",
    "Configuration",
    "juxtapose",
    "noble_gas",
    "noble_core_name",
    "relativistic_configurations",
]

State = Literal["open", "closed", "inactive"]
STATES = ("open", "closed", "inactive")

Triple = Tuple[AbstractOrbital, int, str]


def _occupied(configuration: "Configuration") -> dict:
    return {o: w for o, w in zip(configuration.orbitals, configuration.occupancy) if w > 0}


class Configuration:
    """电子组态。

    Parameters
    ----------
    orbitals : sequence of AbstractOrbital
        支壳层轨道，两两不同。
    occupancy : sequence of int
        与 ``orbitals`` 等长的占据数。
    states : sequence of str, optional
        各轨道状态；可以比 ``orbitals`` 短，缺少的部分视为 ``"open"``。
    sorted : bool
        是否按轨道顺序规范排序（影响 :meth:`replace` 与 :meth:`__add__` 的插入位置）。

    Raises
    ------
    DuplicateOrbitalError
        轨道重复。
    InvalidOccupancyError
        占据数越界，或 ``"closed"`` 轨道未填满。

    Notes
    -----
    组态可哈希，哈希值由 ``(轨道, 占据数, 状态)`` 三元组决定。:meth:`close_inplace`、
    :meth:`fill_inplace` 与 :meth:`delete` 会原地修改组态并改变哈希值，
    因此作为 dict 键或 set 元素期间不能原地修改；需要修改时先 :meth:`copy`。

    Examples
    --------
    >>> c = Configuration([Orbital(1, 0), Orbital(2, 1)], [2, 3], ["closed"])
    >>> str(c), c.num_electrons()
    ('1s2c 2p3', 5)
    """

    def __init__(
        self,
        orbitals: Sequence[AbstractOrbital] = (),
        occupancy: Sequence[int] = (),
        states: Sequence[str] | None = None,
        sorted: bool = False,
    ):
        orbitals = list(orbitals)
        occupancy = [int(w) for w in occupancy]
        states = list(states) if states is not None else []
        if len(orbitals) != len(occupancy):
            raise ValueError(f"orbitals ({len(orbitals)}) 与 occupancy ({len(occupancy)}) 长度不一致")
        if len(states) > len(orbitals):
            raise ValueError(f"states ({len(states)}) 比 orbitals ({len(orbitals)}) 更长")
        states = states + ["open"] * (len(orbitals) - len(states))

        seen = set()
        for orb, w, s in zip(orbitals, occupancy, states):
            if not isinstance(orb, AbstractOrbital):
                raise TypeError(f"不是轨道: {orb!r}")
            if orb in seen:
                raise DuplicateOrbitalError(f"轨道 {orb} 在组态中重复出现")
            seen.add(orb)
            if s not in STATES:
                raise ValueError(f"未知的轨道状态 {s!r}，可选: {STATES}")
            if not 0 <= w <= orb.degeneracy:
                raise InvalidOccupancyError(f"{orb} 的占据数必须在 [0, {orb.degeneracy}] 内，当前值: {w}")
            if s == "closed" and w != orb.degeneracy:
                raise InvalidOccupancyError(f"闭壳层 {orb} 必须填满（{orb.degeneracy} 个电子），当前值: {w}")

        if sorted and orbitals:
            order = builtins.sorted(range(len(orbitals)), key=lambda i: orbitals[i])
            orbitals = [orbitals[i] for i in order]
            occupancy = [occupancy[i] for i in order]
            states = [states[i] for i in order]

        self.orbitals: list[AbstractOrbital] = orbitals
        self.occupancy: list[int] = occupancy
        self.states: list[str] = states
        self.sorted: bool = bool(sorted)

    @classmethod
    def from_triples(cls, triples: Iterable[Triple], sorted: bool = False) -> "Configuration":
        """由 (轨道, 占据数, 状态) 三元组构造。"""
        triples = list(triples)
        return cls(
            [t[0] for t in triples],
            [t[1] for t in triples],
            [t[2] for t in triples],
            sorted=sorted,
        )

    def _new(self, triples: Iterable[Triple], sorted: bool | None = None) -> "Configuration":
        return Configuration.from_triples(triples, sorted=self.sorted if sorted is None else sorted)

    def copy(self) -> "Configuration":
        return self._new(self)

    # ------------------------------------------------------------------
    # 容器协议

    def __len__(self) -> int:
        return len(self.orbitals)

    def __iter__(self) -> Iterator[Triple]:
        return iter(zip(self.orbitals, self.occupancy, self.states))

    def __contains__(self, orbital) -> bool:
        return orbital in self.orbitals

    def __getitem__(self, index: Union[int, slice]):
        """整数下标返回三元组，切片返回子组态。"""
        if isinstance(index, slice):
            return self._new(list(self)[index])
        return (self.orbitals[index], self.occupancy[index], self.states[index])

    def index(self, orbital) -> int:
        try:
            return self.orbitals.index(orbital)
        except ValueError:
            raise ValueError(f"{orbital} 不在组态 {self} 中") from None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return (
            self.orbitals == other.orbitals
            and self.occupancy == other.occupancy
            and self.states == other.states
        )

    def __hash__(self) -> int:
        """按 ``(轨道, 占据数, 状态)`` 序列求哈希；作为 dict 键或 set 元素期间不可原地修改。"""
        return hash(tuple(self))

    def issimilar(self, other: "Configuration") -> bool:
        """忽略顺序与状态的比较：相同的轨道及占据数。

        占据数为 0 的支壳层（如 :meth:`remove` 留下的 ``2s0``）不参与比较。
        """
        return _occupied(self) == _occupied(other)

    # ------------------------------------------------------------------
    # 计数与宇称

    def num_electrons(self, orbital=None) -> int:
        """电子总数，或给定轨道上的电子数（不在组态中时为 0）。"""
        if orbital is None:
            return sum(self.occupancy)
        if orbital not in self:
            return 0
        return self.occupancy[self.index(orbital)]

    def parity(self) -> Parity:
        r"""组态宇称 :math:`\prod (-1)^{\ell w}`。"""
        p = EVEN
        for orb, w, _ in self:
            p = p * orb.parity ** w
        return p

    # ------------------------------------------------------------------
    # 划分

    def filter(self, predicate: Callable[[AbstractOrbital, int, str], bool]) -> "Configuration":
        """保留 ``predicate(orbital, occupancy, state)`` 为真的支壳层。"""
        return self._new(t for t in self if predicate(*t))

    def core(self) -> "Configuration":
        """标记为 closed 的部分。"""
        return self.filter(lambda o, w, s: s == "closed")

    def peel(self) -> "Configuration":
        """非 closed 的部分。"""
        return self.filter(lambda o, w, s: s != "closed")

    def active(self) -> "Configuration":
        return self.filter(lambda o, w, s: s == "open")

    def inactive(self) -> "Configuration":
        return self.filter(lambda o, w, s: s == "inactive")

    def bound(self) -> "Configuration":
        return self.filter(lambda o, w, s: o.isbound)

    def continuum(self) -> "Configuration":
        return self.filter(lambda o, w, s: not o.isbound)

    # ------------------------------------------------------------------
    # 纯操作与原地修改

    def close(self) -> "Configuration":
        """返回所有轨道标记为 closed 的新组态（轨道必须已填满）。"""
        c = self.copy()
        c.close_inplace()
        return c

    def close_inplace(self) -> None:
        """把所有轨道原地标记为 closed。"""
        for orb, w in zip(self.orbitals, self.occupancy):
            if w != orb.degeneracy:
                raise InvalidOccupancyError(f"只能关闭已填满的轨道，{orb} 上有 {w}/{orb.degeneracy} 个电子")
        self.states = ["closed"] * len(self.orbitals)

    def fill(self) -> "Configuration":
        """返回所有轨道填满的新组态。"""
        c = self.copy()
        c.fill_inplace()
        return c

    def fill_inplace(self) -> None:
        """把所有轨道的占据数原地设为简并度。"""
        self.occupancy = [orb.degeneracy for orb in self.orbitals]

    def delete(self, orbital) -> None:
        """原地删除整个支壳层。"""
        i = self.index(orbital)
        del self.orbitals[i]
        del self.occupancy[i]
        del self.states[i]

    # ------------------------------------------------------------------
    # 算术

    def __add__(self, other: "Configuration") -> "Configuration":
        """合并两个组态；共有轨道的占据数相加，但状态必须一致。"""
        if not isinstance(other, Configuration):
            return NotImplemented
        triples = list(self)
        for orb, w, s in other:
            if orb in self:
                i = self.index(orb)
                if self.states[i] != s:
                    raise StateConflictError(f"{orb} 的状态不一致: {self.states[i]} vs {s}")
                triples[i] = (orb, self.occupancy[i] + w, s)
            else:
                triples.append((orb, w, s))
        return self._new(triples, sorted=self.sorted and other.sorted)

    def remove(self, orbital, n: int = 1) -> "Configuration":
        """移除 ``orbital`` 上的 ``n`` 个电子；原为 closed/inactive 的轨道变为 open。"""
        i = self.index(orbital)
        if n < 0 or self.occupancy[i] < n:
            raise InvalidOccupancyError(f"不能从 {orbital}（{self.occupancy[i]} 个电子）移除 {n} 个电子")
        triples = list(self)
        triples[i] = (orbital, self.occupancy[i] - n, "open")
        return self._new(triples)

    def __sub__(self, orbital) -> "Configuration":
        if not isinstance(orbital, AbstractOrbital):
            return NotImplemented
        return self.remove(orbital)

    def replace(self, src, dst, n: int | None = None, append: bool = False) -> "Configuration":
        """把 ``src`` 上的电子替换到 ``dst``。

        Parameters
        ----------
        src, dst : AbstractOrbital
            源轨道（必须在组态中）与目标轨道。
        n : int, optional
            转移的电子数，缺省为 ``src`` 上的全部电子。
        append : bool
            非排序组态中 ``dst`` 为新轨道时：``True`` 追加到末尾，``False`` 放在 ``src`` 的位置
            （``src`` 仍有电子时紧随其后）。排序组态总是按轨道顺序插入。

        Notes
        -----
        ``src`` 被掏空后从组态中删除；``src`` 与 ``dst`` 都标记为 open。
        """
        i = self.index(src)
        w_src = self.occupancy[i]
        if n is None:
            n = w_src
        if n < 0 or n > w_src:
            raise InvalidOccupancyError(f"不能从 {src}（{w_src} 个电子）转移 {n} 个电子")
        if src == dst:
            return self.copy()

        triples = list(self)
        triples[i] = (src, w_src - n, "open")
        if dst in self:
            j = self.index(dst)
            triples[j] = (dst, self.occupancy[j] + n, "open")
        elif self.sorted or append:
            triples.append((dst, n, "open"))
        else:
            triples.insert(i + 1, (dst, n, "open"))
        triples = [t for t in triples if not (t[0] == src and t[1] == 0)]
        return self._new(triples)

    def __str__(self) -> str:
        from .parsing import format_configuration

        return format_configuration(self)

    def __repr__(self) -> str:
        kind = "sorted" if self.sorted else "unsorted"
        return f"Configuration({str(self)!r}, {kind})"


def juxtapose(a, b) -> list[Configuration]:
    """⊗：两组组态的全部并置（逐对相加）。

    Parameters
    ----------
    a, b : Configuration | sequence of Configuration

    Examples
    --------
    >>> [str(c) for c in juxtapose(parse_configuration("1s"), [parse_configuration("2s"), parse_configuration("2p")])]
    ['1s 2s', '1s 2p']
    """
    a = [a] if isinstance(a, Configuration) else list(a)
    b = [b] if isinstance(b, Configuration) else list(b)
    return [x + y for x in a for y in b]


# 稀有气体：(n, l, 占据数)，按填充顺序
_NOBLE_SHELLS = {
    "He": [(1, 0, 2)],
    "Ne": [(2, 0, 2), (2, 1, 6)],
    "Ar": [(3, 0, 2), (3, 1, 6)],
    "Kr": [(3, 2, 10), (4, 0, 2), (4, 1, 6)],
    "Xe": [(4, 2, 10), (5, 0, 2), (5, 1, 6)],
    "Rn": [(4, 3, 14), (5, 2, 10), (6, 0, 2), (6, 1, 6)],
}
NOBLE_GASES = tuple(_NOBLE_SHELLS)


def _split_relativistic(n, l: int) -> list[RelativisticOrbital]:
    # ℓ- 在前（j 较小）
    if l == 0:
        return [RelativisticOrbital(n, -1)]
    return [RelativisticOrbital(n, l), RelativisticOrbital(n, -(l + 1))]


def noble_gas(name: str, relativistic: bool = False) -> Configuration:
    """稀有气体的闭壳层核心组态，例如 ``noble_gas("Ne")`` 为 ``1s2c 2s2c 2p6c``。"""
    if name not in _NOBLE_SHELLS:
        raise ValueError(f"未知的稀有气体: {name!r}，可选: {NOBLE_GASES}")
    orbitals = []
    for gas in NOBLE_GASES[: NOBLE_GASES.index(name) + 1]:
        for n, l, _ in _NOBLE_SHELLS[gas]:
            if relativistic:
                orbitals.extend(_split_relativistic(n, l))
            else:
                orbitals.append(Orbital(n, l))
    return Configuration(
        orbitals,
        [o.degeneracy for o in orbitals],
        ["closed"] * len(orbitals),
        sorted=True,
    )


def noble_core_name(configuration: Configuration) -> str | None:
    """组态开头的闭壳层部分所对应的最重稀有气体名称；找不到时返回 ``None``。"""
    if not configuration.orbitals:
        return None
    relativistic = isinstance(configuration.orbitals[0], RelativisticOrbital)
    core = configuration.core()
    for name in reversed(NOBLE_GASES):
        gas = noble_gas(name, relativistic=relativistic)
        if len(gas) <= len(core) and core[: len(gas)].issimilar(gas):
            return name
    return None


def relativistic_configurations(orbital: Orbital, occupancy: int) -> list[Configuration]:
    r"""把非相对论支壳层 :math:`n\ell^w` 的电子分配到 :math:`n\ell_-` 与 :math:`n\ell_+` 上。

    Examples
    --------
    >>> [str(c) for c in relativistic_configurations(Orbital(3, 1), 2)]
    ['3p-2', '3p- 3p', '3p2']
    """
    if not 0 <= occupancy <= orbital.degeneracy:
        raise InvalidOccupancyError(f"{orbital} 的占据数必须在 [0, {orbital.degeneracy}] 内，当前值: {occupancy}")
    members = _split_relativistic(orbital.n, orbital.l)
    if len(members) == 1:
        return [Configuration(members, [occupancy], sorted=True)]
    minus, plus = members
    configs = []
    for w_minus in range(min(occupancy, minus.degeneracy), -1, -1):
        w_plus = occupancy - w_minus
        if w_plus > plus.degeneracy:
            continue
        triples = [(o, w, "open") for o, w in ((minus, w_minus), (plus, w_plus)) if w > 0]
        configs.append(Configuration.from_triples(triples, sorted=True))
    return configs
