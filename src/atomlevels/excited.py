r"""组态组合学

- :func:`spin_configurations`：把组态展开为全部自旋轨道组态（每个支壳层取组合，支壳层间取笛卡尔积）
- :func:`substitutions`：两个自旋组态之间的单电子替换对
- :func:`excited_configurations`：从参考组态出发生成单/双/多重激发组态

激发规则
========

1. 只从参考组态中 ``open`` 且有电子的轨道激发；``closed``（核心）与 ``inactive`` 轨道保持不变。
2. 每一步把一个电子从源轨道移到替换轨道集合中的某个轨道，按广度优先逐层展开；
   ``fun(dst, src)`` 可以把目标轨道按源轨道改写，返回 ``None`` 时剪掉该路径。
3. 激发度按与参考组态的差计算：:math:`\sum_{o} \max(0, w^{\rm ref}_o - w_o)`。
4. 结果按激发度区间、宇称（``keep_parity``）与源轨道占据数上下限过滤；
   电子被掏空的支壳层从组态中删除；与顺序无关的重复组态只保留首次出现者。
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from itertools import chain, combinations, product
from typing import Callable, List, Optional, Union

from .configurations import Configuration
from .errors import InvalidOccupancyError
from .orbitals import SpinOrbital

__all__ = [
    "spin_configurations",
    "substitutions",
    "ExcitationConfig",
    "excited_configurations",
]

_EXCITATION_LEVELS = {"singles": 1, "doubles": 2, "triples": 3, "quadruples": 4}


def _spin_configurations(configuration: Configuration) -> list[Configuration]:
    choices = []
    for orb, w, state in configuration:
        choices.append(
            [[(so, 1, state) for so in combo] for combo in combinations(orb.spin_orbitals(), w)]
        )
    return [
        Configuration.from_triples(chain.from_iterable(selection), sorted=configuration.sorted)
        for selection in product(*choices)
    ]


def spin_configurations(configuration) -> list[Configuration]:
    r"""组态对应的全部自旋轨道组态。

    对每个支壳层 :math:`(o, w, s)`，从 :math:`o` 的 :math:`g` 个自旋轨道中取 :math:`w` 个
    （组合，不计顺序）；各支壳层的选择按组态顺序取笛卡尔积。结果总数为
    :math:`\prod \binom{g_o}{w_o}`。

    Parameters
    ----------
    configuration : Configuration | sequence of Configuration
        单个组态，或组态列表；列表时按顺序拼接各组态的展开结果。

    Examples
    --------
    >>> len(spin_configurations(parse_configuration("1s2 2p")))
    6
    >>> len(spin_configurations([parse_configuration("1s2"), parse_configuration("2s")]))
    3
    """
    if isinstance(configuration, Configuration):
        return _spin_configurations(configuration)
    return [sc for c in configuration for sc in _spin_configurations(c)]


def substitutions(src: Configuration, dst: Configuration) -> list[tuple[SpinOrbital, SpinOrbital]]:
    """从自旋组态 ``src`` 到 ``dst`` 的轨道替换对 ``(被移出, 被移入)``。"""
    for c in (src, dst):
        if not all(isinstance(o, SpinOrbital) for o in c.orbitals):
            raise TypeError(f"substitutions 只适用于自旋轨道组态: {c}")
    if src.num_electrons() != dst.num_electrons():
        raise InvalidOccupancyError(
            f"电子数不同，无法配对替换: {src.num_electrons()} vs {dst.num_electrons()}"
        )
    removed = [o for o in src.orbitals if o not in dst]
    added = [o for o in dst.orbitals if o not in src]
    return list(zip(removed, added))


@dataclass
class ExcitationConfig:
    r"""激发组态生成参数。

    Attributes
    ----------
    min_excitations : int
        最小激发度（默认 0，即包含参考组态本身）。
    max_excitations : int | str
        最大激发度；也可写作 ``"singles"``、``"doubles"``（默认）、``"triples"``、``"quadruples"``。
    min_occupancy : list[int] | None
        每个源轨道（参考组态中 open 且有电子的轨道，按组态顺序）的最小剩余占据数；缺省全为 0。
    max_occupancy : list[int] | None
        每个源轨道的最大占据数；缺省为各自的简并度。
    keep_parity : bool
        是否只保留与参考组态同宇称的组态。
    """

    min_excitations: int = 0
    max_excitations: Union[int, str] = "doubles"
    min_occupancy: Optional[List[int]] = None
    max_occupancy: Optional[List[int]] = None
    keep_parity: bool = True

    def __post_init__(self):
        if isinstance(self.max_excitations, str):
            if self.max_excitations not in _EXCITATION_LEVELS:
                raise ValueError(
                    f"未知的激发级别 {self.max_excitations!r}，可选: {tuple(_EXCITATION_LEVELS)} 或整数"
                )
            self.max_excitations = _EXCITATION_LEVELS[self.max_excitations]
        if self.min_excitations < 0:
            raise ValueError(f"min_excitations 必须非负，当前值: {self.min_excitations}")
        if self.max_excitations < self.min_excitations:
            raise ValueError(
                f"要求 max_excitations >= min_excitations，当前 {self.max_excitations} < {self.min_excitations}"
            )


def _key(configuration: Configuration) -> frozenset:
    return frozenset(configuration)


def excited_configurations(
    ref: Configuration,
    *orbitals,
    fun: Callable | None = None,
    settings: ExcitationConfig | None = None,
    verbose: bool = False,
    **kwargs,
) -> list[Configuration]:
    r"""从参考组态生成激发组态。

    Parameters
    ----------
    ref : Configuration
        参考组态。
    *orbitals : AbstractOrbital
        替换轨道集合（可以包含参考组态中已有的 open 轨道）。
    fun : callable, optional
        ``fun(dst, src)`` 返回电子从 ``src`` 激发时实际使用的目标轨道，或 ``None`` 拒绝该替换。
    settings : ExcitationConfig, optional
        生成参数；缺省时由 ``**kwargs`` 构造。
    verbose : bool
        是否打印每一层的进度。
    **kwargs
        :class:`ExcitationConfig` 的字段，例如 ``max_excitations=1``。

    Returns
    -------
    list[Configuration]
        按广度优先（激发层）的发现顺序排列，不含重复。

    Examples
    --------
    >>> ref = parse_configuration("1s2")
    >>> [str(c) for c in excited_configurations(ref, Orbital(2, 0), Orbital(2, 1))]
    ['1s2', '1s 2s', '2s2', '2p2']
    """
    if settings is None:
        settings = ExcitationConfig(**kwargs)
    elif kwargs:
        raise TypeError(f"settings 与关键字参数不能同时给出: {sorted(kwargs)}")

    sources = [o for o, w, s in ref if s == "open" and w > 0]
    ref_occ = {o: w for o, w, _ in ref}
    min_occ = list(settings.min_occupancy) if settings.min_occupancy is not None else [0] * len(sources)
    max_occ = (
        list(settings.max_occupancy)
        if settings.max_occupancy is not None
        else [o.degeneracy for o in sources]
    )
    if len(min_occ) != len(sources) or len(max_occ) != len(sources):
        raise ValueError(
            f"min/max_occupancy 的长度必须等于源轨道数 {len(sources)}，当前 {len(min_occ)}/{len(max_occ)}"
        )
    for orb in orbitals:
        if orb in ref and ref.states[ref.index(orb)] != "open":
            warnings.warn(
                f"替换轨道 {orb} 在参考组态中为 {ref.states[ref.index(orb)]}，不会接收电子",
                UserWarning,
                stacklevel=2,
            )

    found = [ref]
    seen = {_key(ref)}
    frontier = [ref]
    for level in range(1, settings.max_excitations + 1):
        next_frontier = []
        for c in frontier:
            for src in sources:
                if c.num_electrons(src) == 0:
                    continue
                for orb in orbitals:
                    dst = orb if fun is None else fun(orb, src)
                    if dst is None or dst == src:
                        continue
                    if dst in c and (c.states[c.index(dst)] != "open" or c.num_electrons(dst) >= dst.degeneracy):
                        continue
                    new = c.replace(src, dst, n=1, append=True)
                    key = _key(new)
                    if key in seen:
                        continue
                    seen.add(key)
                    next_frontier.append(new)
        found.extend(next_frontier)
        frontier = next_frontier
        if verbose:
            print(f"[excited] level={level} new={len(next_frontier)} total={len(found)}")
        if not frontier:
            break

    ref_parity = ref.parity()
    result = []
    for c in found:
        degree = sum(max(0, ref_occ[o] - c.num_electrons(o)) for o in sources)
        if not settings.min_excitations <= degree <= settings.max_excitations:
            continue
        if settings.keep_parity and c.parity() != ref_parity:
            continue
        if any(not lo <= c.num_electrons(o) <= hi for o, lo, hi in zip(sources, min_occ, max_occ)):
            continue
        result.append(c)
    if verbose:
        print(f"[excited] kept {len(result)} of {len(found)} configurations")
    return result
