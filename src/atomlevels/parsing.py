"""规范字符串语法的解析与格式化

- 轨道：``<n><ℓ 字母>``，相对论 :math:`j=\\ell-1/2` 成员加 ``-``（如 ``2p-``）；
  n 为正整数或单个字母（连续态）
- 组态：空格分隔的 ``<轨道><占据数><状态后缀>``，占据数为 1 时省略，
  状态后缀 ``c``（closed）、``i``（inactive）或空（open）；``[X]`` 展开为稀有气体 X 的闭壳层核心
- 谱项：``<2S+1><L 字母><宇称后缀>``，奇宇称后缀 ``o``；半整数 L 写作 ``[5/2]``
- 宇称：``even`` / ``odd``

格式化是解析的逆：对规范字符串，先解析再格式化得到原字符串。
"""

from __future__ import annotations

import re

from .configurations import NOBLE_GASES, Configuration, noble_gas
from .halfinteger import half_integer
from .notation import letter_to_L, letter_to_l
from .orbitals import Orbital, RelativisticOrbital
from .parity import Parity
from .terms.term import Term

__all__ = [
    "parse_orbital",
    "parse_relativistic_orbital",
    "parse_orbitals",
    "parse_configuration",
    "parse_relativistic_configuration",
    "parse_term",
    "parse_parity",
    "format_configuration",
]

_ORBITAL = r"(?P<n>\d+|[^\W\d_])(?P<l>[a-z])(?P<minus>-?)"
_ORBITAL_RE = re.compile(rf"^{_ORBITAL}$")
_SUBSHELL_RE = re.compile(rf"^{_ORBITAL}(?P<w>\d*)(?P<state>[ci]?)$")
_NOBLE_RE = re.compile(r"^\[(?P<gas>[A-Z][a-z]?)\]$")
_TERM_RE = re.compile(r"^(?P<mult>\d+)(?P<L>[A-Z]|\[\d+(?:/2)?\])(?P<odd>o?)$")

_STATE_FROM_SUFFIX = {"": "open", "c": "closed", "i": "inactive"}
_SUFFIX_FROM_STATE = {v: k for k, v in _STATE_FROM_SUFFIX.items()}

EMPTY_CONFIGURATION = "∅"


def _make_orbital(n: str, letter: str, minus: str, relativistic: bool):
    if minus and not relativistic:
        raise ValueError(f"非相对论轨道不能带 '-' 后缀: {n}{letter}-")
    n = int(n) if n.isdigit() else n
    l = letter_to_l(letter)
    if not relativistic:
        return Orbital(n, l)
    return RelativisticOrbital(n, l if minus else -(l + 1))


def parse_orbital(text: str) -> Orbital:
    """``"2p"`` → ``Orbital(2, 1)``。"""
    m = _ORBITAL_RE.match(text.strip())
    if m is None:
        raise ValueError(f"无法解析的轨道: {text!r}")
    return _make_orbital(m["n"], m["l"], m["minus"], relativistic=False)


def parse_relativistic_orbital(text: str) -> RelativisticOrbital:
    """``"2p-"`` → ``RelativisticOrbital(2, 1)``，``"2p"`` → ``RelativisticOrbital(2, -2)``。"""
    m = _ORBITAL_RE.match(text.strip())
    if m is None:
        raise ValueError(f"无法解析的相对论轨道: {text!r}")
    return _make_orbital(m["n"], m["l"], m["minus"], relativistic=True)


def parse_orbitals(text: str, relativistic: bool = False) -> list:
    """空格分隔的轨道列表，例如 ``"1s 2s 2p"``。"""
    parse = parse_relativistic_orbital if relativistic else parse_orbital
    return [parse(tok) for tok in text.split()]


def _parse_configuration(text: str, relativistic: bool, sorted: bool) -> Configuration:
    text = text.strip()
    if text in ("", EMPTY_CONFIGURATION):
        return Configuration(sorted=sorted)
    triples = []
    for tok in text.split():
        noble = _NOBLE_RE.match(tok)
        if noble is not None:
            triples.extend(noble_gas(noble["gas"], relativistic=relativistic))
            continue
        m = _SUBSHELL_RE.match(tok)
        if m is None:
            raise ValueError(f"无法解析的支壳层: {tok!r}（位于 {text!r}）")
        orbital = _make_orbital(m["n"], m["l"], m["minus"], relativistic)
        w = int(m["w"]) if m["w"] else 1
        triples.append((orbital, w, _STATE_FROM_SUFFIX[m["state"]]))
    return Configuration.from_triples(triples, sorted=sorted)


def parse_configuration(text: str, sorted: bool = False) -> Configuration:
    """解析非相对论组态，例如 ``"[Ne] 3s2 3p"``。

    Examples
    --------
    >>> c = parse_configuration("1s2c 2s2 2p6i")
    >>> [s for _, _, s in c]
    ['closed', 'open', 'inactive']
    """
    return _parse_configuration(text, relativistic=False, sorted=sorted)


def parse_relativistic_configuration(text: str, sorted: bool = False) -> Configuration:
    """解析相对论组态，例如 ``"[Ne] 3p-2 3p"``。"""
    return _parse_configuration(text, relativistic=True, sorted=sorted)


def parse_term(text: str) -> Term:
    """``"3Po"`` → ``Term(1, 1, odd)``。"""
    m = _TERM_RE.match(text.strip())
    if m is None:
        raise ValueError(f"无法解析的谱项: {text!r}")
    mult = int(m["mult"])
    if mult < 1:
        raise ValueError(f"自旋多重度必须 >= 1: {text!r}")
    L = m["L"]
    L = half_integer(L[1:-1]) if L.startswith("[") else letter_to_L(L)
    parity = Parity(-1) if m["odd"] else Parity(1)
    return Term(L, half_integer(f"{mult - 1}/2"), parity)


def parse_parity(text: str) -> Parity:
    """``"even"`` / ``"odd"``。"""
    text = text.strip()
    if text == "even":
        return Parity(1)
    if text == "odd":
        return Parity(-1)
    raise ValueError(f"无法解析的宇称: {text!r}")


def _format_subshell(orbital, w: int, state: str) -> str:
    occ = "" if w == 1 else str(w)
    return f"{orbital}{occ}{_SUFFIX_FROM_STATE[state]}"


def format_configuration(configuration: Configuration) -> str:
    """组态的规范字符串；开头恰为某稀有气体闭壳层核心时压缩为 ``[X]``。"""
    if len(configuration) == 0:
        return EMPTY_CONFIGURATION
    relativistic = isinstance(configuration.orbitals[0], RelativisticOrbital)
    parts = []
    rest = configuration
    for name in reversed(NOBLE_GASES):
        gas = noble_gas(name, relativistic=relativistic)
        head = configuration[: len(gas)]
        if len(head) == len(gas) and head == gas:
            parts.append(f"[{name}]")
            rest = configuration[len(gas):]
            break
    parts.extend(_format_subshell(*t) for t in rest)
    return " ".join(parts)
