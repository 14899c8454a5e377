"""光谱学记号

轨道角动量的字母记号（s, p, d, ...）、谱项总角动量字母（S, P, D, ...）与连续态主量子数标签。
"""

from __future__ import annotations

from collections import OrderedDict

__all__ = [
    "spectroscopic_alphabet",
    "term_alphabet",
    "l_to_letter",
    "letter_to_l",
    "L_to_letter",
    "letter_to_L",
]

# j 被跳过（与 i 易混）
spectroscopic_alphabet = "spdfghiklmnoqrtuvwxyz"
term_alphabet = spectroscopic_alphabet.upper()

l_from_lett_to_num = OrderedDict((c, i) for i, c in enumerate(spectroscopic_alphabet))
l_from_num_to_lett = OrderedDict((i, c) for i, c in enumerate(spectroscopic_alphabet))


def l_to_letter(l: int) -> str:
    """ℓ → 小写字母，例如 ``2 -> 'd'``。"""
    try:
        return l_from_num_to_lett[int(l)]
    except KeyError:
        raise ValueError(f"ℓ={l} 超出光谱学字母表范围") from None


def letter_to_l(letter: str) -> int:
    """小写字母 → ℓ，例如 ``'f' -> 3``。"""
    try:
        return l_from_lett_to_num[letter]
    except KeyError:
        raise ValueError(f"未知的轨道角动量字母: {letter!r}") from None


def L_to_letter(L) -> str:
    """谱项 L → 大写字母；半整数 L 记作 ``[5/2]``。"""
    if getattr(L, "q", 1) != 1:
        return f"[{L}]"
    return l_to_letter(int(L)).upper()


def letter_to_L(letter: str) -> int:
    """大写字母 → 谱项 L。"""
    return letter_to_l(letter.lower())
