"""原子谱项子模块

- **谱项类型** (`term.py`): LS 谱项 :class:`Term` 与带辛弱数的 :class:`IntermediateTerm`
- **Xu 算法** (`xu.py`): 等价电子 LS 谱项的闭式计数
- **jj 耦合** (`jj.py`): 相对论支壳层的允许 J 值
- **允许谱项** (`allowed.py`): 按轨道类型分派，以及谱项/微观态计数
- **中间谱项** (`intermediate.py`): 辛弱数的分配
- **角动量耦合** (`coupling.py`): 非等价电子群的谱项相乘与耦合树枚举
"""

from .allowed import count_microstates, count_terms, terms
from .coupling import (
    IntermediateCoupling,
    configuration_terms,
    couple_term_lists,
    couple_terms,
    final_terms,
    intermediate_couplings,
)
from .intermediate import intermediate_terms
from .jj import jj_terms
from .term import IntermediateTerm, Term
from .xu import TermMultiplicityCache, multiplicity_table, xu_a, xu_terms, xu_x

__all__ = [
    # 谱项类型
    "Term",
    "IntermediateTerm",
    # 允许谱项
    "terms",
    "count_terms",
    "count_microstates",
    "xu_a",
    "xu_x",
    "xu_terms",
    "multiplicity_table",
    "TermMultiplicityCache",
    "jj_terms",
    "intermediate_terms",
    # 耦合
    "couple_terms",
    "couple_term_lists",
    "final_terms",
    "IntermediateCoupling",
    "intermediate_couplings",
    "configuration_terms",
]
