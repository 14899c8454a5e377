"""atomlevels 包
=================

原子轨道、电子组态与谱项的组合学工具。

- 轨道：非相对论 :math:`n\\ell`、相对论 :math:`n\\kappa` 与自旋轨道
- 组态：(轨道, 占据数, 状态) 的有序集合，支持核心/价层划分、替换与激发
- 谱项：Xu 算法计数的 LS 谱项、jj 耦合 J 值、辛弱数与耦合树
- 字符串：轨道、组态、谱项与宇称的规范语法解析与格式化

注：本项目所有文档与注释均使用中文，Docstring 采用 Sphinx + NumPy 风格，公式使用 ``:math:`` 标记。
"""

from atomlevels.errors import (
    DomainError,
    DuplicateOrbitalError,
    InvalidOccupancyError,
    InvalidOrbitalError,
    StateConflictError,
)
from atomlevels.halfinteger import HalfInteger, half_integer, half_integer_range, triangle_range
from atomlevels.parity import EVEN, ODD, Parity, parity_of
from atomlevels.orbitals import Orbital, RelativisticOrbital, SpinOrbital
from atomlevels.configurations import (
    Configuration,
    juxtapose,
    noble_core_name,
    noble_gas,
    relativistic_configurations,
)
from atomlevels.terms import (
    IntermediateCoupling,
    IntermediateTerm,
    Term,
    configuration_terms,
    count_microstates,
    count_terms,
    couple_terms,
    final_terms,
    intermediate_couplings,
    intermediate_terms,
    terms,
    xu_x,
)
from atomlevels.excited import (
    ExcitationConfig,
    excited_configurations,
    spin_configurations,
    substitutions,
)
from atomlevels.parsing import (
    format_configuration,
    parse_configuration,
    parse_orbital,
    parse_parity,
    parse_relativistic_configuration,
    parse_relativistic_orbital,
    parse_term,
)

__all__ = [
    "DomainError",
    "DuplicateOrbitalError",
    "InvalidOccupancyError",
    "InvalidOrbitalError",
    "StateConflictError",
    "HalfInteger",
    "half_integer",
    "half_integer_range",
    "triangle_range",
    "Parity",
    "EVEN",
    "ODD",
    "parity_of",
    "Orbital",
    "RelativisticOrbital",
    "SpinOrbital",
    "Configuration",
    "juxtapose",
    "noble_gas",
    "noble_core_name",
    "relativistic_configurations",
    "Term",
    "IntermediateTerm",
    "IntermediateCoupling",
    "terms",
    "count_terms",
    "count_microstates",
    "xu_x",
    "intermediate_terms",
    "couple_terms",
    "final_terms",
    "intermediate_couplings",
    "configuration_terms",
    "ExcitationConfig",
    "excited_configurations",
    "spin_configurations",
    "substitutions",
    "parse_orbital",
    "parse_relativistic_orbital",
    "parse_configuration",
    "parse_relativistic_configuration",
    "parse_term",
    "parse_parity",
    "format_configuration",
]

__version__ = "0.1.0"
