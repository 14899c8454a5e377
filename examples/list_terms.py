#!/usr/bin/env python
"""组态谱项与激发组态的命令行入口。

示例::

    python examples/list_terms.py "[Ne] 3s 3p"
    python examples/list_terms.py "3d3" --intermediate
    python examples/list_terms.py "1s2" --excite "2s 2p" --max-excitations doubles
    python examples/list_terms.py "[Ne] 3p2" --relativistic --json
"""

import argparse
import json
import sys
from pathlib import Path

# 添加 src 到路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from atomlevels.configurations import noble_core_name
from atomlevels.excited import ExcitationConfig, excited_configurations
from atomlevels.parsing import (
    parse_configuration,
    parse_orbitals,
    parse_relativistic_configuration,
)
from atomlevels.terms import (
    TermMultiplicityCache,
    configuration_terms,
    count_microstates,
    intermediate_couplings,
    intermediate_terms,
)


def build_parser():
    p = argparse.ArgumentParser(description="列出电子组态的谱项、中间耦合与激发组态")
    p.add_argument("configuration", help='组态字符串，例如 "[Ne] 3s2 3p2"')
    p.add_argument("--relativistic", action="store_true", help="按相对论（jj 耦合）轨道解析")
    p.add_argument("--intermediate", action="store_true", help="列出各支壳层的中间谱项与耦合链")
    p.add_argument("--excite", default=None, help='替换轨道集合，例如 "2s 2p 3s"')
    p.add_argument("--max-excitations", default="doubles", help="最大激发度（整数或 singles/doubles）")
    p.add_argument("--min-excitations", type=int, default=0)
    p.add_argument("--no-keep-parity", action="store_true", help="不限制激发组态的宇称")
    p.add_argument("--json", action="store_true", help="以 JSON 输出")
    p.add_argument("--verbose", action="store_true")
    return p


def _max_excitations(value: str):
    return int(value) if value.isdigit() else value


def collect(args) -> dict:
    """按命令行参数计算结果，返回可直接序列化的字典。"""
    parse = parse_relativistic_configuration if args.relativistic else parse_configuration
    config = parse(args.configuration)
    cache = TermMultiplicityCache()

    peel = config.peel()
    result = {
        "configuration": str(config),
        "core": noble_core_name(config),
        "electrons": config.num_electrons(),
        "parity": str(config.parity()),
        "terms": [str(t) for t in configuration_terms(peel)],
        "microstates": [count_microstates(o, w) for o, w, _ in peel],
    }

    if args.intermediate:
        its = intermediate_terms(peel, cache=cache)
        result["intermediate_terms"] = [[str(it) for it in level] for level in its]
        result["couplings"] = [str(path) for path in intermediate_couplings(its)]

    if args.excite:
        orbitals = parse_orbitals(args.excite, relativistic=args.relativistic)
        settings = ExcitationConfig(
            min_excitations=args.min_excitations,
            max_excitations=_max_excitations(args.max_excitations),
            keep_parity=not args.no_keep_parity,
        )
        excited = excited_configurations(config, *orbitals, settings=settings, verbose=args.verbose)
        result["excited"] = [str(c) for c in excited]

    return result


def print_results(result: dict):
    print("\n" + "=" * 70)
    print(f"组态: {result['configuration']}")
    print("=" * 70)
    if result["core"] is not None:
        print(f"稀有气体核心: [{result['core']}]")
    print(f"电子数: {result['electrons']}    宇称: {result['parity']}")
    print(f"价层微观态数: {result['microstates']}")
    print(f"\n谱项 ({len(result['terms'])}): {' '.join(result['terms'])}")

    if "intermediate_terms" in result:
        print("\n中间谱项:")
        for i, level in enumerate(result["intermediate_terms"]):
            print(f"  [{i}] {' '.join(level)}")
        print(f"\n耦合链 ({len(result['couplings'])}):")
        for path in result["couplings"]:
            print(f"  {path}")

    if "excited" in result:
        print(f"\n激发组态 ({len(result['excited'])}):")
        for c in result["excited"]:
            print(f"  {c}")
    print()


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        result = collect(args)
    except ValueError as e:
        print(f"错误: {e}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        print_results(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
