"""
Command line entry point for arithparse.

Author: xwest
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import ParserConfig, DEFAULT_MAX_DEPTH
from .harness import run_cases
from .parser.parser import ASTParser, EvalParser
from .parser.errors import ParseError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arithparse",
        description="Parse and evaluate integer arithmetic expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  arithparse "2 ^ 2 ^ 3"                # 256
  arithparse --ast "1 - 2 - 3"          # prints the tree, then -4
  arithparse --strict "1 + 2)"          # rejected: trailing input
  arithparse --self-test                # run the demonstration table
        """
    )

    parser.add_argument('expressions', nargs='*', metavar='EXPR',
                        help='Expressions to evaluate')
    parser.add_argument('--ast', action='store_true',
                        help='Print the parsed tree before each value')
    parser.add_argument('--strict', action='store_true',
                        help='Reject input left over after the expression')
    parser.add_argument('--exact-power', action='store_true',
                        help='Use exact integer exponentiation for ^')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help='Deepest allowed nesting of parentheses and ^ '
                             f'(default: {DEFAULT_MAX_DEPTH})')
    parser.add_argument('--self-test', action='store_true',
                        help='Run the demonstration cases; exit status is the number of failures')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.expressions and not args.self_test:
        parser.error("no expressions given")

    try:
        config = ParserConfig(strict=args.strict, exact_power=args.exact_power,
                              max_depth=args.max_depth)
    except ValueError as e:
        parser.error(str(e))

    if args.self_test:
        return run_cases(config=config)

    for expression in args.expressions:
        try:
            if args.ast:
                tree = ASTParser(config).parse(expression)
                print(f"ast: {tree}")
                print(tree.process(config))
            else:
                print(EvalParser(config).parse(expression))
        except ParseError as e:
            print(str(e), end="", file=sys.stderr)
            return 1
        except (ArithmeticError, ValueError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
