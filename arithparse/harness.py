"""
Demonstration harness.

Runs a table of (expression, expected value) cases through both parsers and
reports the tree, both results and a verdict for each. A case that fails to
parse or evaluate counts as failed; the run carries on with the next case.

Author: xwest
"""

import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Tuple

from .config import ParserConfig
from .parser.parser import ASTParser, EvalParser
from .parser.errors import ParseError


DEMO_CASES: List[Tuple[str, int]] = [
    ("1-2-3", -4),
    ("1", 1),
    ("2-1", 1),
    ("5 - 4 - 3", -2),
    ("2 - 1", 1),
    ("2 * 3 / 2", 3),
    (" 2 *2 / 3", 1),
    ("2 - 2 * 3", -4),
    ("(2 - 2) * 3", 0),
    ("2 ^ 2 ^ 3", 256),
    ("(1 - 2 ^ 2 + 1) * 3", -6),
]


@dataclass
class CaseResult:
    """Outcome of one harness case."""
    statement: str
    expected: int
    rendered: Optional[str] = None
    ast_value: Optional[int] = None
    eval_value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ast_passed(self) -> bool:
        return self.error is None and self.ast_value == self.expected

    @property
    def eval_passed(self) -> bool:
        return self.error is None and self.eval_value == self.expected

    @property
    def passed(self) -> bool:
        return self.ast_passed and self.eval_passed


def run_case(statement: str, expected: int, config: Optional[ParserConfig] = None) -> CaseResult:
    """Run one statement through both parsers."""
    result = CaseResult(statement, expected)
    try:
        ast = ASTParser(config).parse(statement)
        result.rendered = ast.render()
        result.ast_value = ast.process(config)
        result.eval_value = EvalParser(config).parse(statement)
    except ParseError as e:
        result.error = e.message
    except (ArithmeticError, ValueError) as e:
        result.error = f"{type(e).__name__}: {e}"
    return result


def run_cases(cases: Sequence[Tuple[str, int]] = DEMO_CASES,
              config: Optional[ParserConfig] = None,
              out: Optional[TextIO] = None) -> int:
    """
    Run every case, printing a report.

    Returns:
        Number of failed cases
    """
    if out is None:
        out = sys.stdout
    failed = 0
    for statement, expected in cases:
        result = run_case(statement, expected, config)
        _report(result, out)
        if not result.passed:
            failed += 1

    print(f"{len(cases) - failed}/{len(cases)} cases passed", file=out)
    return failed


def _report(result: CaseResult, out: TextIO):
    print(f"stmt: {result.statement}", file=out)
    if result.error is not None:
        print(f"  error: {result.error}", file=out)
        print("    TEST FAILED", file=out)
        return

    print(f"  ast: {result.rendered}", file=out)
    print(f"  expected result: {result.expected}", file=out)
    print(f"  result: {result.ast_value}", file=out)
    print(f"    {_verdict(result.ast_passed)}", file=out)
    print(f"  eval: {result.eval_value}", file=out)
    print(f"    {_verdict(result.eval_passed)}", file=out)


def _verdict(passed: bool) -> str:
    return "TEST PASSED" if passed else "TEST FAILED"
