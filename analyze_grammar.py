from __future__ import annotations

"""
Read grammar files, then print the grammar and its FIRST/FOLLOW sets.

Usage:
  python -X utf8 analyze_grammar.py grammar.txt [more.txt ...]
  python -X utf8 analyze_grammar.py --format json --show-working < grammar.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, TextIO

from formalgrammar import EPSILON, Grammar, GrammarError, GrammarParser, PassLog
from logging_config import setup_logger

logger = logging.getLogger("analyze_grammar")


def fmt_sym(s: str) -> str:
	return "eps" if s == EPSILON else s


def fmt_set(chars: Set[str]) -> List[str]:
	return sorted(fmt_sym(c) for c in chars)


def fmt_passes(passes: List[PassLog]) -> List[Dict[str, List[str]]]:
	return [{state: [fmt_sym(c) for c in added] for state, added in p.items() if added} for p in passes]


def read_grammar(paths: Sequence[Path], stdin: Optional[TextIO] = None) -> Grammar:
	parser = GrammarParser()
	if not paths:
		parser.parse_lines((stdin or sys.stdin).read().splitlines())
		return parser.finish()

	for path in paths:
		parser.parse_lines(path.read_text(encoding="utf-8").splitlines())
		logger.debug("Partial Grammar after %s:\n%s", path, parser.grammar)
	return parser.finish()


def analysis_report(grammar: Grammar, *, include_working: bool = False) -> Dict[str, Any]:
	first, first_working = grammar.first_set_with_trace()
	follow, follow_working = grammar.follow_set_with_trace()
	report: Dict[str, Any] = {
		"grammar": {
			"initial": grammar.initial,
			"states": grammar.states,
			"rendering": grammar.render(),
			"rules": {
				state: ["".join(str(sym) for sym in rule) for rule in grammar.rules_of(state)]
				for state in grammar.states
			},
			"nullable": sorted(state for state in grammar.states if grammar.accepts_empty(state)),
		},
		"first": {state: fmt_set(chars) for state, chars in sorted(first.items())},
		"follow": {state: fmt_set(chars) for state, chars in sorted(follow.items())},
	}
	if include_working:
		report["working"] = {
			"first_passes": fmt_passes(first_working),
			"follow_passes": fmt_passes(follow_working),
		}
	return report


def print_text(report: Dict[str, Any], out: TextIO) -> None:
	print(report["grammar"]["rendering"], file=out)

	print("=== FIRST ===", file=out)
	for state, chars in report["first"].items():
		print(f"{state}: {chars}", file=out)

	print("\n=== FOLLOW ===", file=out)
	for state, chars in report["follow"].items():
		print(f"{state}: {chars}", file=out)

	working = report.get("working")
	if working:
		for title, passes in (("FIRST", working["first_passes"]), ("FOLLOW", working["follow_passes"])):
			print(f"\n=== {title} passes ===", file=out)
			for i, changes in enumerate(passes, 1):
				added = ", ".join(f"{state} += {chars}" for state, chars in changes.items())
				print(f"pass {i}: {added}", file=out)


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Compute FIRST and FOLLOW sets of a <Name> ::= ... grammar")
	parser.add_argument("files", nargs="*", type=Path, help="grammar files, read in order (stdin when omitted)")
	parser.add_argument("--format", choices=("text", "json"), default="text")
	parser.add_argument("--show-working", action="store_true", help="also print the fixpoint passes")
	parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
	return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
	args = build_arg_parser().parse_args(argv)
	setup_logger(level="DEBUG" if args.verbose else None)

	try:
		grammar = read_grammar(args.files)
	except (OSError, UnicodeDecodeError, GrammarError) as e:
		print(f"error: {e}", file=sys.stderr)
		return 1

	report = analysis_report(grammar, include_working=args.show_working)
	if args.format == "json":
		print(json.dumps(report, indent=2, ensure_ascii=False))
	else:
		print_text(report, sys.stdout)
	return 0


if __name__ == "__main__":
	sys.exit(main())
