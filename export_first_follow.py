from __future__ import annotations

"""
Export a grammar and its FIRST/FOLLOW sets into Excel-friendly files.

Outputs (always):
  - Grammar.csv
  - FIRST.csv
  - FOLLOW.csv

Optional (only if openpyxl is installed):
  - FirstFollow.xlsx  (multiple sheets)

Run:
  python -X utf8 export_first_follow.py grammar.txt --out-dir out/
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

from analyze_grammar import fmt_sym, read_grammar
from formalgrammar import Grammar, GrammarError
from logging_config import setup_logger


def grammar_rows(grammar: Grammar) -> List[List[str]]:
	return [
		[state, "yes" if grammar.accepts_empty(state) else "no", grammar.render_state(state)]
		for state in grammar.display_order()
	]


def set_rows(sets: Dict[str, Set[str]]) -> List[List[str]]:
	return [[state, " ".join(sorted(fmt_sym(s) for s in chars))] for state, chars in sorted(sets.items())]


def export_grammar_csv(grammar: Grammar, out_dir: Path) -> Path:
	out_path = out_dir / "Grammar.csv"
	with out_path.open("w", newline="", encoding="utf-8") as f:
		w = csv.writer(f)
		w.writerow(["State", "Accepts empty", "Production"])
		w.writerows(grammar_rows(grammar))
	return out_path


def export_set_csv(filename: str, title: str, sets: Dict[str, Set[str]], out_dir: Path) -> Path:
	out_path = out_dir / filename
	with out_path.open("w", newline="", encoding="utf-8") as f:
		w = csv.writer(f)
		w.writerow([title, "Symbols (sorted)"])
		w.writerows(set_rows(sets))
	return out_path


def try_export_xlsx(grammar: Grammar, first: Dict[str, Set[str]], follow: Dict[str, Set[str]], out_dir: Path) -> bool:
	try:
		import openpyxl  # type: ignore
		from openpyxl.utils import get_column_letter  # type: ignore
	except Exception:
		return False

	wb = openpyxl.Workbook()
	wb.remove(wb.active)

	ws = wb.create_sheet("Grammar")
	ws.append(["State", "Accepts empty", "Production"])
	for row in grammar_rows(grammar):
		ws.append(row)

	for title, sets in (("FIRST", first), ("FOLLOW", follow)):
		ws = wb.create_sheet(title)
		ws.append(["State", "Symbols (sorted)"])
		for row in set_rows(sets):
			ws.append(row)

	# Basic column sizing
	for sheet in wb.worksheets:
		for col in range(1, sheet.max_column + 1):
			letter = get_column_letter(col)
			sheet.column_dimensions[letter].width = 22 if col == 1 else 18

	wb.save(out_dir / "FirstFollow.xlsx")
	return True


def export_all(grammar: Grammar, out_dir: Path) -> bool:
	out_dir.mkdir(parents=True, exist_ok=True)
	first = grammar.first_set()
	follow = grammar.follow_set()

	export_grammar_csv(grammar, out_dir)
	export_set_csv("FIRST.csv", "FIRST", first, out_dir)
	export_set_csv("FOLLOW.csv", "FOLLOW", follow, out_dir)
	return try_export_xlsx(grammar, first, follow, out_dir)


def main(argv: Optional[Sequence[str]] = None) -> int:
	parser = argparse.ArgumentParser(description="Export grammar, FIRST and FOLLOW tables")
	parser.add_argument("files", nargs="*", type=Path, help="grammar files (stdin when omitted)")
	parser.add_argument("--out-dir", type=Path, default=Path("."))
	args = parser.parse_args(argv)
	setup_logger()

	try:
		grammar = read_grammar(args.files)
	except (OSError, UnicodeDecodeError, GrammarError) as e:
		print(f"error: {e}", file=sys.stderr)
		return 1

	xlsx_ok = export_all(grammar, args.out_dir)
	print("Wrote:", "Grammar.csv, FIRST.csv, FOLLOW.csv", "in", args.out_dir)
	print("Wrote FirstFollow.xlsx:", xlsx_ok)
	return 0


if __name__ == "__main__":
	sys.exit(main())
