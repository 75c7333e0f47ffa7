#!/usr/bin/env python3
"""Developer CLI: generate puzzles, print the daily puzzle, check a puzzle's uniqueness.

  sudoku-engine generate --difficulty hard --seed 42
  sudoku-engine daily --date 2025-03-14 --json
  sudoku-engine check "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
"""
import argparse
import json
import logging
import sys

from .config import DIFFICULTIES, EngineSettings
from .daily import day_index, generate_daily, local_today, parse_date
from .solver import count_solutions, format_grid, grid_to_string, parse_grid
from .sudoku_generator import GeneratedPuzzle, generate, generate_seeded

logger = logging.getLogger(__name__)


def _emit(result: GeneratedPuzzle, as_json: bool, extra=None) -> None:
    if as_json:
        payload = {"puzzle": result.puzzle, "solution": result.solution}
        payload.update(extra or {})
        print(json.dumps(payload))
        return
    for k, v in (extra or {}).items():
        print(f"{k}: {v}")
    print(format_grid(result.puzzle))
    print()
    print("empty cells:", sum(1 for row in result.puzzle for v in row if v == 0))
    print("puzzle:", grid_to_string(result.puzzle))


def cmd_generate(args, settings: EngineSettings) -> int:
    if args.seed is not None:
        result = generate_seeded(args.difficulty, args.seed)
    else:
        result = generate(args.difficulty)
    _emit(result, args.json, {"difficulty": args.difficulty})
    return 0


def cmd_daily(args, settings: EngineSettings) -> int:
    if args.date:
        today = parse_date(args.date)
        if today is None:
            print(f"Invalid date {args.date!r}; expected YYYY-MM-DD.", file=sys.stderr)
            return 2
    else:
        today = local_today()
    result = generate_daily(today, settings.daily_seed_multiplier, settings.daily_epoch)
    extra = {"date": today.isoformat(), "day_index": day_index(today, settings.daily_epoch)}
    _emit(result, args.json, extra)
    return 0


def cmd_check(args, settings: EngineSettings) -> int:
    try:
        grid = parse_grid(args.puzzle)
    except ValueError as e:
        print(f"Invalid puzzle: {e}", file=sys.stderr)
        return 2
    n = count_solutions(grid, 2)
    verdict = {0: "no solution", 1: "unique solution"}.get(n, "multiple solutions")
    print(verdict)
    return 0 if n == 1 else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sudoku-engine", description="Sudoku puzzle engine tools")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING... (default: SUDOKU_LOG_LEVEL or WARNING)")
    sub = ap.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate a puzzle with a unique solution")
    g.add_argument("--difficulty", choices=DIFFICULTIES, default="medium")
    g.add_argument("--seed", type=int, default=None, help="Reproducible generation")
    g.add_argument("--json", action="store_true")
    g.set_defaults(func=cmd_generate)

    d = sub.add_parser("daily", help="Print the daily challenge puzzle")
    d.add_argument("--date", default=None, help="YYYY-MM-DD (default: today, local time)")
    d.add_argument("--json", action="store_true")
    d.set_defaults(func=cmd_daily)

    c = sub.add_parser("check", help="Count solutions of an 81-cell puzzle (up to 2)")
    c.add_argument("puzzle")
    c.set_defaults(func=cmd_check)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = EngineSettings.from_env()
    level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
    logger.debug("Running %s", args.command)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
