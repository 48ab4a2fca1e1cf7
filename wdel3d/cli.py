"""edges-weighted-delaunay3d <input.xyzw> <output.txt>

Успіх: код 0 і нічого в stdout. Будь-яка помилка: повідомлення в stderr
і код 1 (зокрема неправильна кількість аргументів).
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .constants import GRID_SIZE
from .errors import Wdel3dError
from .logging_utils import configure_logging
from .pipeline import run


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="edges-weighted-delaunay3d",
        description="Edge skeleton of the weighted (regular) Delaunay triangulation of x y z w points.",
    )
    p.add_argument("input", help="input file: whitespace-separated x y z w per point")
    p.add_argument("output", help="output file: one 'lo hi' vertex index pair per line")
    p.add_argument("--grid-size", type=int, default=GRID_SIZE, help="engine grid resolution (default: %(default)s)")
    p.add_argument("--check", action="store_true", help="validate the tetrahedralization before extracting edges")
    p.add_argument("--stats", action="store_true", help="log point/tetrahedron counts")
    p.add_argument("--timing", action="store_true", help="log engine phase timings")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    return p


def _log_level(args: argparse.Namespace) -> str:
    if args.verbose >= 2:
        return "DEBUG"
    if args.verbose == 1 or args.stats or args.timing:
        return "INFO"
    return "WARNING"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(_log_level(args))
    try:
        run(
            args.input,
            args.output,
            grid_size=args.grid_size,
            do_check=args.check,
            log_stats=args.stats,
            log_timing=args.timing,
            log_verbose=args.verbose >= 2,
        )
    except Wdel3dError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
