from __future__ import annotations
from typing import Any, List, Optional
import argparse
import json
import logging

from .map import SeqMap
from .parser import split_script, parse_statement
from .executor import execute

logger = logging.getLogger(__name__)


def _print_result(result: Any) -> None:
    if isinstance(result, list):
        if not result:
            print("(0 rows)")
            return
        print(json.dumps(result, indent=2, default=str))
        print(f"({len(result)} rows)")
    else:
        print(result)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Interactive shell over an in-memory SeqMap.")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level for the seqmap loggers",
    )
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    smap: SeqMap = SeqMap()

    print("SeqMap REPL. End statements with ';'. Type '.exit' to quit.")
    buf = ""

    while True:
        prompt = "seqmap> " if not buf else "...     "
        try:
            line = input(prompt)
        except EOFError:
            break

        if not buf and line.strip().lower() == ".exit":
            break

        buf += line + "\n"

        # only run when we see a semicolon
        if ";" not in buf:
            continue

        try:
            for s in split_script(buf):
                stmt = parse_statement(s)
                result = execute(smap, stmt)
                _print_result(result)
        except (ValueError, KeyError) as e:
            logger.debug("statement failed", exc_info=True)
            print(f"ERROR: {e}")

        buf = ""


if __name__ == "__main__":
    main()
