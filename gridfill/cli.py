#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import re
import random
import logging
import time
from argparse import ArgumentParser
from typing import Sequence, TextIO, Tuple, Optional

from gridfill.fill import Unsolvable
from gridfill.fill.filler import Filler
from gridfill.fill.index import IndexLoader
from gridfill.grid import Direction, GridParser, GridError, SlotKey
from gridfill.lexicon import DEFAULT_MIN_LENGTH, canonicalize_grid

_log = logging.getLogger(__name__)

_EXIT_SOLVED = 0
_EXIT_BAD_INPUT = 1
_EXIT_UNSOLVABLE = 2
_DIRECTION_ABBREVIATIONS = {
    'a': Direction.ACROSS,
    'across': Direction.ACROSS,
    'd': Direction.DOWN,
    'down': Direction.DOWN,
}


def parse_shape(shape_arg: str) -> Tuple[int, int]:
    """Parse a 'WIDTHxHEIGHT' shape specification."""
    shape_tokens = re.fullmatch(r'(\d+)x(\d+)', shape_arg.strip())
    if not shape_tokens:
        raise ValueError("invalid shape specification: " + shape_arg)
    return int(shape_tokens.group(1)), int(shape_tokens.group(2))


def parse_slot(slot_arg: str) -> SlotKey:
    """Parse a 'DIRECTION:ROW:COL' slot specification, e.g. 'across:0:0' or 'd:0:3'."""
    parts = slot_arg.split(':')
    if len(parts) != 3:
        raise ValueError("invalid slot specification: " + slot_arg)
    try:
        direction = _DIRECTION_ABBREVIATIONS[parts[0].strip().lower()]
        return direction, int(parts[1]), int(parts[2])
    except (KeyError, ValueError):
        raise ValueError("invalid slot specification: " + slot_arg)


def create_arg_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Fill a crossword grid with words from a word list.")
    parser.add_argument("grid", metavar="FILE", help="grid text file; '*' for blocks, space for blanks, one row per line")
    parser.add_argument("--shape", metavar="SPEC", help="set shape as 'WIDTHxHEIGHT'; default is inferred from the text")
    parser.add_argument("--wordlist", metavar="FILE", default='/usr/share/dict/words', help="word list, one WORD or WORD;WEIGHT per line")
    parser.add_argument("--min-length", metavar="N", type=int, default=DEFAULT_MIN_LENGTH, help="ignore words shorter than N")
    parser.add_argument("--cache-dir", metavar="DIR", help="directory where built word indexes are cached")
    parser.add_argument("--slot", metavar="DIR:ROW:COL", action='append', help="fill only this slot; may be repeated")
    parser.add_argument("--seed", type=int, help="random seed for ordering words of equal weight")
    parser.add_argument("--output", metavar="FILE", help="write filled grid to FILE instead of standard output")
    parser.add_argument("--log-level", choices=('INFO', 'DEBUG', 'WARNING', 'ERROR'), default='INFO', help="set log level")
    return parser


def main(argl: Sequence[str]=None, stdout: TextIO=sys.stdout) -> int:
    parser = create_arg_parser()
    args = parser.parse_args(argl)
    logging.basicConfig(level=logging.__dict__[args.log_level])
    try:
        width, height = parse_shape(args.shape) if args.shape else (None, None)
        subset: Optional[list] = None
        if args.slot:
            subset = [parse_slot(s) for s in args.slot]
        with open(args.grid, 'r') as ifile:
            grid = GridParser().parse(ifile, width, height)
        grid = canonicalize_grid(grid)
        loader = IndexLoader(args.cache_dir, min_length=args.min_length)
        index = loader.load(args.wordlist)
    except (ValueError, GridError, OSError) as e:
        print(f"gridfill: {e}", file=sys.stderr)
        return _EXIT_BAD_INPUT
    _log.info("loaded %s", index)
    rng = None if args.seed is None else random.Random(args.seed)
    filler = Filler(index, rng=rng)
    fill_start = time.perf_counter()
    try:
        filled = filler.fill(grid, subset)
    except ValueError as e:
        print(f"gridfill: {e}", file=sys.stderr)
        return _EXIT_BAD_INPUT
    except Unsolvable:
        print("no solution found", file=sys.stderr)
        return _EXIT_UNSOLVABLE
    _log.info("filled in %.1f seconds", time.perf_counter() - fill_start)
    if args.output:
        with open(args.output, 'w') as ofile:
            print(filled.to_text(), file=ofile)
    else:
        print(filled.to_text(), file=stdout)
    return _EXIT_SOLVED


if __name__ == '__main__':
    exit(main())
