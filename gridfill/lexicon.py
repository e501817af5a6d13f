#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Reading word lists into weighted dictionary entries."""

import re
import logging
from typing import Iterable, List, Tuple, Optional, Callable
import unidecode
from gridfill.grid import Grid, BLANK, BLOCK

unicode_normalize = unidecode.unidecode

_log = logging.getLogger(__name__)

DEFAULT_MIN_LENGTH = 3
_WEIGHT_SEPARATOR = ';'
_ALPHABET_ALPHA = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_REGEX_NONCHARMATCH = '[^A-Za-z]'


class InvalidEntryException(ValueError):
    pass


def _contains_nonalphabet(letters: str) -> bool:
    for l in letters:
        if l not in _ALPHABET_ALPHA:
            return True
    return False


def canonicalize(rendering: str) -> str:
    """Reduce a rendering to upper-case ASCII letters, transliterating accented characters."""
    if _contains_nonalphabet(rendering):
        rendering = unicode_normalize(rendering)
    return re.sub(_REGEX_NONCHARMATCH, '', rendering).upper()


def parse_entry(line: str) -> Tuple[str, int]:
    """
    Parse a word list line into a (word, weight) pair.

    A line is either a bare word or a word and an integer weight
    separated by a semicolon, as in "AARDVARK;50". Bare words have
    weight zero.
    """
    rendering, weight = line, 0
    if _WEIGHT_SEPARATOR in line:
        rendering, weight_str = line.rsplit(_WEIGHT_SEPARATOR, 1)
        try:
            weight = int(weight_str.strip())
        except ValueError:
            raise InvalidEntryException("invalid weight in entry: {}".format(repr(line)[:64]))
    word = canonicalize(rendering)
    if not word:
        raise InvalidEntryException("entry contains no letters: {}".format(repr(line)[:64]))
    return word, weight


def _standard_cleaner(line: str) -> str:
    line = line.strip()
    if line.lower().endswith("'s"):
        line = line[:-2]
    return line


def read_wordlist(ifile: Iterable[str], min_length: int=DEFAULT_MIN_LENGTH, cleaner: Optional[Callable[[str], str]]=None, intolerables: Optional[list]=None) -> List[Tuple[str, int]]:
    """
    Read dictionary entries from lines of text.

    Entries keep the order in which they appear, so a word listed twice
    ends up with the weight of its later appearance once indexed.
    @param ifile: lines of text
    @param min_length: words shorter than this are dropped
    @param cleaner: transform applied to each line before parsing
    @param intolerables: if not None, receives (line, exception) pairs for unparseable lines
    @return: list of (word, weight) pairs
    """
    cleaner = cleaner or _standard_cleaner
    entries = []
    num_skipped = 0
    for line in map(cleaner, ifile):
        if not line:
            continue
        try:
            word, weight = parse_entry(line)
        except InvalidEntryException as e:
            num_skipped += 1
            if intolerables is not None:
                intolerables.append((line, e))
            continue
        if len(word) < min_length:
            continue
        entries.append((word, weight))
    if num_skipped:
        _log.info("%s items in input are intolerable", num_skipped)
    return entries


def load_wordlist(pathname: str, min_length: int=DEFAULT_MIN_LENGTH, cleaner: Optional[Callable[[str], str]]=None) -> List[Tuple[str, int]]:
    with open(pathname, 'r') as ifile:
        entries = read_wordlist(ifile, min_length, cleaner)
    _log.debug("%d entries read from %s", len(entries), pathname)
    return entries


def canonicalize_grid(grid: Grid) -> Grid:
    """
    Canonicalize the given letters of a grid the way dictionary words are canonicalized.

    @raise InvalidEntryException: if a given character does not reduce to exactly one letter
    """
    cells = []
    for ch in grid.contents:
        if ch != BLANK and ch != BLOCK:
            letter = canonicalize(ch)
            if len(letter) != 1:
                raise InvalidEntryException("grid cell {} is not a letter".format(repr(ch)))
            ch = letter
        cells.append(ch)
    return grid._replace(contents=''.join(cells))
