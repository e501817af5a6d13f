#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import random
from typing import Iterable, Optional, Union, Tuple

from gridfill.fill import Unsolvable
from gridfill.fill.filler import Filler
from gridfill.fill.index import WordIndex
from gridfill.grid import Grid, SlotKey

_log = logging.getLogger(__name__)


class Solver(object):
    """
    Entry point for solve requests against one dictionary.

    The word index is built once and shared by every request; each request
    gets its own filler and query cache. The optional random generator
    orders words of equal weight and is owned by the solver.
    """

    def __init__(self, words: Union[WordIndex, Iterable[Union[str, Tuple[str, int]]]], rng: Optional[random.Random]=None):
        if isinstance(words, WordIndex):
            self.index = words
        else:
            self.index = WordIndex.build(words)
        self.rng = rng

    def solve(self, grid_text: str, width: int, height: int, subset: Optional[Iterable[SlotKey]]=None) -> Optional[str]:
        """
        Fill a grid.

        @param grid_text: grid cells, row by row; line breaks are ignored
        @param width: number of columns
        @param height: number of rows
        @param subset: keys (direction, start_row, start_col) of the only slots to fill
        @return: the filled grid contents without line breaks, or None if no fill exists
        @raise DimensionMismatch: if the text does not hold width * height cells
        """
        grid = Grid.parse(grid_text, width, height)
        try:
            filled = Filler(self.index, rng=self.rng).fill(grid, subset)
        except Unsolvable as e:
            _log.info("unsolvable: %s", e)
            return None
        return filled.contents

    def __str__(self):
        return "Solver<{}>".format(self.index)
