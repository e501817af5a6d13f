#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import random
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from gridfill.fill import Unsolvable
from gridfill.fill.cache import QueryCache
from gridfill.fill.index import WordIndex
from gridfill.grid import BLANK, Direction, EntryLocation, Grid, SlotKey

_log = logging.getLogger(__name__)

CellKey = Tuple[Direction, int, int]


class FillContext(object):
    """State owned by a single fill invocation."""

    def __init__(self, grid: Grid, index: WordIndex, subset: Optional[Iterable[SlotKey]]=None, rng: Optional[random.Random]=None):
        self.slots: List[EntryLocation] = grid.entries()
        self.cache = QueryCache(index, rng)
        self.used: Set[str] = set()
        # maps (direction, row, col) of every open cell to the slot in that direction covering it
        self.coverage: Dict[CellKey, EntryLocation] = {}
        for slot in self.slots:
            for row, col in slot.cells():
                self.coverage[(slot.direction, row, col)] = slot
        if subset is None:
            self.targets = list(self.slots)
        else:
            by_key = {slot.key(): slot for slot in self.slots}
            self.targets = []
            for key in subset:
                direction, row, col = key
                try:
                    self.targets.append(by_key[(Direction(direction), row, col)])
                except (KeyError, ValueError):
                    raise ValueError(f"no slot {key} in grid")

    def crossing(self, slot: EntryLocation, row: int, col: int) -> EntryLocation:
        key = (slot.direction.orthogonal(), row, col)
        crossing_slot = self.coverage.get(key, None)
        assert crossing_slot is not None, f"no crossing slot at {key}"
        return crossing_slot

    def unfilled_targets(self, grid: Grid) -> List[EntryLocation]:
        return [slot for slot in self.targets if BLANK in grid.project(slot).render()]

    def is_duplicate(self, grid: Grid, slot: EntryLocation) -> bool:
        """Check whether the complete word in a slot also appears in another complete slot."""
        word = grid.project(slot).render()
        self.used.clear()
        try:
            for other in self.slots:
                if other is slot or other.length != slot.length:
                    continue
                rendering = grid.project(other).render()
                if BLANK not in rendering:
                    self.used.add(rendering)
            return word in self.used
        finally:
            self.used.clear()


class Filler(object):
    """
    Backtracking crossword filler.

    The search is depth-first over an explicit stack of candidate grids.
    At each step the open slot with the fewest candidate words is filled
    with each of its candidates in rank order, and every resulting grid
    whose crossing slots can still be completed is pushed.
    """

    def __init__(self, index: WordIndex, tracer: Optional[Callable[[Grid], Any]]=None, rng: Optional[random.Random]=None):
        self.index = index
        self.tracer = tracer
        self.rng = rng

    def fill(self, grid: Grid, subset: Optional[Iterable[SlotKey]]=None) -> Grid:
        """
        Fill the blanks of a grid.

        @param grid: the grid to fill
        @param subset: keys (direction, start_row, start_col) of the slots to fill;
                       other slots are left as given; None means all slots
        @return: the filled grid
        @raise Unsolvable: if no fill exists
        """
        context = FillContext(grid, self.index, subset, self.rng)
        candidates = [grid]
        count = 0
        while candidates:
            candidate = candidates.pop()
            count += 1
            if self.tracer is not None:
                self.tracer(candidate)
            unfilled = context.unfilled_targets(candidate)
            if not unfilled:
                _log.debug("solved after %d candidates; %s", count, context.cache)
                return candidate
            slot = self._select(context, candidate, unfilled)
            successors = []
            for word in context.cache.words(candidate.project(slot).render()):
                successor = candidate.fill(slot, word)
                if not self._validate(context, successor, slot):
                    continue
                if not context.unfilled_targets(successor):
                    _log.debug("solved after %d candidates; %s", count, context.cache)
                    return successor
                successors.append(successor)
            # highest-ranked successor goes on top
            successors.reverse()
            candidates.extend(successors)
        _log.debug("exhausted search after %d candidates; %s", count, context.cache)
        raise Unsolvable(f"no fill found for {grid}")

    # noinspection PyMethodMayBeStatic
    def _select(self, context: FillContext, grid: Grid, unfilled: List[EntryLocation]) -> EntryLocation:
        def flexibility(slot: EntryLocation):
            pattern = grid.project(slot).render()
            return len(context.cache.words(pattern)), slot.start_row, slot.start_col
        return min(unfilled, key=flexibility)

    # noinspection PyMethodMayBeStatic
    def _validate(self, context: FillContext, grid: Grid, filled: EntryLocation) -> bool:
        if context.is_duplicate(grid, filled):
            return False
        for row, col in filled.cells():
            crossing = context.crossing(filled, row, col)
            projection = grid.project(crossing)
            pattern = projection.render()
            if BLANK not in pattern and context.is_duplicate(grid, crossing):
                return False
            if not crossing.prefilled and not context.cache.is_valid(pattern):
                return False
        return True
