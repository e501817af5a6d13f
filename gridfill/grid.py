#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
from enum import Enum
from typing import List, NamedTuple, Iterator, Iterable, Tuple, Optional

_log = logging.getLogger(__name__)

BLOCK = '*'
BLANK = ' '
_LINE_BREAKS = "\r\n"


class GridError(Exception):
    pass


class DimensionMismatch(GridError, ValueError):
    """Raised when grid text does not hold exactly width * height cells."""
    pass


class Direction(str, Enum):

    ACROSS = 'across'
    DOWN = 'down'

    def orthogonal(self) -> 'Direction':
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


SlotKey = Tuple[Direction, int, int]


class EntryLocation(NamedTuple):

    start_row: int
    start_col: int
    length: int
    direction: Direction
    prefilled: bool

    def key(self) -> SlotKey:
        return self.direction, self.start_row, self.start_col

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Return a generator of (row, col) pairs covered by this slot, in word order."""
        for i in range(self.length):
            if self.direction == Direction.ACROSS:
                yield self.start_row, self.start_col + i
            else:
                yield self.start_row + i, self.start_col

    def __str__(self):
        return "EntryLocation<{}@({},{});len={}>".format(self.direction.value, self.start_row, self.start_col, self.length)


class EntryIterator(object):
    """
    View of the characters a slot occupies in a grid.

    Iteration may be restarted any number of times. Two instances
    compare equal (and hash equal) if they hold the same characters,
    even if they were taken from different grids.
    """

    def __init__(self, grid: 'Grid', location: EntryLocation):
        self.grid = grid
        self.location = location

    def __iter__(self) -> Iterator[str]:
        contents, width = self.grid.contents, self.grid.width
        for row, col in self.location.cells():
            yield contents[row * width + col]

    def __len__(self):
        return self.location.length

    def render(self) -> str:
        return ''.join(self)

    def is_complete(self) -> bool:
        return BLANK not in self.render()

    def __eq__(self, other):
        return isinstance(other, EntryIterator) and self.render() == other.render()

    def __hash__(self):
        return hash(self.render())

    def __str__(self):
        return "EntryIterator<{};{}>".format(self.location, repr(self.render()))


def _scan(cells: Iterable[Tuple[int, int, str]], direction: Direction, slots: List[EntryLocation]):
    start: Optional[Tuple[int, int]] = None
    length = 0
    prefilled = True
    for row, col, value in cells:
        if value == BLOCK:
            if start is not None:
                slots.append(EntryLocation(start[0], start[1], length, direction, prefilled))
            start, length, prefilled = None, 0, True
            continue
        if start is None:
            start = row, col
        length += 1
        prefilled = prefilled and value != BLANK
    if start is not None:
        slots.append(EntryLocation(start[0], start[1], length, direction, prefilled))


class Grid(NamedTuple):

    contents: str
    width: int
    height: int

    @staticmethod
    def parse(text: str, width: int, height: int) -> 'Grid':
        stripped = ''.join([ch for ch in text if ch not in _LINE_BREAKS])
        if width <= 0 or height <= 0:
            raise DimensionMismatch(f"dimensions must be positive: {width}x{height}")
        if len(stripped) != width * height:
            raise DimensionMismatch(f"input has {len(stripped)} cells but dimensions are {width}x{height}")
        return Grid(stripped, width, height)

    def value(self, row: int, col: int) -> str:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"({row}, {col}) is outside {self.width}x{self.height} grid")
        return self.contents[row * self.width + col]

    def rows(self) -> List[str]:
        return [self.contents[r * self.width:(r + 1) * self.width] for r in range(self.height)]

    def to_text(self, newline: str="\n") -> str:
        return newline.join(self.rows())

    def count_blanks(self) -> int:
        return self.contents.count(BLANK)

    def is_complete(self) -> bool:
        return BLANK not in self.contents

    def entries(self) -> List[EntryLocation]:
        """
        Extract the fillable slots of this grid.

        Across slots come first, in row-major order of discovery, followed by
        down slots in column-major order of discovery.
        @return: list of slot locations
        """
        slots: List[EntryLocation] = []
        w, h = self.width, self.height
        for r in range(h):
            _scan(((r, c, self.contents[r * w + c]) for c in range(w)), Direction.ACROSS, slots)
        for c in range(w):
            _scan(((r, c, self.contents[r * w + c]) for r in range(h)), Direction.DOWN, slots)
        return slots

    def project(self, location: EntryLocation) -> EntryIterator:
        return EntryIterator(self, location)

    def fill(self, location: EntryLocation, word: str) -> 'Grid':
        """Return a new grid with the cells of the given slot overwritten by the word."""
        assert len(word) == location.length, f"word {repr(word)} does not fit {location}"
        cells = list(self.contents)
        for (row, col), ch in zip(location.cells(), word):
            cells[row * self.width + col] = ch
        return Grid(''.join(cells), self.width, self.height)

    def __str__(self):
        return "Grid<{}x{};{}>".format(self.width, self.height, repr(self.contents))


def extract_slots(grid: Grid) -> List[EntryLocation]:
    return grid.entries()


def _read_lines(ifile: Iterable[str], comment_leader: Optional[str]=None) -> List[str]:
    lines = []
    for line in ifile:
        line = line.rstrip(_LINE_BREAKS)
        if comment_leader is not None and line.lstrip().startswith(comment_leader):
            continue
        lines.append(line)
    while lines and not lines[-1]:
        lines.pop()
    return lines


class GridParser(object):
    """
    Parser of human-written grids, one row per line.

    Rows shorter than the grid width are padded with blanks, so trailing
    spaces trimmed by an editor do not change the grid. Empty lines inside
    the text are rows of blanks; trailing empty lines are ignored.
    """

    def __init__(self, comment_leader: str='#'):
        self.comment_leader = comment_leader

    def parse(self, ifile: Iterable[str], width: Optional[int]=None, height: Optional[int]=None) -> Grid:
        lines = _read_lines(ifile, self.comment_leader)
        if height is not None and len(lines) < height:
            lines += [''] * (height - len(lines))
        if not lines:
            raise DimensionMismatch("grid text contains no rows")
        if width is None:
            width = max(map(len, lines))
        if height is None:
            height = len(lines)
        for i in range(len(lines)):
            line = lines[i]
            if len(line) < width:
                lines[i] = line + BLANK * (width - len(line))
        _log.debug("parsed %d lines of grid text with shape %dx%d", len(lines), width, height)
        return Grid.parse(''.join(lines), width, height)
