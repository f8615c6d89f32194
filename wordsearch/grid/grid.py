"""Read-only grid scanning and rendering utilities."""

import re
from typing import Dict, Iterable, Optional, Sequence, Set

from .directions import DIRECTIONS
from .models import Coordinate, Grid, WordPlacement


_LETTER = re.compile(r'^[A-Z]$')


def grid_is_valid(grid: Grid, size: Optional[int] = None) -> bool:
    """Check the grid is square (of the given size) and every cell is one letter A-Z."""
    expected = len(grid) if size is None else size
    if len(grid) != expected or expected == 0:
        return False
    return all(
        len(row) == expected and all(_LETTER.match(cell) for cell in row)
        for row in grid
    )


def find_word(grid: Grid, word: str) -> Optional[WordPlacement]:
    """
    Scan every cell and direction for a word.

    Independent of the placement engine, so it can be used to check that a
    generated grid really contains what the engine says it placed. A word
    written backwards is found by the opposite direction.
    """
    size = len(grid)
    word = word.upper()
    if not word:
        return None

    for row in range(size):
        for col in range(size):
            if grid[row][col] != word[0]:
                continue
            for direction in DIRECTIONS:
                d_row, d_col = direction
                end_row = row + d_row * (len(word) - 1)
                end_col = col + d_col * (len(word) - 1)
                if not (0 <= end_row < size and 0 <= end_col < size):
                    continue
                if all(grid[row + d_row * i][col + d_col * i] == letter for i, letter in enumerate(word)):
                    return WordPlacement(word=word, start_row=row, start_col=col, direction=direction)

    return None


def word_exists_in_grid(grid: Grid, word: str) -> bool:
    """Check whether a word appears anywhere in the grid."""
    return find_word(grid, word) is not None


def find_all_words(grid: Grid, words: Iterable[str]) -> Dict[str, WordPlacement]:
    """Locate each listed word that appears in the grid."""
    found: Dict[str, WordPlacement] = {}
    for word in words:
        placement = find_word(grid, word)
        if placement is not None:
            found[word] = placement
    return found


def render_grid(grid: Grid, highlight: Optional[Sequence[Coordinate]] = None) -> str:
    """
    Render the grid to a string.

    With highlight, only those cells show their letter and the rest are
    drawn as '.', which is how the solution view is printed.
    """
    if not grid:
        return ""

    keep: Optional[Set[Coordinate]] = set(highlight) if highlight is not None else None

    lines = []
    for y, row in enumerate(grid):
        cells = [
            letter if keep is None or Coordinate(x, y) in keep else '.'
            for x, letter in enumerate(row)
        ]
        lines.append(' '.join(cells))

    return '\n'.join(lines)
