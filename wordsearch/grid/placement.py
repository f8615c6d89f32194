"""
Grid placement engine.

Builds a square letter grid and hides a word list inside it:

1. Words are placed longest first, each with a bounded number of random
   (start cell, direction) attempts.
2. A word that cannot be placed may be swapped for an alternative from the
   same category (similar length, not already used).
3. Remaining cells are filled with random letters.

Placement failures are not fatal; they are reported in the result so callers
can shrink the displayed word list to what is actually on the grid.
"""

import logging
import random
import string
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .directions import DIRECTIONS
from .models import Direction, Grid, PlacementResult, WordPlacement
from ..errors import InvalidGridSizeError


logger = logging.getLogger(__name__)

EMPTY = ""
LETTERS = string.ascii_uppercase

# Random (position, direction) trials per word variant
MAX_PLACEMENT_ATTEMPTS = 200

# Original word plus up to two alternatives from the same category
MAX_WORD_VARIANTS = 3

# Alternatives are limited to 80% of the grid size and at least 3 letters
ALTERNATIVE_MAX_RATIO = 0.8
ALTERNATIVE_MIN_LENGTH = 3
SIMILAR_LENGTH_DELTA = 2


def empty_grid(size: int) -> Grid:
    """Create a size x size grid with every cell unset."""
    if size <= 0:
        raise InvalidGridSizeError(size)
    return [[EMPTY for _ in range(size)] for _ in range(size)]


def can_place_word(grid: Grid, word: str, row: int, col: int, direction: Direction) -> bool:
    """
    Check if a word fits at a position in a direction.

    The word must stay inside the grid and every cell it covers must be
    either unset or already hold the matching letter (words may cross).
    """
    size = len(grid)
    d_row, d_col = direction
    end_row = row + d_row * (len(word) - 1)
    end_col = col + d_col * (len(word) - 1)

    if not (0 <= row < size and 0 <= col < size):
        return False
    if not (0 <= end_row < size and 0 <= end_col < size):
        return False

    for i, letter in enumerate(word):
        cell = grid[row + d_row * i][col + d_col * i]
        if cell != EMPTY and cell != letter:
            return False

    return True


def write_word(grid: Grid, placement: WordPlacement) -> None:
    """Write a placed word's letters into the grid."""
    d_row, d_col = placement.direction
    for i, letter in enumerate(placement.word):
        grid[placement.start_row + d_row * i][placement.start_col + d_col * i] = letter


def fill_empty_cells(grid: Grid, rng: random.Random) -> None:
    """Fill every unset cell with an independent random letter."""
    for row in grid:
        for col, cell in enumerate(row):
            if cell == EMPTY:
                row[col] = rng.choice(LETTERS)


def try_place_word(
    grid: Grid,
    word: str,
    rng: random.Random,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Optional[WordPlacement]:
    """
    Search for a valid placement using uniformly random start cells and directions.

    Returns the first valid placement found, or None once the attempt budget
    is exhausted. The grid is not modified.
    """
    size = len(grid)
    for _ in range(max_attempts):
        row = rng.randrange(size)
        col = rng.randrange(size)
        direction = rng.choice(DIRECTIONS)

        if can_place_word(grid, word, row, col, direction):
            return WordPlacement(word=word, start_row=row, start_col=col, direction=direction)

    return None


def pick_alternative(
    word: str,
    used_words: Iterable[str],
    category_words: Sequence[str],
    grid_size: int,
    rng: random.Random,
) -> Optional[str]:
    """
    Pick a replacement for a word that could not be placed.

    Candidates come from the same category, are not already used and are
    between 3 letters and 80% of the grid size. Words within two letters of
    the original length are preferred; any candidate is used otherwise.

    Returns:
        An alternative word, or None if the category has nothing suitable
    """
    if not category_words:
        return None

    used: Set[str] = set(used_words)
    max_length = int(grid_size * ALTERNATIVE_MAX_RATIO)

    available = [
        candidate.upper() for candidate in category_words
        if candidate.upper() not in used
        and candidate.upper() != word
        and ALTERNATIVE_MIN_LENGTH <= len(candidate) <= max_length
    ]
    if not available:
        return None

    similar = [c for c in available if abs(len(c) - len(word)) <= SIMILAR_LENGTH_DELTA]
    return rng.choice(similar or available)


def place_words(
    words: Sequence[str],
    grid_size: int,
    rng: Optional[random.Random] = None,
    category_words: Optional[Sequence[str]] = None,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    max_word_variants: int = MAX_WORD_VARIANTS,
) -> PlacementResult:
    """
    Build a grid and place a word list into it.

    Args:
        words: Words to hide (uppercase)
        grid_size: Width and height of the grid
        rng: Random source; pass a seeded Random for reproducible grids
        category_words: Pool to draw substitutes from when a word will not fit
        max_attempts: Random placement trials per word variant
        max_word_variants: Original word plus alternatives tried before giving up

    Returns:
        PlacementResult with the filled grid. Every input word ends up either in
        placed_words (possibly as its substitute) or in failed_words.

    Raises:
        InvalidGridSizeError: If grid_size is not positive
    """
    rng = rng or random.Random()
    grid = empty_grid(grid_size)

    requested = [w.strip().upper() for w in words if w and w.strip()]
    placed_words: List[str] = []
    failed_words: List[str] = []
    placements: List[WordPlacement] = []
    substitutions: Dict[str, str] = {}

    # Longest words first; they are the hardest to fit later
    for word in sorted(requested, key=len, reverse=True):
        current = word
        tried = {word}
        placement = None

        for variant in range(max_word_variants):
            placement = try_place_word(grid, current, rng, max_attempts)
            if placement is not None:
                break

            if variant + 1 >= max_word_variants:
                break

            alternative = pick_alternative(
                current,
                used_words=set(requested) | set(placed_words) | set(failed_words) | tried,
                category_words=category_words or [],
                grid_size=grid_size,
                rng=rng,
            )
            if alternative is None:
                break

            logger.debug("Could not place %s, trying alternative %s", current, alternative)
            tried.add(alternative)
            current = alternative

        if placement is None:
            logger.info("Failed to place %s in %dx%d grid", word, grid_size, grid_size)
            failed_words.append(word)
            continue

        write_word(grid, placement)
        placements.append(placement)
        placed_words.append(current)
        if current != word:
            substitutions[word] = current

    fill_empty_cells(grid, rng)

    return PlacementResult(
        grid=grid,
        placed_words=placed_words,
        failed_words=failed_words,
        placements=placements,
        substitutions=substitutions,
    )
