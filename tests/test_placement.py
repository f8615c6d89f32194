"""
Test suite for the grid placement engine.

Covers:
- Grid validity for every difficulty size
- Placement soundness, checked with the independent find_word scanner
- Failure accounting with and without substitution
- Words that can never fit
- Invalid grid sizes
"""

import random

import pytest

from wordsearch.errors import InvalidGridSizeError
from wordsearch.grid import (
    DIRECTIONS,
    Direction,
    WordPlacement,
    can_place_word,
    empty_grid,
    find_word,
    grid_is_valid,
    pick_alternative,
    place_words,
    word_exists_in_grid,
)
from wordsearch.game import GRID_SIZES, DEFAULT_CATEGORIES


ANIMALS = DEFAULT_CATEGORIES["animals"]


class TestGridValidity:
    """Generated grids are fully filled with A-Z letters."""

    @pytest.mark.parametrize("difficulty,size", sorted(GRID_SIZES.items()))
    def test_grid_size_per_difficulty(self, difficulty, size):
        """Grid dimensions match the configured size."""
        result = place_words(ANIMALS[:5], size, rng=random.Random(3))
        assert len(result.grid) == size
        assert all(len(row) == size for row in result.grid)
        assert grid_is_valid(result.grid, size)

    def test_every_cell_is_a_letter(self):
        """No cell is left unset after filling."""
        result = place_words(["CAT"], 6, rng=random.Random(0))
        for row in result.grid:
            for cell in row:
                assert len(cell) == 1
                assert "A" <= cell <= "Z"

    def test_empty_word_list_still_fills_grid(self):
        """An empty word list gives a random but valid grid."""
        result = place_words([], 5, rng=random.Random(0))
        assert result.placed_words == []
        assert result.failed_words == []
        assert grid_is_valid(result.grid, 5)

    def test_same_seed_same_grid(self):
        """A seeded random source makes placement reproducible."""
        first = place_words(ANIMALS[:8], 10, rng=random.Random(42))
        second = place_words(ANIMALS[:8], 10, rng=random.Random(42))
        assert first.grid == second.grid
        assert first.placed_words == second.placed_words


class TestPlacementSoundness:
    """Every placed word can be found by scanning the grid."""

    @pytest.mark.parametrize("seed", range(5))
    def test_placed_words_found_by_scanner(self, seed):
        """The scanner finds each placed word in one of the 8 directions."""
        result = place_words(ANIMALS[:8], 10, rng=random.Random(seed))
        for word in result.placed_words:
            assert word_exists_in_grid(result.grid, word), word

    def test_placements_match_grid_contents(self):
        """Recorded placements point at the word's letters."""
        result = place_words(["TIGER", "ZEBRA", "OWL"], 8, rng=random.Random(1))
        for placement in result.placements:
            letters = "".join(result.grid[cell.y][cell.x] for cell in placement.cells)
            assert letters == placement.word

    def test_placed_words_are_longest_first(self):
        """Longer words are placed before shorter ones."""
        result = place_words(["OWL", "ELEPHANT", "TIGER"], 10, rng=random.Random(5))
        lengths = [len(w) for w in result.placed_words]
        assert lengths == sorted(lengths, reverse=True)

    def test_words_are_uppercased(self):
        """Lowercase input is placed in uppercase."""
        result = place_words(["cat"], 5, rng=random.Random(2))
        assert result.placed_words == ["CAT"]
        assert word_exists_in_grid(result.grid, "CAT")


class TestFailureAccounting:
    """Each word slot ends up placed or failed."""

    def test_accounting_without_substitution(self):
        """Without substitution, placed + failed equals the input length."""
        words = ANIMALS[:8]
        result = place_words(words, 10, rng=random.Random(7))
        assert len(result.placed_words) + len(result.failed_words) == len(words)
        assert result.substitutions == {}

    def test_word_longer_than_grid_fails(self):
        """A word longer than the grid can never be placed."""
        result = place_words(["ELEPHANT"], 5, rng=random.Random(0))
        assert result.placed_words == []
        assert result.failed_words == ["ELEPHANT"]

    def test_long_word_fails_even_with_category(self):
        """With no usable alternative the original is reported failed."""
        result = place_words(
            ["ELEPHANT"], 5,
            rng=random.Random(0),
            category_words=["ELEPHANT", "GIRAFFE"],
        )
        assert result.placed_words == []
        assert result.failed_words == ["ELEPHANT"]

    def test_accounting_with_substitution(self):
        """A substituted word replaces its slot instead of adding one."""
        result = place_words(
            ["ELEPHANT", "CAT"], 5,
            rng=random.Random(0),
            category_words=["ELEPHANT", "CAT", "DOG"],
        )
        assert result.failed_words == []
        assert sorted(result.placed_words) == ["CAT", "DOG"]
        assert result.substitutions == {"ELEPHANT": "DOG"}
        assert len(result.placed_words) + len(result.failed_words) == 2
        assert "ELEPHANT" not in result.placed_words

    def test_substitute_is_in_grid(self):
        """The substitute is really written into the grid."""
        result = place_words(
            ["ELEPHANT"], 5,
            rng=random.Random(0),
            category_words=["ELEPHANT", "OWL"],
        )
        assert result.placed_words == ["OWL"]
        assert word_exists_in_grid(result.grid, "OWL")
        assert result.placement_for("OWL") is not None

    def test_duplicate_words_attempted_independently(self):
        """Duplicate input words each get their own slot."""
        result = place_words(["CAT", "CAT"], 6, rng=random.Random(4))
        assert len(result.placed_words) + len(result.failed_words) == 2


class TestInvalidGridSize:
    """Grid size must be positive."""

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_size_raises(self, size):
        """Grids need at least one row."""
        with pytest.raises(InvalidGridSizeError):
            place_words(["CAT"], size)

    def test_error_is_value_error(self):
        """The grid size error is also a ValueError."""
        with pytest.raises(ValueError):
            empty_grid(0)


class TestCanPlaceWord:
    """Bounds and crossing rules for a single placement."""

    def test_fits_in_empty_grid(self):
        """A word fits across an empty grid."""
        grid = empty_grid(5)
        assert can_place_word(grid, "CAT", 0, 0, Direction(0, 1)) is True

    def test_runs_off_grid(self):
        """A word cannot run past the edge."""
        grid = empty_grid(5)
        assert can_place_word(grid, "CAT", 0, 3, Direction(0, 1)) is False

    def test_crossing_on_same_letter(self):
        """Words may share a cell holding the same letter."""
        grid = empty_grid(5)
        grid[0][2] = "T"
        assert can_place_word(grid, "CAT", 0, 0, Direction(0, 1)) is True

    def test_conflicting_letter(self):
        """A word cannot overwrite a different letter."""
        grid = empty_grid(5)
        grid[0][1] = "X"
        assert can_place_word(grid, "CAT", 0, 0, Direction(0, 1)) is False

    def test_all_directions_available(self):
        """Each of the 8 directions fits from the centre of a 5x5 grid."""
        grid = empty_grid(5)
        for direction in DIRECTIONS:
            assert can_place_word(grid, "CAT", 2, 2, direction)


class TestPickAlternative:
    """Choosing a substitute word."""

    def test_prefers_similar_length(self):
        """Alternatives come from words within two letters of the original."""
        alternative = pick_alternative(
            "TIGER",
            used_words={"TIGER"},
            category_words=["OWL", "ZEBRA", "CROCODILES"],
            grid_size=8,
            rng=random.Random(0),
        )
        assert alternative in {"OWL", "ZEBRA"}

    def test_skips_used_words(self):
        """Words already in the grid are not offered again."""
        alternative = pick_alternative(
            "TIGER",
            used_words={"TIGER", "ZEBRA"},
            category_words=["ZEBRA", "HORSE"],
            grid_size=8,
            rng=random.Random(0),
        )
        assert alternative == "HORSE"

    def test_respects_max_length(self):
        """Alternatives longer than 80% of the grid are not offered."""
        alternative = pick_alternative(
            "ELEPHANT",
            used_words={"ELEPHANT"},
            category_words=["GIRAFFE"],
            grid_size=5,
            rng=random.Random(0),
        )
        assert alternative is None

    def test_no_category(self):
        """No category words means no alternative."""
        assert pick_alternative("CAT", set(), [], 5, random.Random(0)) is None


class TestFindWord:
    """The scanning oracle itself."""

    def test_finds_backward_word(self):
        """Words written right to left are found."""
        grid = [list("TACXX") for _ in range(5)]
        placement = find_word(grid, "CAT")
        assert placement == WordPlacement(word="CAT", start_row=0, start_col=2, direction=Direction(0, -1))

    def test_missing_word(self):
        """A word that is not in the grid is not found."""
        grid = [list("XXXXX") for _ in range(5)]
        assert find_word(grid, "CAT") is None
