"""Grid generation and selection checking for word search puzzles."""

from .models import (
    Grid,
    Coordinate,
    Direction,
    WordPlacement,
    PlacementResult,
    SelectionOutcome,
    ParseError,
)
from .directions import DIRECTIONS, direction_between, direction_name
from .placement import place_words, can_place_word, fill_empty_cells, pick_alternative, empty_grid
from .selection import (
    validate_selection,
    check_selection,
    selection_path,
    snap_endpoint,
    match_word,
    MIN_WORD_LENGTH,
)
from .grid import find_word, find_all_words, word_exists_in_grid, render_grid, grid_is_valid
from .parsing import parse_selection

__all__ = [
    # Models
    "Grid",
    "Coordinate",
    "Direction",
    "WordPlacement",
    "PlacementResult",
    "SelectionOutcome",
    "ParseError",
    # Directions
    "DIRECTIONS",
    "direction_between",
    "direction_name",
    # Placement
    "place_words",
    "can_place_word",
    "fill_empty_cells",
    "pick_alternative",
    "empty_grid",
    # Selection
    "validate_selection",
    "check_selection",
    "selection_path",
    "snap_endpoint",
    "match_word",
    "MIN_WORD_LENGTH",
    # Grid utilities
    "find_word",
    "find_all_words",
    "word_exists_in_grid",
    "render_grid",
    "grid_is_valid",
    # Parsing
    "parse_selection",
]
