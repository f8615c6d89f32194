"""Data models for grid placement and selection."""

from typing import Dict, List, Literal, NamedTuple, Optional
from pydantic import BaseModel, Field


# Row-major letter matrix
Grid = List[List[str]]


class Coordinate(NamedTuple):
    """A grid cell as seen by the presentation layer (x = column, y = row)."""
    x: int
    y: int


class Direction(NamedTuple):
    """A unit step through the grid."""
    d_row: int
    d_col: int


class WordPlacement(BaseModel):
    """Where a word was written into the grid."""
    word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    start_row: int = Field(..., ge=0)
    start_col: int = Field(..., ge=0)
    direction: Direction

    @property
    def cells(self) -> List[Coordinate]:
        """Every coordinate covered by the word, in reading order."""
        d_row, d_col = self.direction
        return [
            Coordinate(self.start_col + d_col * i, self.start_row + d_row * i)
            for i in range(len(self.word))
        ]

    @property
    def end(self) -> Coordinate:
        return self.cells[-1]


class PlacementResult(BaseModel):
    """Outcome of placing a word list into a fresh grid."""
    grid: Grid
    placed_words: List[str] = Field(default_factory=list)
    failed_words: List[str] = Field(default_factory=list)
    placements: List[WordPlacement] = Field(default_factory=list)
    substitutions: Dict[str, str] = Field(default_factory=dict)  # original -> substitute

    @property
    def size(self) -> int:
        return len(self.grid)

    def placement_for(self, word: str) -> Optional[WordPlacement]:
        """Look up the placement of a placed word."""
        for placement in self.placements:
            if placement.word == word:
                return placement
        return None


SelectionStatus = Literal["match", "no_match", "invalid_geometry", "out_of_bounds", "too_short"]


class SelectionOutcome(BaseModel):
    """Detailed result of checking a selection against the grid."""
    status: SelectionStatus
    word: Optional[str] = None  # Canonical word from the word list on a match
    candidate: str = ""  # Letters read along the selection
    cells: List[Coordinate] = Field(default_factory=list)
    reversed: bool = False


class ParseError(BaseModel):
    """A problem found while reading typed coordinates."""
    code: str
    message: str
    token: Optional[str] = None
    position: Optional[int] = None
