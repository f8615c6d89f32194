"""Coordinate parsing for text front-ends."""

import re
from typing import List, Tuple

from .models import Coordinate, ParseError


# Separators between points: whitespace, '-', '->' or ';'
_SPLIT = re.compile(r'\s*(?:->|;|\s-\s|\s)\s*')
_POINT = re.compile(r'^\(?\s*(\d+)\s*,\s*(\d+)\s*\)?$')


def parse_selection(text: str) -> Tuple[List[Coordinate], List[ParseError]]:
    """
    Parse typed coordinates such as "0,0 4,4" or "(1,2)->(1,6)".

    Each point is "x,y" with x the column and y the row.

    Returns a tuple of (coordinates, errors).
    """
    coordinates: List[Coordinate] = []
    errors: List[ParseError] = []

    tokens = [t for t in _SPLIT.split(text.strip()) if t]

    if not tokens:
        errors.append(ParseError(
            code="EMPTY_SELECTION",
            message="No coordinates given"
        ))
        return coordinates, errors

    for i, token in enumerate(tokens, start=1):
        match = _POINT.match(token)
        if not match:
            errors.append(ParseError(
                code="INVALID_POINT",
                message=f"Invalid coordinate '{token}', expected x,y",
                token=token,
                position=i
            ))
            continue

        coordinates.append(Coordinate(int(match.group(1)), int(match.group(2))))

    return coordinates, errors
