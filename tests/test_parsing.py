import pytest

from wordsearch.grid import Coordinate, parse_selection


class TestParseSelection:
    """Typed coordinate input."""

    def test_space_separated(self):
        """Points separated by spaces."""
        points, errors = parse_selection("0,0 4,4")
        assert errors == []
        assert points == [Coordinate(0, 0), Coordinate(4, 4)]

    def test_arrow_with_parens(self):
        """Points in parentheses joined by an arrow."""
        points, errors = parse_selection("(1,2)->(1,6)")
        assert errors == []
        assert points == [Coordinate(1, 2), Coordinate(1, 6)]

    @pytest.mark.parametrize("text", ["1,2;3,4", "1,2 - 3,4", "  1,2   3,4  "])
    def test_other_separators(self, text):
        """Semicolons, dashes and extra spaces also separate points."""
        points, errors = parse_selection(text)
        assert errors == []
        assert points == [Coordinate(1, 2), Coordinate(3, 4)]

    def test_full_path(self):
        """Every cell of a path can be given."""
        points, errors = parse_selection("0,0 1,0 2,0")
        assert errors == []
        assert len(points) == 3

    def test_empty_input(self):
        """Blank input is an empty selection error."""
        points, errors = parse_selection("   ")
        assert points == []
        assert len(errors) == 1
        assert errors[0].code == "EMPTY_SELECTION"

    def test_invalid_point(self):
        """Bad tokens are reported with their position; good ones still parse."""
        points, errors = parse_selection("0,0 a,b")
        assert points == [Coordinate(0, 0)]
        assert len(errors) == 1
        assert errors[0].code == "INVALID_POINT"
        assert errors[0].token == "a,b"
        assert errors[0].position == 2

    def test_negative_numbers_rejected(self):
        """Negative coordinates are not accepted."""
        _, errors = parse_selection("-1,0 2,0")
        assert errors
