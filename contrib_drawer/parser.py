"""
Grid parsing and validation module.

This module turns the ASCII source of a drawing into a grid of commit
intensities. Every character is one cell holding a base-36 digit, and
``|`` characters may be used freely as visual column guides.
"""

import logging
import string
from typing import Dict, List, Optional, Tuple

from .models import ErrorKind, Grid, GridError, ParseResult

logger = logging.getLogger("contrib-drawer.parser")

MAX_ROWS = 7
# Help text talks about 52 weeks, but two extra columns have always been accepted.
MAX_ROW_LENGTH = 54
SEPARATOR = "|"
_WHITESPACE = " \t\n\v\f\r\0"

_DIGIT_VALUES: Dict[str, int] = {}
for _value, _char in enumerate(string.digits + string.ascii_lowercase):
    _DIGIT_VALUES[_char] = _value
    _DIGIT_VALUES[_char.upper()] = _value


class InvalidCharacter(ValueError):
    """A cell character that is not a base-36 digit."""

    def __init__(self, char: str) -> None:
        super().__init__(f"invalid character {char!r}")
        self.char = char


class GridParser:
    """
    Parse drawing source text into a validated grid.

    Parsing never raises for bad input and never exits; failures come back
    as the ``error`` of the returned ParseResult so the caller decides how
    to report them.
    """

    @staticmethod
    def decode_cell(char: str) -> int:
        """
        Decode one base-36 digit (``0``-``9``, then ``a``-``z`` in any case).

        Raises:
            InvalidCharacter: If char is not a base-36 digit
        """
        try:
            return _DIGIT_VALUES[char]
        except KeyError:
            raise InvalidCharacter(char) from None

    @staticmethod
    def split_lines(text: str) -> List[str]:
        """
        Strip each line and drop the visual column separators.

        Only ``\\n`` ends a line; other Unicode line breaks stay inside the
        line and are rejected as cells.
        """
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line.strip(_WHITESPACE).replace(SEPARATOR, "") for line in lines]

    @classmethod
    def parse(cls, text: str) -> ParseResult:
        """
        Decode and validate a drawing.

        Args:
            text: Raw drawing source, one grid row per line

        Returns:
            ParseResult holding either the grid or the first error found
        """
        rows: List[Tuple[int, ...]] = []
        for line_no, line in enumerate(cls.split_lines(text), 1):
            cells = []
            for col_no, char in enumerate(line, 1):
                try:
                    cells.append(cls.decode_cell(char))
                except InvalidCharacter as e:
                    message = f"{e} at line {line_no}, column {col_no}"
                    logger.debug("Rejecting source: %s", message)
                    return ParseResult(error=GridError(ErrorKind.INVALID_CHARACTER, message))
            rows.append(tuple(cells))

        grid: Grid = tuple(rows)
        error = cls.validate(grid)
        if error is not None:
            logger.debug("Rejecting source: %s", error.message)
            return ParseResult(error=error)

        logger.info("Parsed grid with %d rows and %d columns", len(grid), len(grid[0]) if grid else 0)
        return ParseResult(grid=grid)

    @staticmethod
    def validate(grid: Grid) -> Optional[GridError]:
        """
        Check the grid shape. The first failing check wins.

        An empty grid is valid and simply draws nothing.
        """
        if len(grid) > MAX_ROWS:
            return GridError(
                ErrorKind.TOO_MANY_ROWS,
                f"source should not contain more than {MAX_ROWS} lines",
            )
        if len({len(row) for row in grid}) > 1:
            return GridError(ErrorKind.RAGGED_GRID, "source lines differ in length")
        if any(len(row) > MAX_ROW_LENGTH for row in grid):
            return GridError(
                ErrorKind.ROW_TOO_LONG,
                f"source contains lines longer than {MAX_ROW_LENGTH} chars",
            )
        return None
