"""
Data models for the contributions drawer.

This module contains the shared data structures used across all modules:
the grid type, the rotating value pools, commit descriptions, the resolved
run configuration and the error types.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

# A grid is a tuple of rows; each row holds one intensity per cell.
Grid = Tuple[Tuple[int, ...], ...]


class ErrorKind(enum.Enum):
    """Every way a drawing run can fail."""
    INVALID_OPTION = "InvalidOption"
    INVALID_CHARACTER = "InvalidCharacter"
    TOO_MANY_ROWS = "TooManyRows"
    RAGGED_GRID = "RaggedGrid"
    ROW_TOO_LONG = "RowTooLong"
    IO_FAILURE = "IOFailure"


@dataclass(frozen=True)
class GridError:
    """A grid decoding or validation failure."""
    kind: ErrorKind
    message: str


class DrawError(Exception):
    """
    Raised when a run cannot continue.

    Args:
        kind: The ErrorKind describing the failure.
        message: Human readable, single line description.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class ParseResult:
    """Either a validated grid or the first error found while building it."""
    grid: Grid = ()
    error: Optional[GridError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Grid:
        """
        Return the grid, raising the stored error instead if there is one.

        Raises:
            DrawError: If parsing or validation failed
        """
        if self.error is not None:
            raise DrawError(self.error.kind, self.error.message)
        return self.grid


class RotatingPool:
    """
    Cycle endlessly through a fixed, non-empty list of strings.

    Each call to next() returns the value under the cursor and moves the
    cursor forward, wrapping back to the first value after the last one.

    Args:
        values: The values to cycle through, in order.

    Raises:
        ValueError: If values is empty
    """

    def __init__(self, values: Iterable[str]) -> None:
        self.values: Tuple[str, ...] = tuple(values)
        if not self.values:
            raise ValueError("RotatingPool needs at least one value")
        self.index = 0

    def next(self) -> str:
        result = self.values[self.index]
        self.index = (self.index + 1) % len(self.values)
        return result

    def __iter__(self) -> "RotatingPool":
        return self

    def __next__(self) -> str:
        return self.next()

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"RotatingPool({list(self.values)!r}, index={self.index})"


@dataclass(frozen=True)
class CommitSpec:
    """Represents a single empty commit to be created."""
    name: str
    email: str
    message: str
    date: datetime.date
    minute: int

    @property
    def timestamp(self) -> str:
        """Author and committer date, e.g. ``2024-03-10 10:07:00``."""
        return f"{self.date.isoformat()} 10:{self.minute:02d}:00"


@dataclass(frozen=True)
class DrawConfig:
    """
    Fully resolved configuration for one run.

    ``None`` for input_path or output_path means standard input or standard
    output. names, emails and messages are never empty once resolved.
    """
    names: Sequence[str]
    emails: Sequence[str]
    messages: Sequence[str]
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    today: Optional[datetime.date] = None
    verbose: int = 0
