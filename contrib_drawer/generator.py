"""
Commit script generation module.

This module contains the CommitScriptGenerator class responsible for turning
a validated grid into a POSIX shell script that creates one backdated, empty
commit per unit of cell intensity.
"""

import logging
import shlex
from typing import Iterator, List, Sequence, TextIO, Tuple

from .dates import DateMapper
from .models import CommitSpec, Grid, RotatingPool

logger = logging.getLogger("contrib-drawer.generator")

PREAMBLE: Tuple[str, ...] = ("#!/bin/sh", "", "git add .", "")


def commit_count(grid: Grid) -> int:
    """Total number of commits a grid will produce."""
    return sum(sum(row) for row in grid)


class CommitScriptGenerator:
    """
    Compose the shell script that draws a grid on the contribution graph.

    Names, emails and messages are drawn round-robin, one of each per
    commit, in row-major cell order. The output depends only on the grid,
    the value lists and the date mapper's anchor day.

    Args:
        names: Author and committer names to rotate through
        emails: Author and committer emails to rotate through
        messages: Commit messages to rotate through
        date_mapper: Maps cells to commit dates
    """

    def __init__(
        self,
        names: Sequence[str],
        emails: Sequence[str],
        messages: Sequence[str],
        date_mapper: DateMapper,
    ) -> None:
        self.names = RotatingPool(names)
        self.emails = RotatingPool(emails)
        self.messages = RotatingPool(messages)
        self.date_mapper = date_mapper

    def iter_commits(self, grid: Grid) -> Iterator[List[CommitSpec]]:
        """
        Yield the commits of every non-empty cell, one list per cell.

        Pools advance as commits are produced, so each call continues the
        rotation where the previous one stopped.
        """
        for row_idx, row in enumerate(grid):
            for col_idx, count in enumerate(row):
                if count <= 0:
                    continue
                date = self.date_mapper.date_for(row_idx, col_idx)
                yield [
                    CommitSpec(
                        name=self.names.next(),
                        email=self.emails.next(),
                        message=self.messages.next(),
                        date=date,
                        minute=minute,
                    )
                    for minute in range(count)
                ]

    @staticmethod
    def format_commit(commit: CommitSpec) -> str:
        """
        Render one commit as a single, safely quoted shell command.

        Newlines inside a value are kept verbatim within its quotes, so a
        multi-line message spans several physical lines of the script while
        still being one command.
        """
        timestamp = shlex.quote(commit.timestamp)
        name = shlex.quote(commit.name)
        email = shlex.quote(commit.email)
        parts = [
            f"GIT_AUTHOR_DATE={timestamp}",
            f"GIT_COMMITTER_DATE={timestamp}",
            f"GIT_AUTHOR_NAME={name}",
            f"GIT_COMMITTER_NAME={name}",
            f"GIT_AUTHOR_EMAIL={email}",
            f"GIT_COMMITTER_EMAIL={email}",
            f"git commit --allow-empty --allow-empty-message -m {shlex.quote(commit.message)}",
        ]
        return " ".join(parts)

    def generate_lines(self, grid: Grid) -> List[str]:
        """
        Build the script as a list of lines, without line terminators.

        Args:
            grid: A grid that already passed validation

        Returns:
            The preamble followed by one block per non-empty cell; each
            block holds one line per commit and ends with a blank line.
        """
        lines: List[str] = list(PREAMBLE)
        blocks = 0
        for block in self.iter_commits(grid):
            logger.debug("%d commits on %s", len(block), block[0].date)
            lines.extend(self.format_commit(commit) for commit in block)
            lines.append("")
            blocks += 1

        if blocks:
            logger.info("Generated %d commits in %d cells", len(lines) - len(PREAMBLE) - blocks, blocks)
        else:
            logger.info("Grid is empty, only the preamble will be written")
        return lines

    def generate_script(self, grid: Grid) -> str:
        return "".join(line + "\n" for line in self.generate_lines(grid))

    def write_script(self, grid: Grid, stream: TextIO) -> None:
        """
        Write the script to an open text stream and flush it.

        I/O errors from the stream propagate to the caller.
        """
        for line in self.generate_lines(grid):
            stream.write(line + "\n")
        stream.flush()
