"""
Calendar mapping for the contribution graph.

Each grid column is one week and each row one weekday, starting on Sunday.
Column 0 is the week that begins 52 weeks before the most recent Sunday.
"""

import datetime
from typing import Optional

WEEKS_IN_GRAPH = 52


def sunday_on_or_before(day: datetime.date) -> datetime.date:
    # date.weekday(): Mon=0..Sun=6
    return day - datetime.timedelta(days=(day.weekday() + 1) % 7)


class DateMapper:
    """
    Map grid cells to calendar dates.

    Args:
        today: Day the graph is anchored on. Defaults to the current date.
    """

    def __init__(self, today: Optional[datetime.date] = None) -> None:
        self.today = today or datetime.date.today()
        self.end_of_last_week = sunday_on_or_before(self.today)
        self.graph_origin = self.end_of_last_week - datetime.timedelta(weeks=WEEKS_IN_GRAPH)

    def date_for(self, row: int, col: int) -> datetime.date:
        """Date of the cell at ``row`` (weekday, Sunday = 0) and ``col`` (week)."""
        return self.graph_origin + datetime.timedelta(days=col * 7 + row)

    def __repr__(self) -> str:
        return f"DateMapper(today={self.today.isoformat()}, origin={self.graph_origin.isoformat()})"
