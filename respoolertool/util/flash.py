#  Copyright (c) LTS Design 2026-10-17.

from dataclasses import dataclass
from math import floor
from typing import List, Union

from prettytable import PrettyTable


@dataclass(frozen=True)
class ProgressState:
    percent: int = 0
    label: str = ""
    is_error: bool = False


def percent_of(written: int, total: int) -> int:
    """Convert a (written, total) byte count into a whole percentage, rounding half up."""
    if total <= 0:
        return 0
    percent = floor(written * 100 / total + 0.5)
    return max(0, min(100, percent))


def format_guide(items: List[Union[str, list]]) -> List[str]:
    """
    Render a guide made of paragraphs and two-column tables as text lines.

    Each item is either a (possibly multi-line) string, or a list of
    (left, right) tuples whose first element is the table header.
    """
    guide = []
    for item in items:
        if isinstance(item, str):
            if guide:
                guide.append(" ")
            guide += item.splitlines()
        elif isinstance(item, list):
            table = PrettyTable()
            left, right = item[0]
            table.field_names = [left, right]
            table.align[left] = "r"
            table.align[right] = "l"
            for row in item[1:]:
                table.add_row(list(row))
            if guide:
                guide.append("")
            for line in table.get_string().splitlines():
                guide.append(f"    {line}")
    return guide
