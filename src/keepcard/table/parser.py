from __future__ import annotations

import re

"""Delimited text parsing for stock report exports.

Only the comma dialect of the export is supported:
- fields separated by ','
- '"' opens/closes a quoted field, '""' inside quotes is a literal quote
- every field is whitespace-trimmed after assembly
- a quote left open at end of line simply ends the field
"""

__all__ = [
    "split_line",
    "parse_table",
]

DELIMITER = ","
QUOTE = '"'

_LINE_BREAK = re.compile(r"\r?\n")


def split_line(line: str) -> list[str]:
    """Split one line into trimmed fields, honoring quotes.

    >>> split_line('a,"b,c",d')
    ['a', 'b,c', 'd']
    >>> split_line('"x""y"')
    ['x"y']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def parse_table(text: str) -> list[list[str]]:
    """Parse export text into rows, skipping blank lines.

    Row offsets used downstream (header row index etc.) count non-blank lines
    only.
    """
    rows: list[list[str]] = []
    for line in _LINE_BREAK.split(text):
        if line.strip() == "":
            continue
        rows.append(split_line(line))
    return rows
