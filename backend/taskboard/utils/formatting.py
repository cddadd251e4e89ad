from __future__ import annotations
import re

# ------- date helpers -------

def date_part(value: str | None) -> str:
    """Keep what precedes the first 'T': '2024-05-01T00:00:00' -> '2024-05-01'."""
    if not value:
        return ""
    return str(value).split("T", 1)[0]

# ------- id helpers -------

# Leading sign and digits after optional whitespace, like parseInt(s, 10).
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?[0-9]+)")

def parse_int(value: str | int | None) -> int | None:
    """
    Parse a select-box value into an int id.
    '12' -> 12, ' 7abc' -> 7, '' / 'abc' / None -> None (sent on as null).
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    m = _INT_PREFIX_RE.match(value)
    if not m:
        return None
    return int(m.group(1))
