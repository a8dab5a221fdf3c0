# src/fitcoach/parsing/extractors.py
"""
Pull single fields out of model text that is JSON-shaped but not necessarily
valid JSON as a whole (prose around it, truncated tail, trailing commentary).
"""

import re
from typing import Optional

_PAIRS = {"{": "}", "[": "]"}


def extract_bracket_block(source: str, field_name: str, open_char: str, close_char: str) -> Optional[str]:
    """
    Return the balanced `{...}` / `[...]` value following `"field_name"`,
    delimiters included, or None if the field is missing, nothing opens after
    it, or the block never closes.

    Only the chosen delimiter pair is counted; brackets inside string values
    are not special-cased. The returned text is not guaranteed to be JSON.
    """
    if _PAIRS.get(open_char) != close_char:
        raise ValueError(f"unsupported delimiter pair {open_char!r}/{close_char!r}")

    field_index = source.find(f'"{field_name}"')
    if field_index == -1:
        return None

    first_open = source.find(open_char, field_index)
    if first_open == -1:
        return None

    depth = 0
    for i in range(first_open, len(source)):
        ch = source[i]
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return source[first_open:i + 1]
    return None


def extract_string_field(source: str, field_name: str) -> Optional[str]:
    """Value of the first `"field_name": "..."` pair. Stops at the first quote, escaped or not."""
    match = re.search(rf'"{re.escape(field_name)}"\s*:\s*"([^"]*)"', source)
    return match.group(1) if match else None
