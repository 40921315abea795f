"""
Shared helpers so the GUI and the CLI read form input the same way.
"""
from typing import Optional, Union


def parse_number(text: Union[str, int, None]) -> Optional[int]:
    """Turn raw field text into an int; blank or non-integer text becomes None."""
    if text is None or isinstance(text, int):
        return text
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def format_optional(value: Optional[int]) -> str:
    return "" if value is None else str(value)
