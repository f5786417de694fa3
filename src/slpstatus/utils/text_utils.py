"""
Text processing utilities for status display.

Common text operations like formatting-code stripping and summary strings.
"""

import re

FORMATTING_CODE = re.compile(r"§.", re.DOTALL)


def strip_formatting_codes(text: str) -> str:
    """
    Remove legacy section-sign formatting codes from text.

    Args:
        text: Text possibly containing codes like "§a" or "§l"

    Returns:
        Text with every "§x" pair removed

    Examples:
        >>> strip_formatting_codes("§aGreen §lBold")
        'Green Bold'
        >>> strip_formatting_codes("plain")
        'plain'
    """
    return FORMATTING_CODE.sub("", text)


def format_player_count(online: int, max_players: int) -> str:
    """
    Format a player count for display.

    Examples:
        >>> format_player_count(5, 20)
        '5/20'
    """
    return f"{online}/{max_players}"


def truncate(text: str, limit: int = 80) -> str:
    """
    Shorten text to at most `limit` characters, marking the cut with "...".

    Examples:
        >>> truncate("abcdef", 5)
        'ab...'
        >>> truncate("abc", 5)
        'abc'
    """
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."
