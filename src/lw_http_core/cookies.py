"""
Cookie extraction from raw Set-Cookie header text.
"""

import re
from enum import Enum
from typing import Optional


class CookieMatch(Enum):
    """How a cookie name is located in the header text."""
    SUBSTRING = "substring"  # First raw substring match
    TOKEN = "token"          # Name must start a pair and be followed by '='


def extract_cookie(
    raw: str,
    name: str,
    match: CookieMatch = CookieMatch.SUBSTRING,
) -> Optional[str]:
    """
    Extract the value of a named cookie.

    In SUBSTRING mode the first case-sensitive occurrence of ``name`` is
    taken as the cookie, and the character right after it is assumed to
    be '='. A name contained in another cookie's name ("id" inside
    "userid=5") therefore matches that cookie. TOKEN mode only accepts
    ``name`` at the start of the text or after ';' or ',', followed by '='.

    Args:
        raw: The raw Set-Cookie header value
        name: The cookie name to look for
        match: Matching mode

    Returns:
        The cookie value up to the next ';', or None if no cookie matches
        or name is empty
    """
    if not name:
        return None

    if match is CookieMatch.TOKEN:
        pattern = r"(?:^|[;,])\s*" + re.escape(name) + r"=([^;]*)"
        found = re.search(pattern, raw)
        return found.group(1) if found else None

    start = raw.find(name)
    if start < 0:
        return None

    start += len(name) + 1
    end = raw.find(";", start)
    if end < 0:
        return raw[start:]
    return raw[start:end]
