"""
User-agent signature detection for device classification.

Implements deterministic checks against the raw user-agent string for:
- Mobile browser/device keywords
- Samsung Galaxy Tab brand and model numbers
- Kindle Fire hardware tokens
- Generic tablet keywords
"""

import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple

# "samsung" or the "SM-T" model prefix used by Galaxy Tab devices
SAMSUNG_TABLET_PATTERN = re.compile(r'samsung|sm-t', re.IGNORECASE)

# SM-X70* (Galaxy Tab S8) and SM-X80* (Galaxy Tab S9)
SAMSUNG_TAB_S8_S9_PATTERN = re.compile(r'sm-x70[0-9]|sm-x80[0-9]', re.IGNORECASE)

# Kindle Fire model numbers start with "KF" (KFTHWI, KFAPWI, ...)
KINDLE_FIRE_PATTERN = re.compile(r'kf[a-z]+', re.IGNORECASE)


@lru_cache(maxsize=32)
def keyword_pattern(keywords: Tuple[str, ...]) -> Optional[Pattern]:
    """
    Compile a keyword set into a single case-insensitive alternation.

    Returns None for an empty keyword set.
    """
    escaped = [re.escape(k) for k in keywords if k]
    if not escaped:
        return None
    return re.compile('|'.join(escaped), re.IGNORECASE)


def _search(pattern: Optional[Pattern], user_agent: str) -> Tuple[bool, Optional[str]]:
    if pattern is None or not user_agent:
        return False, None
    match = pattern.search(user_agent)
    if match is None:
        return False, None
    return True, match.group(0).lower()


def detect_mobile_keyword(user_agent: str, keywords: Iterable[str]) -> Tuple[bool, Optional[str]]:
    """
    Detect mobile browser/device keywords.

    Args:
        user_agent: User-agent string (any case)
        keywords: Keyword set to match

    Returns:
        Tuple of (detected: bool, matched_token: Optional[str])
    """
    return _search(keyword_pattern(tuple(keywords)), user_agent)


def detect_tablet_keyword(user_agent: str, keywords: Iterable[str]) -> Tuple[bool, Optional[str]]:
    """
    Detect generic tablet keywords (iPad, PlayBook, Silk, Kindle, ...).

    Returns:
        Tuple of (detected: bool, matched_token: Optional[str])
    """
    return _search(keyword_pattern(tuple(keywords)), user_agent)


def detect_samsung_tablet(user_agent: str) -> Tuple[bool, Optional[str]]:
    """
    Detect Samsung Galaxy Tab user-agents.

    The brand match alone is sufficient. When a Galaxy Tab S8/S9 model
    number is also present it is reported in the notes.

    Returns:
        Tuple of (detected: bool, notes: Optional[str])
    """
    detected, token = _search(SAMSUNG_TABLET_PATTERN, user_agent)
    if not detected:
        return False, None

    model_detected, model = _search(SAMSUNG_TAB_S8_S9_PATTERN, user_agent)
    if model_detected:
        return True, f"galaxy tab s8/s9 model {model}"
    return True, f"samsung brand token {token}"


def detect_kindle_fire(user_agent: str) -> Tuple[bool, Optional[str]]:
    """
    Detect Kindle Fire hardware tokens ("KF" followed by letters).

    Returns:
        Tuple of (detected: bool, matched_token: Optional[str])
    """
    return _search(KINDLE_FIRE_PATTERN, user_agent)


def contains(user_agent: str, token: str) -> bool:
    """Case-insensitive substring check that treats empty input as no match."""
    if not user_agent or not token:
        return False
    return token.lower() in user_agent.lower()
