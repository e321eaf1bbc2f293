"""
User-agent parser adapter.

Wraps the user-agents library and reduces its result to the three fields the
classifier consumes: device type, OS name and CPU architecture. Fail-open:
unknown or unparsable user-agents return an empty ParsedUserAgent.
"""

import logging
import re
from typing import Optional, Pattern, Tuple

from user_agents import parse as parse_user_agent

from .types import DeviceType, ParsedUserAgent

logger = logging.getLogger(__name__)

# ua-parser reports unknown fields as "Other"
_UNKNOWN_FAMILY = 'Other'

# Parser OS families mapped to the names used by the rule cascade
_OS_FAMILY_ALIASES = {
    'Mac OS X': 'Mac OS',
    'macOS': 'Mac OS',
    'iPadOS': 'iOS',
}

_WINDOWS_MOBILE_FAMILIES = frozenset({'Windows Phone', 'Windows Mobile', 'Windows CE'})

# The parser does not report CPU architecture, it is read from the raw string
_ARCHITECTURE_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r'\b(?:(?:amd|x(?:(?:86|64)[-_])?|wow|win)64)[;)]', re.IGNORECASE), 'amd64'),
    (re.compile(r'\b(?:i[3-6]86|ia32|x86)\b', re.IGNORECASE), 'ia32'),
    (re.compile(r'\b(?:aarch64|arm(?:v?8e?l?|_?64))\b', re.IGNORECASE), 'arm64'),
    (re.compile(r'\barm(?:v?[67]l?|hf)\b', re.IGNORECASE), 'armhf'),
    (re.compile(r'\b(?:ppc(?:64)?|powerpc)\b', re.IGNORECASE), 'ppc'),
)


def normalize_os_name(family: Optional[str]) -> str:
    """
    Map a parser OS family to the rule cascade's OS name.

    Args:
        family: OS family reported by the parser

    Returns:
        Normalized OS name, "" when unknown
    """
    if not family or family == _UNKNOWN_FAMILY:
        return ""
    if family in _OS_FAMILY_ALIASES:
        return _OS_FAMILY_ALIASES[family]
    if family.startswith('Windows') and family not in _WINDOWS_MOBILE_FAMILIES:
        return 'Windows'
    return family


def detect_cpu_architecture(user_agent: str) -> str:
    """Return the CPU architecture token found in a user-agent, "" if none."""
    if not user_agent:
        return ""
    for pattern, architecture in _ARCHITECTURE_PATTERNS:
        if pattern.search(user_agent):
            return architecture
    return ""


class UserAgentParser:
    """
    Parse raw user-agent strings into ParsedUserAgent.

    Behavior:
        - Fail-open: returns an empty result on parse errors
        - Stateless: safe to share between sessions
    """

    def parse(self, user_agent: Optional[str]) -> ParsedUserAgent:
        if not user_agent:
            return ParsedUserAgent()

        try:
            ua = parse_user_agent(user_agent)
        except Exception as e:
            logger.warning(f"Failed to parse user agent {user_agent[:100]!r}: {e}")
            return ParsedUserAgent()

        if ua.is_tablet:
            device_type = DeviceType.TABLET
        elif ua.is_mobile:
            device_type = DeviceType.MOBILE
        else:
            device_type = DeviceType.NONE

        return ParsedUserAgent(
            device_type=device_type,
            os_name=normalize_os_name(ua.os.family),
            cpu_architecture=detect_cpu_architecture(user_agent),
        )
