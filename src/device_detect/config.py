"""
Configuration constants for device detection.

Centralizes viewport thresholds, user-agent keyword sets and rule profiles.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

# Viewport thresholds (device-independent pixels)
MOBILE_MAX_WIDTH: int = 600    # width < 600 -> mobile
TABLET_MAX_WIDTH: int = 1200   # 600 <= width < 1200 -> tablet

# CPU architectures that only ship in desktop machines
DESKTOP_ARCHITECTURES: FrozenSet[str] = frozenset({'amd64', 'x86_64'})

# OS names as reported by the user-agent parser
OS_WINDOWS: str = 'Windows'
OS_MAC: str = 'Mac OS'
OS_LINUX: str = 'Linux'
OS_ANDROID: str = 'Android'
OS_IOS: str = 'iOS'

# User-agent keyword sets (matched against the lowercased user-agent)
MOBILE_KEYWORDS: Tuple[str, ...] = (
    'mobile',
    'mobi',
    'iphone',
    'ipod',
    'android',
    'blackberry',
    'opera mini',
    'iemobile',
)
DESKTOP_MODE_MOBILE_MARKER: str = 'wpdesktop'  # Windows Phone in desktop mode
TABLET_KEYWORDS: Tuple[str, ...] = (
    'ipad',
    'playbook',
    'silk',
    'tablet',
    'kindle',
    'galaxy-tab',
)

# Events that re-run detection
EVENT_RESIZE: str = 'resize'
EVENT_ORIENTATION_CHANGE: str = 'orientationchange'
TRIGGER_EVENTS: Tuple[str, ...] = (EVENT_RESIZE, EVENT_ORIENTATION_CHANGE)


@dataclass(frozen=True)
class RuleProfile:
    """
    Parameters of the classification rule cascade.

    windows_touch_requires_capability: a Windows user-agent containing "touch"
        still counts as desktop unless the host also reports touch support.
    linux_requires_no_touch: the Linux desktop rule only fires on hosts
        without touch support.
    """
    name: str = 'default'
    mobile_keywords: Tuple[str, ...] = MOBILE_KEYWORDS
    tablet_keywords: Tuple[str, ...] = TABLET_KEYWORDS
    match_desktop_mode_marker: bool = False
    desktop_architectures: FrozenSet[str] = DESKTOP_ARCHITECTURES
    windows_touch_requires_capability: bool = False
    linux_requires_no_touch: bool = False

    @property
    def all_mobile_keywords(self) -> Tuple[str, ...]:
        if self.match_desktop_mode_marker:
            return self.mobile_keywords + (DESKTOP_MODE_MOBILE_MARKER,)
        return self.mobile_keywords


DEFAULT_PROFILE = RuleProfile()

STRICT_TOUCH_PROFILE = RuleProfile(
    name='strict',
    match_desktop_mode_marker=True,
    windows_touch_requires_capability=True,
    linux_requires_no_touch=True,
)

PROFILES: Dict[str, RuleProfile] = {
    DEFAULT_PROFILE.name: DEFAULT_PROFILE,
    STRICT_TOUCH_PROFILE.name: STRICT_TOUCH_PROFILE,
}
