"""
Type definitions for device detection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class DeviceType(Enum):
    """Device type reported by the user-agent parser."""
    MOBILE = "mobile"
    TABLET = "tablet"
    NONE = "none"


class Category(Enum):
    """Device category resolved for a session."""
    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


class AnchorState(Enum):
    """Stabilizer states."""
    UNANCHORED = "unanchored"
    ANCHORED_DESKTOP = "anchored_desktop"
    ANCHORED_NON_DESKTOP = "anchored_non_desktop"


class RuleEvidence(Enum):
    """Rule that decided a classification step."""
    # Desktop rules
    WINDOWS_NO_TOUCH_UA = "windows_no_touch_ua"
    MAC_NO_TOUCH = "mac_no_touch"
    LINUX_NOT_ANDROID = "linux_not_android"
    DESKTOP_ARCHITECTURE = "desktop_architecture"
    # Shared mobile/tablet rules
    DESKTOP_OVERRIDE = "desktop_override"
    DEVICE_TYPE = "device_type"
    WIDTH_FALLBACK = "width_fallback"
    # Mobile rules
    MOBILE_KEYWORD = "mobile_keyword"
    ANDROID_NARROW = "android_narrow"
    IOS_NOT_IPAD = "ios_not_ipad"
    # Tablet rules
    TABLET_BRAND = "tablet_brand"
    EREADER_HARDWARE = "ereader_hardware"
    TABLET_KEYWORD = "tablet_keyword"
    ANDROID_MEDIUM = "android_medium"
    IOS_IPAD = "ios_ipad"
    WINDOWS_TOUCH = "windows_touch"
    NO_MATCH = "no_match"


@dataclass
class ParsedUserAgent:
    """Structured fields returned by the user-agent parser. Unknown fields stay empty."""
    device_type: DeviceType = DeviceType.NONE
    os_name: str = ""
    cpu_architecture: str = ""


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class EnvironmentSignals:
    """Snapshot of the client environment for one evaluation."""
    device_type: DeviceType
    os_name: str
    cpu_architecture: str
    raw_user_agent: str  # lowercase
    is_touch_capable: bool
    viewport_width: int
    viewport_height: int

    @classmethod
    def build(cls,
              user_agent: Optional[str] = None,
              parsed: Optional[ParsedUserAgent] = None,
              is_touch_capable: Any = False,
              viewport_width: Any = 0,
              viewport_height: Any = 0) -> "EnvironmentSignals":
        """
        Build a normalized snapshot.

        Absent strings become "", the user-agent is lowercased, sizes that
        cannot be read as integers become 0 and unknown device types become
        DeviceType.NONE.
        """
        parsed = parsed or ParsedUserAgent()
        device_type = parsed.device_type if isinstance(parsed.device_type, DeviceType) else DeviceType.NONE
        return cls(
            device_type=device_type,
            os_name=parsed.os_name or "",
            cpu_architecture=(parsed.cpu_architecture or "").lower(),
            raw_user_agent=(user_agent or "").lower(),
            is_touch_capable=bool(is_touch_capable),
            viewport_width=_as_int(viewport_width),
            viewport_height=_as_int(viewport_height),
        )


@dataclass
class ClassificationResult:
    """
    Raw classifier output.

    is_mobile_device and is_tablet_device are derived independently and may
    both be true; the stabilizer resolves the conflict.
    """
    is_mobile_device: bool
    is_tablet_device: bool
    is_definitely_desktop: bool
    desktop_evidence: RuleEvidence = RuleEvidence.NO_MATCH
    mobile_evidence: RuleEvidence = RuleEvidence.NO_MATCH
    tablet_evidence: RuleEvidence = RuleEvidence.NO_MATCH

    @property
    def is_desktop(self) -> bool:
        return not self.is_mobile_device and not self.is_tablet_device


@dataclass(frozen=True)
class DeviceState:
    """Published classification of a session."""
    is_mobile: bool = False
    is_tablet: bool = False
    is_loading: bool = True

    @property
    def is_mobile_or_tablet(self) -> bool:
        return self.is_mobile or self.is_tablet

    @property
    def is_desktop(self) -> bool:
        return not self.is_mobile_or_tablet

    @property
    def category(self) -> Category:
        """Category shape of the current layout."""
        if self.is_mobile:
            return Category.MOBILE
        if self.is_tablet:
            return Category.TABLET
        return Category.DESKTOP

    def as_dict(self) -> dict:
        return {
            'is_mobile': self.is_mobile,
            'is_tablet': self.is_tablet,
            'is_mobile_or_tablet': self.is_mobile_or_tablet,
            'is_desktop': self.is_desktop,
            'is_loading': self.is_loading,
        }
