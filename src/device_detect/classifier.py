"""
Device classifier.

Maps EnvironmentSignals to desktop / mobile / tablet flags through three
ordered decision tables evaluated top-to-bottom with early exit:

1. Desktop rules - any match is decisive and disables steps 2 and 3
2. Mobile rules
3. Tablet rules

Steps 2 and 3 are evaluated independently, so both may match.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .config import (
    DEFAULT_PROFILE,
    MOBILE_MAX_WIDTH,
    OS_ANDROID,
    OS_IOS,
    OS_LINUX,
    OS_MAC,
    OS_WINDOWS,
    TABLET_MAX_WIDTH,
    RuleProfile,
)
from .signatures import (
    contains,
    detect_kindle_fire,
    detect_mobile_keyword,
    detect_samsung_tablet,
    detect_tablet_keyword,
)
from .types import Category, ClassificationResult, DeviceType, EnvironmentSignals, RuleEvidence

logger = logging.getLogger(__name__)

Predicate = Callable[[EnvironmentSignals, RuleProfile], bool]


@dataclass(frozen=True)
class Rule:
    """One row of a decision table."""
    evidence: RuleEvidence
    predicate: Predicate


def width_category(width: int) -> Category:
    """Category implied by viewport width alone."""
    if width < MOBILE_MAX_WIDTH:
        return Category.MOBILE
    if width < TABLET_MAX_WIDTH:
        return Category.TABLET
    return Category.DESKTOP


def _is_narrow(s: EnvironmentSignals) -> bool:
    return width_category(s.viewport_width) is Category.MOBILE


def _is_medium(s: EnvironmentSignals) -> bool:
    return width_category(s.viewport_width) is Category.TABLET


# Desktop rules

def _windows_without_touch_ua(s: EnvironmentSignals, p: RuleProfile) -> bool:
    if s.os_name != OS_WINDOWS:
        return False
    if not contains(s.raw_user_agent, 'touch'):
        return True
    return p.windows_touch_requires_capability and not s.is_touch_capable


def _mac_without_touch(s: EnvironmentSignals, p: RuleProfile) -> bool:
    # iPadOS reports itself as Mac OS; touch support tells them apart
    return s.os_name == OS_MAC and not s.is_touch_capable


def _linux_not_android(s: EnvironmentSignals, p: RuleProfile) -> bool:
    if s.os_name != OS_LINUX or contains(s.raw_user_agent, 'android'):
        return False
    return not (p.linux_requires_no_touch and s.is_touch_capable)


def _desktop_architecture(s: EnvironmentSignals, p: RuleProfile) -> bool:
    return bool(s.cpu_architecture) and s.cpu_architecture in p.desktop_architectures


DESKTOP_RULES: Sequence[Rule] = (
    Rule(RuleEvidence.WINDOWS_NO_TOUCH_UA, _windows_without_touch_ua),
    Rule(RuleEvidence.MAC_NO_TOUCH, _mac_without_touch),
    Rule(RuleEvidence.LINUX_NOT_ANDROID, _linux_not_android),
    Rule(RuleEvidence.DESKTOP_ARCHITECTURE, _desktop_architecture),
)


# Mobile rules

MOBILE_RULES: Sequence[Rule] = (
    Rule(RuleEvidence.DEVICE_TYPE,
         lambda s, p: s.device_type is DeviceType.MOBILE),
    Rule(RuleEvidence.MOBILE_KEYWORD,
         lambda s, p: detect_mobile_keyword(s.raw_user_agent, p.all_mobile_keywords)[0]),
    Rule(RuleEvidence.ANDROID_NARROW,
         lambda s, p: s.os_name == OS_ANDROID and _is_narrow(s)),
    Rule(RuleEvidence.IOS_NOT_IPAD,
         lambda s, p: s.os_name == OS_IOS and not contains(s.raw_user_agent, 'ipad')),
    Rule(RuleEvidence.WIDTH_FALLBACK,
         lambda s, p: _is_narrow(s)),
)


# Tablet rules

def _samsung_tablet(s: EnvironmentSignals, p: RuleProfile) -> bool:
    detected, notes = detect_samsung_tablet(s.raw_user_agent)
    if detected:
        logger.debug(f"Samsung tablet match: {notes}")
    return detected


def _kindle_fire(s: EnvironmentSignals, p: RuleProfile) -> bool:
    # Kindle Fire is a tablet at any width
    return detect_kindle_fire(s.raw_user_agent)[0]


TABLET_RULES: Sequence[Rule] = (
    Rule(RuleEvidence.DEVICE_TYPE,
         lambda s, p: s.device_type is DeviceType.TABLET),
    Rule(RuleEvidence.TABLET_BRAND, _samsung_tablet),
    Rule(RuleEvidence.EREADER_HARDWARE, _kindle_fire),
    Rule(RuleEvidence.TABLET_KEYWORD,
         lambda s, p: detect_tablet_keyword(s.raw_user_agent, p.tablet_keywords)[0]),
    Rule(RuleEvidence.ANDROID_MEDIUM,
         lambda s, p: s.os_name == OS_ANDROID and _is_medium(s)),
    Rule(RuleEvidence.IOS_IPAD,
         lambda s, p: s.os_name == OS_IOS and contains(s.raw_user_agent, 'ipad')),
    Rule(RuleEvidence.WINDOWS_TOUCH,
         lambda s, p: s.os_name == OS_WINDOWS and contains(s.raw_user_agent, 'touch')),
    Rule(RuleEvidence.WIDTH_FALLBACK,
         lambda s, p: _is_medium(s)),
)


def first_match(rules: Sequence[Rule],
                signals: EnvironmentSignals,
                profile: RuleProfile = DEFAULT_PROFILE) -> Optional[RuleEvidence]:
    """
    Evaluate a decision table.

    Args:
        rules: Ordered rules
        signals: Environment snapshot
        profile: Rule parameters

    Returns:
        Evidence of the first matching rule, None if no rule matched
    """
    for rule in rules:
        if rule.predicate(signals, profile):
            return rule.evidence
    return None


def is_definitely_desktop(signals: EnvironmentSignals, profile: RuleProfile = DEFAULT_PROFILE) -> bool:
    return first_match(DESKTOP_RULES, signals, profile) is not None


def classify(signals: EnvironmentSignals, profile: RuleProfile = DEFAULT_PROFILE) -> ClassificationResult:
    """
    Classify an environment snapshot.

    Args:
        signals: Environment snapshot
        profile: Rule parameters (keyword sets, touch checks)

    Returns:
        ClassificationResult with the flag and deciding rule of each step
    """
    desktop = first_match(DESKTOP_RULES, signals, profile)
    if desktop is not None:
        logger.debug(f"Desktop override: {desktop.value}")
        return ClassificationResult(
            is_mobile_device=False,
            is_tablet_device=False,
            is_definitely_desktop=True,
            desktop_evidence=desktop,
            mobile_evidence=RuleEvidence.DESKTOP_OVERRIDE,
            tablet_evidence=RuleEvidence.DESKTOP_OVERRIDE,
        )

    mobile = first_match(MOBILE_RULES, signals, profile)
    tablet = first_match(TABLET_RULES, signals, profile)
    logger.debug(
        f"Classified: mobile={mobile.value if mobile else None} "
        f"tablet={tablet.value if tablet else None}"
    )
    return ClassificationResult(
        is_mobile_device=mobile is not None,
        is_tablet_device=tablet is not None,
        is_definitely_desktop=False,
        mobile_evidence=mobile or RuleEvidence.NO_MATCH,
        tablet_evidence=tablet or RuleEvidence.NO_MATCH,
    )


def initial_category(result: ClassificationResult) -> Category:
    """Category a session anchors to on its first evaluation."""
    if result.is_definitely_desktop:
        return Category.DESKTOP
    if result.is_tablet_device:
        return Category.TABLET
    return Category.MOBILE
