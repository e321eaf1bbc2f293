"""
Device Detection for Web Clients

Classifies a client as desktop, tablet or mobile from its user-agent, touch
support and viewport size, and keeps the classification stable for the
lifetime of a page view.
"""

from .classifier import classify, initial_category, is_definitely_desktop, width_category
from .collector import SignalCollector, detect_touch_capability
from .config import DEFAULT_PROFILE, STRICT_TOUCH_PROFILE, RuleProfile
from .content import ContentChoice, ContentKind, select_content
from .environment import HostEnvironment, StaticEnvironment, Subscription
from .parser import UserAgentParser
from .stabilizer import DeviceDetector
from .types import (
    AnchorState,
    Category,
    ClassificationResult,
    DeviceState,
    DeviceType,
    EnvironmentSignals,
    ParsedUserAgent,
    RuleEvidence,
)

__version__ = "0.1.0"
__all__ = [
    'classify',
    'initial_category',
    'is_definitely_desktop',
    'width_category',
    'SignalCollector',
    'detect_touch_capability',
    'DEFAULT_PROFILE',
    'STRICT_TOUCH_PROFILE',
    'RuleProfile',
    'ContentChoice',
    'ContentKind',
    'select_content',
    'HostEnvironment',
    'StaticEnvironment',
    'Subscription',
    'UserAgentParser',
    'DeviceDetector',
    'AnchorState',
    'Category',
    'ClassificationResult',
    'DeviceState',
    'DeviceType',
    'EnvironmentSignals',
    'ParsedUserAgent',
    'RuleEvidence',
]
