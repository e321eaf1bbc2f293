"""
Test fixtures for device detection tests.

Provides real-world user-agent strings, a fixed-result parser and a helper to
build EnvironmentSignals without going through the user-agent parser.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from device_detect.parser import UserAgentParser
from device_detect.types import DeviceType, EnvironmentSignals, ParsedUserAgent

WINDOWS_CHROME = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MAC_SAFARI = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Safari/605.1.15"
)
LINUX_FIREFOX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
IPHONE_SAFARI = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
IPAD_SAFARI = (
    "Mozilla/5.0 (iPad; CPU OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
ANDROID_PHONE_CHROME = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
GALAXY_TAB_S8 = (
    "Mozilla/5.0 (Linux; Android 13; SAMSUNG SM-X700) AppleWebKit/537.36 "
    "(KHTML, like Gecko) SamsungBrowser/23.0 Chrome/115.0.0.0 Safari/537.36"
)
KINDLE_FIRE = (
    "Mozilla/5.0 (Linux; Android 9; KFMAWI) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Silk/120.3.1 like Chrome/120.0.0.0 Safari/537.36"
)


def make_signals(user_agent: str = "",
                 os_name: str = "",
                 cpu_architecture: str = "",
                 device_type: DeviceType = DeviceType.NONE,
                 touch: bool = False,
                 width: int = 1280,
                 height: int = 800) -> EnvironmentSignals:
    """Build signals directly from parser-style fields."""
    return EnvironmentSignals.build(
        user_agent=user_agent,
        parsed=ParsedUserAgent(
            device_type=device_type,
            os_name=os_name,
            cpu_architecture=cpu_architecture,
        ),
        is_touch_capable=touch,
        viewport_width=width,
        viewport_height=height,
    )


class StubParser(UserAgentParser):
    """Parser returning a fixed result, or a per-user-agent result from a mapping."""

    def __init__(self,
                 result: Optional[ParsedUserAgent] = None,
                 by_user_agent: Optional[Dict[str, ParsedUserAgent]] = None):
        self.result = result or ParsedUserAgent()
        self.by_user_agent = by_user_agent or {}
        self.calls = 0

    def parse(self, user_agent: Optional[str]) -> ParsedUserAgent:
        self.calls += 1
        return self.by_user_agent.get(user_agent or "", self.result)
