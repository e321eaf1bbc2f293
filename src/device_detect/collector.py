"""
Signal collector.

Builds a fresh EnvironmentSignals snapshot from the host environment on every
call. Host queries that are unsupported degrade to False/0/"".
"""

import logging
from typing import Any, Callable, Optional

from .environment import HostEnvironment
from .parser import UserAgentParser
from .types import EnvironmentSignals

logger = logging.getLogger(__name__)

_UNSUPPORTED_QUERY_ERRORS = (AttributeError, NotImplementedError, TypeError, ValueError)


def _query(name: str, read: Callable[[], Any], default: Any) -> Any:
    try:
        value = read()
    except _UNSUPPORTED_QUERY_ERRORS as e:
        logger.debug(f"Host query {name} unsupported ({e}), using {default!r}")
        return default
    return default if value is None else value


def _positive(value: Any) -> bool:
    try:
        return int(value) > 0
    except (TypeError, ValueError):
        return False


def detect_touch_capability(environment: HostEnvironment) -> bool:
    """
    Probe touch support.

    Checks, in order: touch event support, maxTouchPoints and the legacy
    msMaxTouchPoints counter. The first positive indicator wins.
    """
    if _query('has_touch_events', environment.has_touch_events, False):
        return True
    if _positive(_query('max_touch_points', environment.max_touch_points, 0)):
        return True
    return _positive(_query('ms_max_touch_points', environment.ms_max_touch_points, 0))


class SignalCollector:
    """Collect environment signals for one evaluation. No caching."""

    def __init__(self, environment: HostEnvironment, parser: Optional[UserAgentParser] = None):
        self.environment = environment
        self.parser = parser or UserAgentParser()

    def collect(self) -> EnvironmentSignals:
        user_agent = _query('user_agent', self.environment.user_agent, "")
        if not isinstance(user_agent, str):
            user_agent = ""
        size = _query('viewport_size', self.environment.viewport_size, (0, 0))
        try:
            width, height = size
        except (TypeError, ValueError):
            width, height = 0, 0

        signals = EnvironmentSignals.build(
            user_agent=user_agent,
            parsed=self.parser.parse(user_agent),
            is_touch_capable=detect_touch_capability(self.environment),
            viewport_width=width,
            viewport_height=height,
        )
        logger.debug(
            f"Collected signals: os={signals.os_name!r} cpu={signals.cpu_architecture!r} "
            f"device={signals.device_type.value} touch={signals.is_touch_capable} "
            f"viewport={signals.viewport_width}x{signals.viewport_height}"
        )
        return signals
