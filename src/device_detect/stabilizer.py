"""
Session stabilizer.

Runs the collector and classifier on activation and on every resize or
orientation change, anchoring the session to the first resolved category:

- anchored desktop: never reports mobile or tablet again
- anchored non-desktop: mobile/tablet follow the current viewport width and
  the session is never promoted to desktop
"""

import logging
from collections import deque
from contextlib import ExitStack
from typing import Callable, Deque, Optional

from .classifier import classify, initial_category, width_category
from .collector import SignalCollector
from .config import DEFAULT_PROFILE, TRIGGER_EVENTS, RuleProfile
from .environment import HostEnvironment
from .types import AnchorState, Category, DeviceState

logger = logging.getLogger(__name__)

StateCallback = Callable[[DeviceState], None]


class SessionAnchor:
    """Category recorded by the first evaluation of a session. Set once."""

    def __init__(self):
        self._category: Optional[Category] = None

    @property
    def category(self) -> Optional[Category]:
        return self._category

    @property
    def state(self) -> AnchorState:
        if self._category is None:
            return AnchorState.UNANCHORED
        if self._category is Category.DESKTOP:
            return AnchorState.ANCHORED_DESKTOP
        return AnchorState.ANCHORED_NON_DESKTOP

    def set_once(self, category: Category) -> bool:
        """Record category if no anchor exists yet. Returns True if it was written."""
        if self._category is not None:
            return False
        self._category = category
        return True


def stabilize(anchor: SessionAnchor, viewport_width: int) -> DeviceState:
    """Published state for an anchored session at the given width."""
    if anchor.state is AnchorState.ANCHORED_DESKTOP:
        return DeviceState(is_mobile=False, is_tablet=False, is_loading=False)

    category = width_category(viewport_width)
    return DeviceState(
        is_mobile=category is Category.MOBILE,
        is_tablet=category is Category.TABLET,
        is_loading=False,
    )


class DeviceDetector:
    """
    Session-scoped device detection.

    One instance per consuming component. activate() on mount, deactivate()
    on teardown, or use it as a context manager so listeners are released on
    every exit path.
    """

    def __init__(self,
                 environment: HostEnvironment,
                 collector: Optional[SignalCollector] = None,
                 profile: RuleProfile = DEFAULT_PROFILE,
                 on_change: Optional[StateCallback] = None):
        self.environment = environment
        self.collector = collector or SignalCollector(environment)
        self.profile = profile
        self.on_change = on_change

        self._anchor = SessionAnchor()
        self._state = DeviceState()
        self._subscriptions: Optional[ExitStack] = None
        self._dispatching = False
        self._pending: Deque[str] = deque()

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def anchor(self) -> Optional[Category]:
        return self._anchor.category

    @property
    def anchor_state(self) -> AnchorState:
        return self._anchor.state

    @property
    def active(self) -> bool:
        return self._subscriptions is not None

    def activate(self) -> DeviceState:
        """Start a new session: evaluate once and listen for viewport changes."""
        if self.active:
            return self._state

        # Each mount anchors afresh
        self._anchor = SessionAnchor()
        self._state = DeviceState()
        self.evaluate()
        with ExitStack() as stack:
            for event in TRIGGER_EVENTS:
                stack.enter_context(self.environment.subscribe(event, self._on_trigger))
            self._subscriptions = stack.pop_all()
        logger.info(f"Device detection active, anchored {self._anchor.category.value}")
        return self._state

    def deactivate(self) -> None:
        """Release every listener. Safe to call more than once.

        The last published state and anchor stay readable until the next
        activate().
        """
        if self._subscriptions is None:
            return
        subscriptions, self._subscriptions = self._subscriptions, None
        self._pending.clear()
        subscriptions.close()
        logger.info("Device detection listeners released")

    def __enter__(self) -> "DeviceDetector":
        self.activate()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.deactivate()

    def _on_trigger(self, event: str) -> None:
        if not self.active:
            logger.debug(f"Ignoring {event} after teardown")
            return
        self._pending.append(event)
        if self._dispatching:
            # Delivered from inside an evaluation; runs after it completes
            return
        self._dispatching = True
        try:
            while self._pending and self.active:
                self._pending.popleft()
                self.evaluate()
        finally:
            self._dispatching = False

    def evaluate(self) -> DeviceState:
        """Run collector, classifier and stabilizer once and publish the result."""
        self._state = DeviceState(
            is_mobile=self._state.is_mobile,
            is_tablet=self._state.is_tablet,
            is_loading=True,
        )
        signals = self.collector.collect()
        result = classify(signals, self.profile)

        if self._anchor.set_once(initial_category(result)):
            logger.info(
                f"Session anchored {self._anchor.category.value} "
                f"(desktop={result.desktop_evidence.value}, "
                f"mobile={result.mobile_evidence.value}, "
                f"tablet={result.tablet_evidence.value})"
            )

        self._state = stabilize(self._anchor, signals.viewport_width)
        if self.on_change is not None:
            self.on_change(self._state)
        return self._state
