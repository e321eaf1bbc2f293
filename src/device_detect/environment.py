"""
Host environment abstraction.

Models the browser globals the signal collector reads (user-agent, viewport,
touch indicators) and the event dispatch that delivers resize and
orientation-change triggers.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from .config import EVENT_ORIENTATION_CHANGE, EVENT_RESIZE

logger = logging.getLogger(__name__)

EventHandler = Callable[[str], None]


class Subscription:
    """Registered event listener. close() removes it exactly once."""

    def __init__(self, environment: "HostEnvironment", event: str, handler: EventHandler):
        self.environment = environment
        self.event = event
        self.handler = handler
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.environment.remove_event_listener(self.event, self.handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class HostEnvironment(ABC):
    """Read access to the client environment plus event registration."""

    @abstractmethod
    def user_agent(self) -> str:
        """Raw user-agent string."""

    @abstractmethod
    def viewport_size(self) -> Tuple[int, int]:
        """Current viewport (width, height)."""

    def has_touch_events(self) -> bool:
        """Whether touch events are supported."""
        return False

    def max_touch_points(self) -> int:
        return 0

    def ms_max_touch_points(self) -> int:
        """Legacy vendor-prefixed max touch points counter."""
        return 0

    @abstractmethod
    def add_event_listener(self, event: str, handler: EventHandler) -> None:
        pass

    @abstractmethod
    def remove_event_listener(self, event: str, handler: EventHandler) -> None:
        pass

    def subscribe(self, event: str, handler: EventHandler) -> Subscription:
        """Register a listener and return the subscription that releases it."""
        self.add_event_listener(event, handler)
        return Subscription(self, event, handler)


class StaticEnvironment(HostEnvironment):
    """
    In-memory host environment.

    Dispatches events synchronously, one at a time, in arrival order. Used by
    the CLI to simulate a page view and by the tests.
    """

    def __init__(self,
                 user_agent: str = "",
                 width: int = 1280,
                 height: int = 800,
                 touch_events: bool = False,
                 max_touch_points: int = 0,
                 ms_max_touch_points: Optional[int] = 0):
        self._user_agent = user_agent
        self.width = width
        self.height = height
        self.touch_events = touch_events
        self.touch_points = max_touch_points
        self.ms_touch_points = ms_max_touch_points
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)

    def user_agent(self) -> str:
        return self._user_agent

    def viewport_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def has_touch_events(self) -> bool:
        return self.touch_events

    def max_touch_points(self) -> int:
        return self.touch_points

    def ms_max_touch_points(self) -> int:
        if self.ms_touch_points is None:
            raise NotImplementedError("msMaxTouchPoints is not available")
        return self.ms_touch_points

    def add_event_listener(self, event: str, handler: EventHandler) -> None:
        self._listeners[event].append(handler)

    def remove_event_listener(self, event: str, handler: EventHandler) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch(self, event: str) -> None:
        """Invoke every listener registered for event."""
        # Copy so listeners may unregister while being dispatched
        for handler in list(self._listeners.get(event, [])):
            handler(event)

    def resize(self, width: int, height: Optional[int] = None) -> None:
        self.width = width
        if height is not None:
            self.height = height
        logger.debug(f"Viewport resized to {self.width}x{self.height}")
        self.dispatch(EVENT_RESIZE)

    def rotate(self) -> None:
        """Swap width and height and dispatch an orientation change."""
        self.width, self.height = self.height, self.width
        logger.debug(f"Orientation changed, viewport now {self.width}x{self.height}")
        self.dispatch(EVENT_ORIENTATION_CHANGE)
