"""
Event Bus - in-process pub-sub between the hardware, the controller and the transports

    device driver   ── DeviceConnected / DeviceDisconnected / Door ──┐
    door sensor     ── Door ─────────────────────────────────────────┤
    socket.io layer ── AllClientsDisconnected ───────────────────────┼─► EventBus ─► LightController
    controller      ── ModeChanged / ColorChanged ───────────────────┘        └───► Socket.IO broadcaster

Everything runs on the one asyncio loop; publish() awaits each handler in
turn, so an event is fully handled before the publisher continues.
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

Middleware = Callable[[Event], Optional[Event]]


@dataclass
class Subscription:
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)

    def accepts(self, event: Event) -> bool:
        return self.filter_fn is None or self.filter_fn(event)


class EventBus:
    """
    Handlers may be plain functions or coroutines. Higher priority runs
    first; equal priorities keep subscription order. A handler that raises
    is logged and the remaining handlers still run.

    Middleware sees every event before the handlers and may replace it or
    drop it by returning None.

    Example:
        bus = EventBus()
        bus.subscribe(EventType.DOOR_CHANGED, on_door, priority=10)
        await bus.publish(DoorEvent(level=True))
    """

    def __init__(self, history_limit: int = 100):
        self._subscriptions: Dict[EventType, List[Subscription]] = {}
        self._middleware: List[Middleware] = []
        self._history: Deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        subscription = Subscription(handler, priority, filter_fn)
        subscriptions = self._subscriptions.setdefault(event_type, [])
        subscriptions.append(subscription)
        # stable sort keeps registration order within a priority
        subscriptions.sort(key=lambda s: -s.priority)
        log.debug("Subscribed", event_type=event_type.name, handler=subscription.name, priority=priority)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """No-op when the handler was never subscribed"""
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            self._subscriptions[event_type] = [s for s in subscriptions if s.handler != handler]

    def add_middleware(self, middleware: Middleware) -> None:
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=getattr(middleware, "__name__", repr(middleware)))

    async def publish(self, event: Event) -> None:
        for middleware in self._middleware:
            event = middleware(event)
            if event is None:
                return

        self._history.append(event)

        # snapshot: handlers may subscribe or unsubscribe while we dispatch
        for subscription in list(self._subscriptions.get(event.type, ())):
            if subscription.accepts(event):
                await self._deliver(subscription, event)

    async def _deliver(self, subscription: Subscription, event: Event) -> None:
        try:
            if asyncio.iscoroutinefunction(subscription.handler):
                await subscription.handler(event)
            else:
                subscription.handler(event)
        except Exception as e:
            log.error(f"Handler {subscription.name} failed on {event.type.name}", exception=e)

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Most recent events, oldest first"""
        return list(self._history)[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
