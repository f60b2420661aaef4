from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict

from models.events.types import EventType
from models.events.sources import EventSource

_ENVELOPE = ("type", "source", "timestamp")


@dataclass(init=False)
class Event:
    """
    Envelope shared by every bus event. Subclasses set their own payload
    attributes in __init__; `data` exposes just those (log middleware,
    Socket.IO broadcaster).
    """

    type: EventType
    source: EventSource | None
    timestamp: float = field(default_factory=time.time)

    def __init__(self, *, type: EventType, source: EventSource | None):
        self.type = type
        self.source = source
        self.timestamp = time.time()

    @property
    def data(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self).items() if k not in _ENVELOPE}
