"""
events — In-memory control and signal events
============================================

Provides a lightweight, thread-safe pub/sub channel between the render
thread and the simulation thread.  The window publishes
:data:`REQUEST_STOP` on :data:`TOPIC_CONTROL`; the scheduler publishes
one :data:`TOPIC_SIGNAL` event per committed signal change.

Modules
-------
message
    :class:`Event` dataclass and topic names.
event_bus
    :class:`EventBus` publish / poll transport.
metrics
    :class:`EventMetrics` counter snapshot.
"""

from .message import Event, REQUEST_STOP, TOPIC_CONTROL, TOPIC_SIGNAL, new_event_id
from .event_bus import EventBus
from .metrics import EventMetrics

__all__ = [
    "Event",
    "EventBus",
    "EventMetrics",
    "REQUEST_STOP",
    "TOPIC_CONTROL",
    "TOPIC_SIGNAL",
    "new_event_id",
]
