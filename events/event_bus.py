"""
EventBus: In-memory, thread-safe pub/sub between the view and the simulation.

Supports:
    - Topic-based messaging
    - Draining (poll) and non-destructive (peek) reads
    - Logging of events

Intended usage:
    - The window publishes a RequestStop command on 'control'
    - The scheduler polls 'control' between ticks
    - The scheduler publishes committed signal changes on 'signal.commit'
"""

import logging
import threading
import time
from typing import Dict, List, Optional

from .message import Event, new_event_id
from .metrics import EventMetrics

log = logging.getLogger("events")


class EventBus:
    """
    Transport for control and signal events.

    Attributes:
        max_queue (int or None): Per-topic cap; the oldest events are
            discarded once it is exceeded.
        metrics (EventMetrics): Publish / delivery counters.
    """

    def __init__(self, max_queue: Optional[int] = None):
        """
        Initialize an EventBus instance.

        Args:
            max_queue (int or None): Optional per-topic queue length limit.
        """
        self._topics: Dict[str, List[Event]] = {}
        self._lock = threading.Lock()
        self.max_queue = max_queue
        self.metrics = EventMetrics()

    def publish(self, topic: str, sender: str, payload: Optional[dict] = None) -> str:
        """
        Publish an event to a specific topic.

        Args:
            topic (str): The topic name (e.g., 'control', 'signal.commit').
            sender (str): ID of the sender (e.g., 'view', 'sim_bridge').
            payload (dict): Arbitrary data dictionary representing the event contents.

        Returns:
            str: The unique event ID.
        """
        event = Event(
            id=new_event_id(),
            topic=topic,
            sender=sender,
            payload=dict(payload or {}),
            ts=time.time(),
        )
        with self._lock:
            queue = self._topics.setdefault(topic, [])
            queue.append(event)
            if self.max_queue is not None and len(queue) > self.max_queue:
                del queue[: len(queue) - self.max_queue]
            self.metrics.record_publish(topic)

        log.debug("publish topic=%s sender=%s id=%s", topic, sender, event.id)
        return event.id

    def poll(self, topic: str) -> List[Event]:
        """
        Retrieve and clear all events from a given topic.

        Args:
            topic (str): The topic name to poll events from.

        Returns:
            List[Event]: Events published to the topic since the last poll.
        """
        with self._lock:
            events = self._topics.get(topic, [])
            self._topics[topic] = []
            self.metrics.record_delivery(len(events))
        return events

    def peek(self, topic: str) -> List[Event]:
        """
        Return the pending events of a topic without removing them.

        Args:
            topic (str): The topic name.

        Returns:
            List[Event]: Copy of the pending events.
        """
        with self._lock:
            return list(self._topics.get(topic, []))
