"""
Event: Data structure representing one message carried by the EventBus.
"""

import uuid
from dataclasses import dataclass, field

#: Topic for commands sent from the window to the scheduler.
TOPIC_CONTROL = "control"
#: Topic carrying one event per signal whose state was committed.
TOPIC_SIGNAL = "signal.commit"

#: ``payload["command"]`` asking the simulation loop to terminate.
REQUEST_STOP = "RequestStop"


def new_event_id() -> str:
    """
    Generate a globally unique event ID.

    Returns:
        str: UUID string for a new event.
    """
    return str(uuid.uuid4())


@dataclass
class Event:
    """
    Represents a single event published on the EventBus.

    Attributes:
        id (str): Unique identifier for the event.
        topic (str): The topic of the event (e.g., 'control', 'signal.commit').
        sender (str): ID of the sender (e.g., 'view', 'sim_bridge').
        payload (dict): Arbitrary dictionary containing event contents.
        ts (float): Timestamp (in seconds) when the event was created.
    """
    id: str
    topic: str
    sender: str
    payload: dict = field(default_factory=dict)
    ts: float = 0.0
