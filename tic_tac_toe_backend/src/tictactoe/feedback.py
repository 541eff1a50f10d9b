"""
Feedback collaborators. The game session hands them discrete events and
never waits on what they do with them.
"""

import logging
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

FeedbackEvent = Literal['move', 'win', 'draw', 'invalid']


# PUBLIC_INTERFACE
class Feedback(Protocol):
    """Anything that reacts to game events with haptic or audio cues."""

    def notify(self, event: FeedbackEvent) -> None:
        ...


# PUBLIC_INTERFACE
class LoggingFeedback:
    """Feedback that only logs the cue it would play. Silent when sound is off."""

    CUES = {
        'move': "tap",
        'win': "fanfare",
        'draw': "chime",
        'invalid': "buzz",
    }

    def __init__(self, sound_enabled: bool = True):
        self.sound_enabled = sound_enabled

    def notify(self, event: FeedbackEvent) -> None:
        if not self.sound_enabled:
            return
        logger.info("Feedback cue: %s (%s)", self.CUES.get(event, "none"), event)
