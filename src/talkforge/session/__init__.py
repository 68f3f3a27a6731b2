"""In-process application session: speaker state, lookups and generation."""

from talkforge.session.controller import SessionController
from talkforge.session.state import AppState, SpeakerState

__all__ = ["AppState", "SessionController", "SpeakerState"]
