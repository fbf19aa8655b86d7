"""Conversation session: the transcript shown in the widget"""

import enum
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from .matching import MatchStrategy

logger = logging.getLogger(__name__)


class TranscriptEntry:
    """Single displayed message"""

    __slots__ = ("_text", "_from_user")

    def __init__(self, text: str, from_user: bool):
        self._text = text
        self._from_user = bool(from_user)

    @property
    def text(self) -> str:
        return self._text

    @property
    def from_user(self) -> bool:
        return self._from_user

    @property
    def role(self) -> str:
        return "user" if self._from_user else "bot"

    def __eq__(self, other):
        if not isinstance(other, TranscriptEntry):
            return NotImplemented
        return (self._text, self._from_user) == (other._text, other._from_user)

    def __hash__(self):
        return hash((self._text, self._from_user))

    def __repr__(self):
        return f"TranscriptEntry({self.role}: {self._text[:40]!r})"

    def to_dict(self) -> Dict:
        return {"text": self._text, "from_user": self._from_user}


class SessionState(enum.Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class ConversationSession:
    """
    Append-only transcript driven by one match strategy.
    Lives only as long as the session object; nothing is persisted.

    At most one reply is pending at a time: a deferred send made while
    waiting for a reply is dropped, so every user entry is followed by
    its own bot entry.
    """

    def __init__(self, strategy: MatchStrategy, reply_delay: float = 0.0):
        self.strategy = strategy
        self.reply_delay = reply_delay
        self._history: List[TranscriptEntry] = []
        self._state = SessionState.IDLE
        self._timer: Optional[threading.Timer] = None
        self._done = threading.Event()
        self._done.set()
        self._lock = threading.RLock()

    # ── inspection ───────────────────────────────────────────────────────────
    @property
    def transcript(self) -> Tuple[TranscriptEntry, ...]:
        with self._lock:
            return tuple(self._history)

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def awaiting_reply(self) -> bool:
        return self.state is SessionState.AWAITING_REPLY

    def get_summary(self) -> Dict:
        """Get conversation summary"""
        with self._lock:
            user_messages = sum(1 for e in self._history if e.from_user)
            bot_entries = [e for e in self._history if not e.from_user]
            return {
                "total_messages": len(self._history),
                "user_messages": user_messages,
                "bot_messages": len(bot_entries),
                "fallback_replies": sum(
                    1 for e in bot_entries if self.strategy.is_fallback(e.text)
                ),
                "state": self._state.value,
            }

    # ── sending ──────────────────────────────────────────────────────────────
    def _reply_for(self, message: str) -> TranscriptEntry:
        return TranscriptEntry(self.strategy.reply(message), from_user=False)

    def send(self, message: str) -> Optional[Tuple[TranscriptEntry, TranscriptEntry]]:
        """
        Append the user message and the bot reply in one step.

        Returns the (user, bot) pair, or None when the message is blank
        or a deferred reply is still pending.
        """
        if not message or not message.strip():
            return None
        with self._lock:
            if self._state is SessionState.AWAITING_REPLY:
                logger.info("Reply pending, ignoring message")
                return None
            user_entry = TranscriptEntry(message, from_user=True)
            bot_entry = self._reply_for(message)
            self._history.append(user_entry)
            self._history.append(bot_entry)
        return user_entry, bot_entry

    def send_deferred(
        self,
        message: str,
        on_reply: Callable[[TranscriptEntry], None] = None,
        delay: float = None,
    ) -> Optional[TranscriptEntry]:
        """
        Append the user message now and the bot reply after a delay.

        on_reply is called with the bot entry from the timer thread once
        it has been appended. Returns the user entry, or None when the
        message is blank or another reply is still pending.
        """
        if not message or not message.strip():
            return None
        if delay is None:
            delay = self.reply_delay
        with self._lock:
            if self._state is SessionState.AWAITING_REPLY:
                logger.info("Reply pending, dropping message")
                return None
            user_entry = TranscriptEntry(message, from_user=True)
            self._history.append(user_entry)
            self._state = SessionState.AWAITING_REPLY
            self._done.clear()
            timer = threading.Timer(delay, self._complete, args=(message, on_reply))
            timer.daemon = True
            self._timer = timer
        timer.start()
        return user_entry

    def _complete(self, message: str, on_reply: Optional[Callable]):
        with self._lock:
            if self._timer is not threading.current_thread():
                return  # cancelled or superseded
            bot_entry = self._reply_for(message)
            self._history.append(bot_entry)
            self._timer = None
            self._state = SessionState.IDLE
        try:
            if on_reply is not None:
                on_reply(bot_entry)
        finally:
            self._done.set()

    def cancel(self) -> bool:
        """Drop the pending reply, if any. Returns True if one was cancelled."""
        with self._lock:
            timer = self._timer
            if timer is None:
                return False
            timer.cancel()
            self._timer = None
            self._state = SessionState.IDLE
        self._done.set()
        logger.debug("Pending reply cancelled")
        return True

    def wait(self, timeout: float = None) -> bool:
        """Block until no reply is pending. Returns False on timeout."""
        return self._done.wait(timeout)

    def clear(self):
        """Cancel any pending reply and empty the transcript"""
        self.cancel()
        with self._lock:
            self._history = []
        logger.info("Conversation cleared")

