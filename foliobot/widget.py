"""Chat widget: one knowledge source, one match strategy, one session, one renderer"""

import logging
from typing import Callable, List, Optional, Sequence

from . import config
from .builtin_knowledge import default_knowledge_base
from .conversation import ConversationSession, TranscriptEntry
from .matching import MatchStrategy, SubstringKeyword, strategy_for

logger = logging.getLogger(__name__)


class Renderer:
    """
    Display surface for a widget.
    Subclasses draw the transcript and report submitted text.
    """

    def render(self, transcript: Sequence[TranscriptEntry]):
        raise NotImplementedError

    def on_submit(self, handler: Callable[[str], bool]):
        raise NotImplementedError

    def set_visible(self, visible: bool):
        raise NotImplementedError


class NullRenderer(Renderer):
    """Headless renderer that records what it was asked to show"""

    def __init__(self):
        self.renders: List[tuple] = []
        self.visible = False
        self.handler: Optional[Callable[[str], bool]] = None

    def render(self, transcript):
        self.renders.append(tuple(transcript))

    def on_submit(self, handler):
        self.handler = handler

    def set_visible(self, visible):
        self.visible = visible

    def submit(self, text: str):
        """Simulate the visitor pressing Send"""
        if self.handler is not None:
            self.handler(text)

    @property
    def last_render(self) -> tuple:
        return self.renders[-1] if self.renders else ()


class ChatWidget:
    """
    Floating chat panel bound to its own knowledge and transcript.
    Widgets never share state, so several can live side by side.
    """

    def __init__(
        self,
        knowledge=None,
        renderer: Renderer = None,
        reply_delay: float = 0.0,
        title: str = None,
        fallback: str = None,
    ):
        if knowledge is None:
            knowledge = default_knowledge_base()
        self.strategy: MatchStrategy = strategy_for(knowledge, fallback=fallback)
        self.session = ConversationSession(self.strategy, reply_delay=reply_delay)
        self.renderer = renderer or NullRenderer()
        keyword = isinstance(self.strategy, SubstringKeyword)
        self.title = title or (config.KEYWORD_WIDGET_TITLE if keyword else config.WIDGET_TITLE)
        self.placeholder = (
            config.KEYWORD_WIDGET_PLACEHOLDER if keyword else config.WIDGET_PLACEHOLDER
        )
        self.footer = config.KEYWORD_WIDGET_FOOTER if keyword else config.WIDGET_FOOTER
        self._visible = False
        self.renderer.set_visible(False)
        self.renderer.on_submit(self.submit)

    def __repr__(self):
        return f"ChatWidget({self.title!r}, {self.strategy!r})"

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def transcript(self):
        return self.session.transcript

    def open(self):
        self._set_visible(True)

    def close(self):
        self._set_visible(False)

    def toggle(self) -> bool:
        """Flip visibility; returns the new state"""
        self._set_visible(not self._visible)
        return self._visible

    def _set_visible(self, visible: bool):
        self._visible = visible
        self.renderer.set_visible(visible)

    def _refresh(self, _entry=None):
        self.renderer.render(self.session.transcript)

    def submit(self, text: str) -> bool:
        """
        Forward visitor text to the session and redraw.
        Returns False if the text was ignored (blank, or a reply is pending).
        """
        if self.session.reply_delay > 0:
            accepted = self.session.send_deferred(text, on_reply=self._refresh) is not None
        else:
            accepted = self.session.send(text) is not None
        if accepted:
            self._refresh()
        return accepted

    def ask(self, text: str) -> Optional[str]:
        """Synchronous helper: submit text and return the bot reply"""
        pair = self.session.send(text)
        if pair is None:
            return None
        self._refresh()
        return pair[1].text

    def reset(self):
        """Empty the transcript"""
        self.session.clear()
        self._refresh()
