"""foliobot — portfolio chat widget answering from a small local knowledge base"""

__version__ = "0.1.0"
__author__ = "Umme Athiya"
__powered_by__ = "Local knowledge base · no network calls"

from .knowledge import KnowledgeBase, KnowledgeBaseError, KnowledgeEntry, load_knowledge_base
from .matching import MatchStrategy, OverlapScoring, SubstringKeyword, find, strategy_for, tokenize
from .conversation import ConversationSession, SessionState, TranscriptEntry
from .widget import ChatWidget, NullRenderer, Renderer

__all__ = [
    "KnowledgeBase",
    "KnowledgeBaseError",
    "KnowledgeEntry",
    "load_knowledge_base",
    "MatchStrategy",
    "OverlapScoring",
    "SubstringKeyword",
    "find",
    "strategy_for",
    "tokenize",
    "ConversationSession",
    "SessionState",
    "TranscriptEntry",
    "ChatWidget",
    "NullRenderer",
    "Renderer",
]
