"""
Answer matching for the chat widget.

Two strategies share one interface:
  - OverlapScoring: picks the entry whose question shares the most
    lowercase words with the message (earliest entry wins a tie)
  - SubstringKeyword: returns the answer for the first keyword found
    anywhere inside the lowercased message

Neither strategy strips punctuation, stems words or drops stop-words.
"""

import re
import logging
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from . import config
from .knowledge import KnowledgeBase, KnowledgeEntry

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')


def tokenize(text: str) -> List[str]:
    """Lowercase and split on whitespace runs, dropping empty tokens"""
    return text.lower().split()


def _question_tokens(question: str) -> List[str]:
    # Leading/trailing whitespace yields '' tokens; they can never match a query token
    return _WHITESPACE_RE.split(question.lower())


class MatchStrategy:
    """Base interface: find() returns an answer or None (no match)"""

    fallback: str = config.FALLBACK_RESPONSE

    def find(self, message: str) -> Optional[str]:
        raise NotImplementedError

    def reply(self, message: str) -> str:
        """Answer for the message, or the fallback text when nothing matches"""
        answer = self.find(message)
        return answer if answer is not None else self.fallback

    def is_fallback(self, text: str) -> bool:
        return text == self.fallback


class OverlapScoring(MatchStrategy):
    """Word-overlap scoring over an ordered knowledge base"""

    def __init__(self, knowledge: Union[KnowledgeBase, Iterable], fallback: str = None):
        if isinstance(knowledge, KnowledgeBase):
            self.knowledge = knowledge
        else:
            self.knowledge = KnowledgeBase.from_pairs(knowledge)
        self.fallback = fallback if fallback is not None else config.FALLBACK_RESPONSE
        # Questions never change, so tokenize them once
        self._tokens = [_question_tokens(e.question) for e in self.knowledge]

    def __repr__(self):
        return f"OverlapScoring({len(self.knowledge)} entries)"

    @staticmethod
    def score(message: str, entry: KnowledgeEntry) -> int:
        """Count of message tokens (repeats included) present in the entry's question"""
        question_tokens = _question_tokens(entry.question)
        return sum(1 for word in tokenize(message) if word in question_tokens)

    def _scores(self, message: str) -> List[int]:
        words = tokenize(message)
        return [
            sum(1 for word in words if word in question_tokens)
            for question_tokens in self._tokens
        ]

    def rank(self, message: str) -> List[Tuple[int, KnowledgeEntry]]:
        """Entries with a positive score, best first; equal scores keep knowledge base order"""
        scored = [
            (score, entry)
            for score, entry in zip(self._scores(message), self.knowledge)
            if score > 0
        ]
        return sorted(scored, key=lambda item: -item[0])

    def find(self, message: str) -> Optional[str]:
        best_score = 0
        best_answer = None
        for score, entry in zip(self._scores(message), self.knowledge):
            if score > best_score:
                best_score = score
                best_answer = entry.answer
        if best_answer is None:
            logger.debug(f"No overlap for message: {message[:50]!r}")
        return best_answer


class SubstringKeyword(MatchStrategy):
    """First keyword (in table order) contained in the lowercased message wins"""

    def __init__(self, responses: Mapping[str, str], fallback: str = None):
        self.responses = dict(responses)
        self.fallback = fallback if fallback is not None else config.KEYWORD_FALLBACK_RESPONSE

    def __repr__(self):
        return f"SubstringKeyword({len(self.responses)} keywords)"

    def find(self, message: str) -> Optional[str]:
        if not message:
            return None
        query = message.lower()
        for key, answer in self.responses.items():
            # An empty keyword would match everything; skip it
            if key and key in query:
                logger.debug(f"Keyword match: {key!r}")
                return answer
        return None


def strategy_for(source, fallback: str = None) -> MatchStrategy:
    """
    Pick a strategy from the shape of the knowledge supplied.

    A keyword -> answer mapping selects SubstringKeyword; a KnowledgeBase or
    an iterable of entries, (question, answer) pairs or question/answer dicts
    selects OverlapScoring. An existing strategy is returned as is;
    passing a fallback along with one is an error.

    Raises:
        TypeError: the source has neither shape, or a fallback was given
            together with an existing strategy
    """
    if isinstance(source, MatchStrategy):
        if fallback is not None:
            raise TypeError("fallback cannot be set on an existing strategy")
        return source
    if isinstance(source, KnowledgeBase):
        return OverlapScoring(source, fallback=fallback)
    if isinstance(source, Mapping):
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in source.items()):
            raise TypeError("Keyword responses must map strings to strings")
        return SubstringKeyword(source, fallback=fallback)
    if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        raise TypeError(f"Unsupported knowledge source: {type(source).__name__}")
    try:
        return OverlapScoring(KnowledgeBase.from_pairs(source), fallback=fallback)
    except (KeyError, ValueError) as e:
        raise TypeError(f"Unsupported knowledge entries: {e}") from e


def find(message: str, kb) -> Optional[str]:
    """Best answer for message in kb (either shape), or None when nothing matches"""
    return strategy_for(kb).find(message)
