"""Knowledge base module: the fixed question/answer pairs the bot answers from"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Union

logger = logging.getLogger(__name__)


class KnowledgeBaseError(ValueError):
    """Raised when a knowledge base resource cannot be read or is malformed"""


class KnowledgeEntry:
    """Single question/answer pair"""

    __slots__ = ("_question", "_answer")

    def __init__(self, question: str, answer: str):
        if not isinstance(question, str) or not isinstance(answer, str):
            raise TypeError("question and answer must both be strings")
        self._question = question
        self._answer = answer

    @property
    def question(self) -> str:
        return self._question

    @property
    def answer(self) -> str:
        return self._answer

    def __eq__(self, other):
        if not isinstance(other, KnowledgeEntry):
            return NotImplemented
        return (self._question, self._answer) == (other._question, other._answer)

    def __hash__(self):
        return hash((self._question, self._answer))

    def __repr__(self):
        return f"KnowledgeEntry(question={self._question!r}, answer={self._answer[:30]!r})"

    def to_dict(self) -> Dict:
        return {"question": self._question, "answer": self._answer}

    @classmethod
    def from_dict(cls, data: Dict) -> "KnowledgeEntry":
        return cls(question=data["question"], answer=data["answer"])


class KnowledgeBase:
    """
    Ordered, read-only collection of KnowledgeEntry.
    Duplicate questions are kept; order decides tie-breaks when matching.
    """

    def __init__(self, entries: Iterable[KnowledgeEntry] = ()):
        self._entries = tuple(entries)
        for entry in self._entries:
            if not isinstance(entry, KnowledgeEntry):
                raise TypeError(f"Expected KnowledgeEntry, got {type(entry).__name__}")

    @classmethod
    def from_pairs(cls, pairs: Iterable) -> "KnowledgeBase":
        """Build from dicts with question/answer keys or from (question, answer) tuples"""
        entries = []
        for pair in pairs:
            if isinstance(pair, KnowledgeEntry):
                entries.append(pair)
            elif isinstance(pair, Mapping):
                entries.append(KnowledgeEntry.from_dict(pair))
            elif isinstance(pair, (tuple, list)) and len(pair) == 2:
                question, answer = pair
                entries.append(KnowledgeEntry(question, answer))
            else:
                raise TypeError(
                    f"Expected a question/answer pair, got {type(pair).__name__}: {pair!r}"
                )
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> KnowledgeEntry:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self):
        return f"KnowledgeBase({len(self._entries)} entries)"

    @property
    def entries(self) -> tuple:
        return self._entries

    def to_list(self) -> List[Dict]:
        return [entry.to_dict() for entry in self._entries]

    def get_statistics(self) -> Dict:
        """Get knowledge base statistics"""
        vocabulary = set()
        for entry in self._entries:
            vocabulary.update(entry.question.lower().split())
        return {
            "total_entries": len(self._entries),
            "distinct_questions": len({e.question.lower() for e in self._entries}),
            "vocabulary_size": len(vocabulary),
        }


def load_knowledge_base(path: Union[str, Path]) -> Union[KnowledgeBase, Dict[str, str]]:
    """
    Load a static JSON knowledge resource.

    A list of {"question": ..., "answer": ...} objects gives a KnowledgeBase
    for overlap scoring. An object of {keyword: answer} gives an ordered
    keyword mapping for substring matching.

    Raises:
        KnowledgeBaseError: the file is missing, not JSON, or has the wrong shape
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise KnowledgeBaseError(f"Cannot read knowledge base {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise KnowledgeBaseError(f"Invalid JSON in knowledge base {path}: {e}") from e

    if isinstance(data, dict):
        for key, value in data.items():
            if not isinstance(value, str):
                raise KnowledgeBaseError(
                    f"Keyword {key!r} in {path} must map to a string answer"
                )
        logger.info(f"Loaded {len(data)} keyword responses from {path}")
        return dict(data)

    if isinstance(data, list):
        try:
            kb = KnowledgeBase.from_pairs(data)
        except (KeyError, TypeError, ValueError) as e:
            raise KnowledgeBaseError(
                f"Entries in {path} must be objects with 'question' and 'answer': {e}"
            ) from e
        logger.info(f"Loaded {len(kb)} entries from {path}")
        return kb

    raise KnowledgeBaseError(
        f"Knowledge base {path} must be a JSON list or object, got {type(data).__name__}"
    )
