"""Tests for the knowledge base"""

import json

import pytest

from foliobot.builtin_knowledge import (
    KEYWORD_RESPONSES,
    PORTFOLIO_QA,
    default_keyword_responses,
    default_knowledge_base,
)
from foliobot.knowledge import (
    KnowledgeBase,
    KnowledgeBaseError,
    KnowledgeEntry,
    load_knowledge_base,
)


def test_entry_dict_round_trip():
    entry = KnowledgeEntry("hi", "Hello")
    assert KnowledgeEntry.from_dict(entry.to_dict()) == entry


def test_entry_is_read_only():
    entry = KnowledgeEntry("hi", "Hello")
    with pytest.raises(AttributeError):
        entry.question = "bye"


def test_entry_rejects_non_strings():
    with pytest.raises(TypeError):
        KnowledgeEntry("hi", None)


def test_knowledge_base_keeps_order_and_duplicates():
    kb = KnowledgeBase.from_pairs([("hi", "A"), {"question": "hi", "answer": "B"}])
    assert len(kb) == 2
    assert [e.answer for e in kb] == ["A", "B"]
    assert kb[1].question == "hi"


def test_knowledge_base_is_immutable():
    kb = KnowledgeBase.from_pairs([("hi", "A")])
    assert not hasattr(kb, "append")
    assert isinstance(kb.entries, tuple)


def test_empty_knowledge_base_is_falsy():
    assert not KnowledgeBase()
    assert KnowledgeBase.from_pairs([("hi", "A")])


def test_statistics():
    kb = KnowledgeBase.from_pairs([("what is llm", "A"), ("What is LLM", "B"), ("hi", "C")])
    stats = kb.get_statistics()
    assert stats == {"total_entries": 3, "distinct_questions": 2, "vocabulary_size": 4}


def test_load_question_answer_list(tmp_path):
    path = tmp_path / "knowledge-base.json"
    path.write_text(json.dumps([{"question": "hi", "answer": "Hello"}]), encoding="utf-8")
    kb = load_knowledge_base(path)
    assert isinstance(kb, KnowledgeBase)
    assert kb[0] == KnowledgeEntry("hi", "Hello")


def test_load_keyword_object(tmp_path):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps({"hello": "Hi!", "contact": "Email me"}), encoding="utf-8")
    responses = load_knowledge_base(str(path))
    assert list(responses) == ["hello", "contact"]


@pytest.mark.parametrize("content", [
    "not json",
    "42",
    '[{"question": "hi"}]',
    '{"hello": 1}',
    '["hi", "yo"]',
    '[["hi", "yo", "extra"]]',
])
def test_load_rejects_malformed(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(KnowledgeBaseError) as excinfo:
        load_knowledge_base(path)
    assert "bad.json" in str(excinfo.value)


def test_load_missing_file(tmp_path):
    with pytest.raises(KnowledgeBaseError):
        load_knowledge_base(tmp_path / "missing.json")


def test_builtin_data():
    kb = default_knowledge_base()
    assert len(kb) == len(PORTFOLIO_QA) == 8
    assert list(default_keyword_responses()) == list(KEYWORD_RESPONSES)
    copy = default_keyword_responses()
    copy["extra"] = "x"
    assert "extra" not in KEYWORD_RESPONSES


def test_from_pairs_rejects_strings():
    with pytest.raises(TypeError):
        KnowledgeBase.from_pairs(["hi"])
    assert KnowledgeBase.from_pairs([["hi", "Hello"]])[0] == KnowledgeEntry("hi", "Hello")
