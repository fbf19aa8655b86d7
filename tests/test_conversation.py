"""Tests for the conversation session"""

import threading

import pytest

from foliobot import config
from foliobot.conversation import ConversationSession, SessionState, TranscriptEntry
from foliobot.matching import OverlapScoring, SubstringKeyword


@pytest.fixture
def session():
    strategy = OverlapScoring([("what is llm", "LLM means..."), ("hi", "Hello!")])
    return ConversationSession(strategy)


@pytest.mark.parametrize("message", ["", "   ", "\t\n"])
def test_blank_message_is_ignored(session, message):
    assert session.send(message) is None
    assert session.send_deferred(message) is None
    assert session.transcript == ()
    assert session.state is SessionState.IDLE


def test_send_appends_user_then_bot(session):
    user, bot = session.send("what is llm")
    assert user == TranscriptEntry("what is llm", from_user=True)
    assert bot == TranscriptEntry("LLM means...", from_user=False)
    assert session.transcript == (user, bot)


def test_user_text_kept_verbatim(session):
    user, bot = session.send("  hi  ")
    assert user.text == "  hi  "
    assert bot.text == "Hello!"


def test_no_match_uses_fallback(session):
    _, bot = session.send("Hello!!")
    assert bot.text == config.FALLBACK_RESPONSE
    assert session.get_summary()["fallback_replies"] == 1


def test_bot_text_is_answer_or_fallback(session):
    answers = {"LLM means...", "Hello!", config.FALLBACK_RESPONSE}
    for message in ["hi", "what", "nothing here", "llm please", "x"]:
        session.send(message)
    for entry in session.transcript:
        if not entry.from_user:
            assert entry.text in answers


def test_keyword_strategy_session():
    session = ConversationSession(SubstringKeyword({"hello": "Hi!"}))
    _, bot = session.send("ohellos")
    assert bot.text == "Hi!"
    _, bot = session.send("bye")
    assert bot.text == config.KEYWORD_FALLBACK_RESPONSE


def test_summary_counts(session):
    session.send("hi")
    session.send("nope")
    summary = session.get_summary()
    assert summary["total_messages"] == 4
    assert summary["user_messages"] == 2
    assert summary["bot_messages"] == 2
    assert summary["state"] == "idle"


def test_transcript_is_a_snapshot(session):
    session.send("hi")
    snapshot = session.transcript
    session.send("hi")
    assert len(snapshot) == 2
    assert len(session.transcript) == 4


def test_entry_role_and_dict():
    entry = TranscriptEntry("hi", from_user=True)
    assert entry.role == "user"
    assert entry.to_dict() == {"text": "hi", "from_user": True}
    assert TranscriptEntry("x", False).role == "bot"


def test_deferred_reply_arrives_after_delay(session):
    replies = []
    done = threading.Event()

    def on_reply(entry):
        replies.append(entry)
        done.set()

    user = session.send_deferred("hi", on_reply=on_reply, delay=0.01)
    assert user.text == "hi"
    assert done.wait(2)
    assert session.wait(2)
    assert replies == [TranscriptEntry("Hello!", from_user=False)]
    assert session.transcript == (user, replies[0])
    assert session.state is SessionState.IDLE


def test_send_while_awaiting_reply_is_dropped(session):
    first = session.send_deferred("hi", delay=0.3)
    assert session.state is SessionState.AWAITING_REPLY
    assert session.send_deferred("what is llm", delay=0.3) is None
    assert session.send("what is llm") is None
    assert session.wait(2)
    assert session.transcript == (first, TranscriptEntry("Hello!", from_user=False))


def test_cancel_pending_reply(session):
    session.send_deferred("hi", delay=10)
    assert session.awaiting_reply
    assert session.cancel() is True
    assert session.state is SessionState.IDLE
    assert session.wait(0)
    assert [e.from_user for e in session.transcript] == [True]
    assert session.cancel() is False


def test_send_allowed_after_cancel(session):
    session.send_deferred("hi", delay=10)
    session.cancel()
    assert session.send("what is llm") is not None


def test_clear_empties_transcript(session):
    session.send("hi")
    session.send_deferred("hi", delay=10)
    session.clear()
    assert session.transcript == ()
    assert session.state is SessionState.IDLE
