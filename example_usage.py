"""
Simple usage example for foliobot

This demonstrates the two ways the chat widget can answer.
Run this after installation to see foliobot in action.
"""

from foliobot import ChatWidget
from foliobot.builtin_knowledge import default_keyword_responses


def main():
    print("=" * 60)
    print("foliobot Simple Example")
    print("=" * 60)

    # Example 1: question/answer pairs, scored by word overlap
    print("\n📝 Example 1: Word-overlap matching\n")
    widget = ChatWidget()
    for question in ["What projects have you worked on?", "what is llm", "Hello!!"]:
        print(f"Question: {question}")
        print(f"Answer:   {widget.ask(question)}\n")

    # Example 2: keyword table, matched anywhere in the message
    print("=" * 60)
    print("\n📝 Example 2: Keyword matching\n")
    keyword_widget = ChatWidget(default_keyword_responses())
    for question in ["How can I contact you?", "ohellos"]:
        print(f"Question: {question}")
        print(f"Answer:   {keyword_widget.ask(question)}\n")

    # Example 3: conversation summary
    print("=" * 60)
    print("\n📊 Example 3: Conversation summary\n")
    print(widget.session.get_summary())

    print("\n💡 To run the interactive chat: foliobot  (or: python -m foliobot)")
    print("=" * 60)


if __name__ == "__main__":
    main()
