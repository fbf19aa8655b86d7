"""Configuration module for foliobot"""

import os

# Knowledge base settings
KNOWLEDGE_BASE_FILE = os.environ.get("FOLIOBOT_KB_FILE")  # Optional static JSON resource

# Replies
FALLBACK_RESPONSE = (
    "I'm sorry, I'm just a demo bot. Please explore the site to learn more!"
)
KEYWORD_FALLBACK_RESPONSE = (
    "I'm sorry, I'm just a simple demo bot. Please explore the site to learn more!"
)

# Cosmetic delay before the bot reply appears (seconds)
try:
    REPLY_DELAY = float(os.environ.get("FOLIOBOT_REPLY_DELAY", "0.3"))
except ValueError:
    REPLY_DELAY = 0.3

# Widget copy
WIDGET_TITLE = "Ask Umme's Bot"
WIDGET_PLACEHOLDER = "Ask a question..."
WIDGET_FOOTER = "This bot uses a small local knowledge base."
KEYWORD_WIDGET_TITLE = "Chat with Umme's Bot"
KEYWORD_WIDGET_PLACEHOLDER = "Type your message..."
KEYWORD_WIDGET_FOOTER = "This bot answers a few common questions about the portfolio."

# CLI settings
CLI_PROMPT = "You"
CLI_ASSISTANT = "Bot"
CLI_WIDTH = 62
