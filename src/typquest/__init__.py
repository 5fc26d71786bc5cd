"""TypQuest: typing-driven turn-based battle engine."""
