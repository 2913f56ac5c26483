"""Companion chat: hosted chat-completion client and display helpers."""

__version__ = "0.1.0"
