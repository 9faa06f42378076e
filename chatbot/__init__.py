"""Chatbot backend for the RED CAT PICTURES website."""

__version__ = "0.1.0"
