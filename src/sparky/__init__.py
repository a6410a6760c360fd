"""Sparky: an educational chat tutor backend.

Two entry points:
- sparky.service: provider-agnostic generation and chat (the only surface callers need)
- sparky.tutor: reply parsing (markdown blocks + embedded quiz) and the chat session
"""
