"""Boundary validation for chat input and notebook fields."""
from typing import Optional


def clean_message_input(text: Optional[str]) -> Optional[str]:
    """Returns the trimmed message, or None when there is nothing to send.

    Inner newlines are kept as typed.
    """
    cleaned = (text or "").strip()
    return cleaned or None


def is_valid_note(title: Optional[str], content: Optional[str]) -> bool:
    """A note needs both a title and some content."""
    return bool((title or "").strip()) and bool((content or "").strip())
