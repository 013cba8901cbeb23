"""
Decides whether a message is exempt from media-only enforcement.

A message is exempt when it carries at least one attachment or its text
contains a hyperlink. Everything here is pure and stateless.
"""

import re
from typing import Any

# scheme, optional www., host up to 256 chars, a 1-6 char TLD, optional path/query
LINK_PATTERN = re.compile(
    r"https?://(www\.)?[-a-zA-Z0-9@:%._\+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_\+.~#?&/=]*)"
)


def contains_link(text: str | None) -> bool:
    """Return True if ``text`` contains at least one hyperlink."""
    if not text:
        return False
    return LINK_PATTERN.search(text) is not None


def has_attachments(message: Any) -> bool:
    return len(getattr(message, "attachments", None) or ()) > 0


def is_exempt(message: Any) -> bool:
    """
    Return True if the message may stay in an enforced channel.

    Args:
        message: A ``discord.Message`` or any object with ``content`` and
            ``attachments`` attributes.
    """
    return has_attachments(message) or contains_link(getattr(message, "content", None))
