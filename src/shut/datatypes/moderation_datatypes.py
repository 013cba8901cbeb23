"""
Per-message moderation decision and outcome types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EnforcementOutcome(Enum):
    """How far the enforcement sequence got for one message."""

    IGNORED = "ignored"
    DELETE_FAILED = "delete_failed"
    WARN_FAILED = "warn_failed"
    WARNED = "warned"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class ModerationDecision:
    """Result of classifying a single inbound message.

    Attributes:
        is_bot_author: The author is a bot account.
        is_exempt: The message carries a hyperlink or an attachment.
        channel_is_enforced: The channel is under enforcement.
    """
    is_bot_author: bool
    is_exempt: bool
    channel_is_enforced: bool

    @property
    def should_enforce(self) -> bool:
        return not self.is_bot_author and self.channel_is_enforced and not self.is_exempt
