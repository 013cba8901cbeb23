"""
Media-only enforcement for messages posted in enforced channels.

For each human message the enforcer consults the classifier and the channel
policy store. A non-exempt message in an enforced channel is deleted, a
warning mentioning the author is posted, and a separate task removes that
warning after a fixed delay:

    Received -> Classified -> Ignored
                           -> Deleted -> Warned -> (delay) -> WarningDeleted

A failed delete aborts the sequence before any warning is sent; a failed
warning schedules no cleanup. A failed cleanup is only logged.
"""

from __future__ import annotations

import asyncio
from typing import Any, Set

import discord

from shut.configuration.app_configuration import (
    DEFAULT_WARNING_LIFETIME_SECONDS,
    DEFAULT_WARNING_MESSAGE,
)
from shut.datatypes.discord_datatypes import ChannelID
from shut.datatypes.moderation_datatypes import EnforcementOutcome, ModerationDecision
from shut.moderation import message_classifier
from shut.moderation.channel_policy_store import ChannelPolicyStore
from shut.util import discord_utils
from shut.util.logger import get_logger

logger = get_logger("enforcer")

TOGGLE_DISABLED_REPLY = "SHUT will stop removing messages from {mention}"
TOGGLE_ENABLED_REPLY = "SHUT will now remove non-media messages from {mention}"


class Enforcer:
    """Applies the media-only rule using a shared :class:`ChannelPolicyStore`."""

    def __init__(
        self,
        store: ChannelPolicyStore,
        warning_lifetime: float = DEFAULT_WARNING_LIFETIME_SECONDS,
        warning_message: str = DEFAULT_WARNING_MESSAGE,
    ) -> None:
        self.store = store
        self.warning_lifetime = warning_lifetime
        self.warning_message = warning_message
        self._pending_cleanups: Set[asyncio.Task] = set()

    # ========== Message path ==========

    def classify(self, message: Any) -> ModerationDecision:
        is_bot = discord_utils.is_ignored_author(message.author)
        # bot messages are never classified
        if is_bot:
            return ModerationDecision(is_bot_author=True, is_exempt=False, channel_is_enforced=False)
        return ModerationDecision(
            is_bot_author=False,
            is_exempt=message_classifier.is_exempt(message),
            channel_is_enforced=self.store.is_enforced(ChannelID.from_channel(message.channel)),
        )

    async def handle_message(self, message: discord.Message) -> EnforcementOutcome:
        """
        Run the enforcement sequence for one inbound message.

        Returns:
            How far the sequence got. ``WARNED`` means the warning was posted
            and its deletion has been scheduled.
        """
        decision = self.classify(message)
        if not decision.should_enforce:
            return EnforcementOutcome.IGNORED

        if not await discord_utils.safe_delete_message(message):
            logger.info(
                "[ENFORCER] Could not delete message %s in channel %s; skipping warning",
                message.id, message.channel.id,
            )
            return EnforcementOutcome.DELETE_FAILED

        text = self.warning_message.replace("{mention}", message.author.mention)
        warning = await discord_utils.safe_send_message(message.channel, text)
        if warning is None:
            logger.info("[ENFORCER] Warning for message %s was not sent", message.id)
            return EnforcementOutcome.WARN_FAILED

        logger.debug(
            "[ENFORCER] Removed message %s from %s in channel %s",
            message.id, message.author.id, message.channel.id,
        )
        self._schedule_cleanup(warning)
        return EnforcementOutcome.WARNED

    def _schedule_cleanup(self, warning: discord.Message) -> None:
        task = asyncio.create_task(self._delete_warning_later(warning))
        self._pending_cleanups.add(task)

        def _cleanup(completed: asyncio.Task) -> None:
            self._pending_cleanups.discard(completed)
            if completed.cancelled():
                return
            exc = completed.exception()
            if exc is not None:
                logger.error("[ENFORCER] Warning cleanup for message %s crashed", warning.id, exc_info=exc)

        task.add_done_callback(_cleanup)

    async def _delete_warning_later(self, warning: discord.Message) -> None:
        await asyncio.sleep(self.warning_lifetime)
        if not await discord_utils.safe_delete_message(warning):
            logger.warning("[ENFORCER] Could not delete warning message %s", warning.id)

    @property
    def pending_cleanups(self) -> int:
        return len(self._pending_cleanups)

    async def wait_for_pending_cleanups(self) -> None:
        """Wait until every scheduled warning deletion has finished."""
        while self._pending_cleanups:
            tasks = list(self._pending_cleanups)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._pending_cleanups.difference_update(tasks)

    # ========== Command path ==========

    async def toggle_channel(self, channel: Any) -> str:
        """
        Toggle enforcement for ``channel`` and return the confirmation reply.

        Raises:
            ChannelPolicyError: The new state could not be persisted.
        """
        was_enforced = await self.store.toggle(ChannelID.from_channel(channel))
        template = TOGGLE_DISABLED_REPLY if was_enforced else TOGGLE_ENABLED_REPLY
        return template.format(mention=channel.mention)
