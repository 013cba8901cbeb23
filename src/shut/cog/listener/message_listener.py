"""Message listener Cog for SHUT.

Forwards every created message to the :class:`Enforcer`. Each gateway event
already runs in its own task, so a slow delete or send here never holds up
other messages.
"""

import discord
from discord.ext import commands

from shut.moderation.enforcer import Enforcer
from shut.util.logger import get_logger

logger = get_logger("message_listener_cog")


class MessageListenerCog(commands.Cog):
    """Cog responsible for handling message creation events."""

    def __init__(self, discord_bot_instance, enforcer: Enforcer):
        self.bot = discord_bot_instance
        self.enforcer = enforcer
        logger.info("[MESSAGE LISTENER] Message listener cog loaded")

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message):
        try:
            outcome = await self.enforcer.handle_message(message)
        except Exception:
            logger.exception("[MESSAGE LISTENER] Unexpected error while moderating message %s", message.id)
            return
        logger.debug("[MESSAGE LISTENER] Message %s: %s", message.id, outcome)


def setup(discord_bot_instance, enforcer: Enforcer):
    discord_bot_instance.add_cog(MessageListenerCog(discord_bot_instance, enforcer))
