"""Event listener Cog for SHUT.

Handles bot lifecycle events: logs the connected account and the guilds it
serves once the gateway session is ready.
"""

import discord
from discord.ext import commands

from shut.moderation.channel_policy_store import ChannelPolicyStore
from shut.util.logger import get_logger

logger = get_logger("events_listener")


class EventsListenerCog(commands.Cog):
    """Handles Discord bot lifecycle events."""

    def __init__(self, bot: discord.Bot, store: ChannelPolicyStore) -> None:
        self.bot = bot
        self.store = store
        logger.info("[EVENTS LISTENER] Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        if not self.bot.user:
            logger.warning("[EVENTS LISTENER] Bot partially connected, user info not yet available.")
            return

        logger.info("Bot connected as %s (ID: %s)", self.bot.user, self.bot.user.id)
        logger.info("Guilds:")
        for guild in self.bot.guilds:
            logger.info("\t%s", guild.name)
        logger.info(
            "[EVENTS LISTENER] Enforcing media-only rule in %d channel(s)",
            len(self.store.enforced_channels),
        )


def setup(discord_bot_instance: discord.Bot, store: ChannelPolicyStore) -> None:
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance, store))
