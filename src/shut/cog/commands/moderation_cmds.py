"""
Moderation cog: the /toggle_channel slash command.

Toggles media-only enforcement for the channel the command is used in. The
command is only usable in a server and requires the Manage Messages
permission.
"""

import discord
from discord.ext import commands

from shut.moderation.channel_policy_store import ChannelPolicyError
from shut.moderation.enforcer import Enforcer
from shut.util.discord_utils import has_manage_messages
from shut.util.logger import get_logger

logger = get_logger("moderation_commands")


class ModerationCog(commands.Cog):
    """Per-channel enforcement toggle."""

    def __init__(self, discord_bot_instance, enforcer: Enforcer):
        self.discord_bot_instance = discord_bot_instance
        self.enforcer = enforcer
        logger.info("[MODERATION CMDS] Moderation cog loaded")

    async def _check_permissions(self, ctx: discord.ApplicationContext) -> bool:
        if not ctx.guild_id:
            await ctx.respond("This command can only be used in a server.", ephemeral=True)
            return False
        if not has_manage_messages(ctx.user):
            await ctx.respond("You need the Manage Messages permission.", ephemeral=True)
            return False
        return True

    @commands.slash_command(
        name="toggle_channel",
        description="Start or stop removing non-media messages in this channel.",
    )
    @discord.default_permissions(manage_messages=True)
    async def toggle_channel(self, ctx: discord.ApplicationContext):
        if not await self._check_permissions(ctx):
            return

        try:
            reply = await self.enforcer.toggle_channel(ctx.channel)
        except ChannelPolicyError:
            logger.exception("[MODERATION CMDS] Toggle failed for channel %s", ctx.channel_id)
            await ctx.respond("Could not update this channel's setting. Nothing was changed.", ephemeral=True)
            return

        await ctx.respond(reply)


def setup(discord_bot_instance, enforcer: Enforcer):
    discord_bot_instance.add_cog(ModerationCog(discord_bot_instance, enforcer))
