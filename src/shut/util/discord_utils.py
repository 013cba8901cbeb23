"""
discord_utils.py
================

Low-level Discord helpers used by the enforcer. Every gateway call here is a
single attempt: failures are logged and reported through the return value,
never raised, so one failed request cannot break the event handler that made
it.
"""

from typing import Any, Union

import discord

from shut.util.logger import get_logger

logger = get_logger("discord_utils")


def is_ignored_author(author: Union[discord.User, discord.Member]) -> bool:
    """Return True for authors enforcement never applies to (bot accounts)."""
    return bool(getattr(author, "bot", False))


def has_manage_messages(member: Any) -> bool:
    """Return True if the member holds the Manage Messages permission in its guild."""
    if not isinstance(member, discord.Member):
        return False
    return bool(member.guild_permissions.manage_messages)


async def safe_delete_message(message: discord.Message) -> bool:
    """
    Attempt to delete a Discord message, suppressing recoverable errors.

    Args:
        message (discord.Message): The message to delete.

    Returns:
        bool: True if deletion succeeded, False otherwise.
    """
    try:
        await message.delete()
        return True
    except discord.NotFound:
        logger.debug("Message %s was already deleted", message.id)
    except discord.Forbidden:
        logger.warning("No permission to delete message %s", message.id)
    except Exception as exc:
        logger.error("Error deleting message %s: %s", message.id, exc)
    return False


async def safe_send_message(channel: discord.abc.Messageable, content: str) -> discord.Message | None:
    """
    Send ``content`` to ``channel``.

    Returns:
        The sent message, or None if the request failed.
    """
    try:
        return await channel.send(content)
    except discord.Forbidden:
        logger.warning("No permission to send messages in channel %s", getattr(channel, "id", "?"))
    except Exception as exc:
        logger.error("Error sending message to channel %s: %s", getattr(channel, "id", "?"), exc)
    return None
