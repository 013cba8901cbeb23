"""
SHUT
====

A Discord bot that keeps selected channels media-only: any message without
an attachment or a link is deleted and its author gets a short-lived
warning. Moderators toggle channels with /toggle_channel.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. SHUT_HOME environment variable, if set.
    2. If running in a frozen/compiled context, the executable's directory.
    3. Otherwise the repository root (two levels above this package).
    """
    if env_home := os.getenv("SHUT_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from shut.configuration.app_configuration import app_config
from shut.moderation.channel_policy_store import ChannelPolicyStore
from shut.moderation.enforcer import Enforcer
from shut.util.logger import get_logger, handle_exception


logger = get_logger("main")


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.critical("'DISCORD_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Intents for guild, message content, member and presence events."""
    intents = discord.Intents.default()
    intents.guilds = True
    intents.messages = True
    intents.message_content = True
    intents.members = True
    intents.presences = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot, store: ChannelPolicyStore, enforcer: Enforcer) -> None:
    """Register every cog, handing each the shared store or enforcer."""
    from shut.cog.commands import moderation_cmds
    from shut.cog.listener import events_listener, message_listener

    events_listener.setup(discord_bot_instance, store)
    message_listener.setup(discord_bot_instance, enforcer)
    moderation_cmds.setup(discord_bot_instance, enforcer)

    logger.info("All cogs loaded successfully.")


def create_bot(store: ChannelPolicyStore, enforcer: Enforcer) -> discord.Bot:
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot, store, enforcer)
    return bot


async def start_bot(bot: discord.Bot, token: str) -> None:
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None, store: ChannelPolicyStore, enforcer: Enforcer | None) -> None:
    """Let pending warning deletions finish, close the gateway session, close the store.

    Warning deletions go through the bot's HTTP session, so they are awaited
    before the bot is closed.
    """
    if enforcer is not None:
        await enforcer.wait_for_pending_cleanups()

    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing Discord client: %s", exc)

    try:
        await store.close()
    except Exception as exc:
        logger.exception("Error while closing channel policy store: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Open the store, build the bot and run it, returning an exit code."""
    token = load_environment()

    try:
        logger.info("Loading enforced channels from %s...", app_config.database_path)
        store = await ChannelPolicyStore.load(app_config.database_path)
    except Exception as exc:
        logger.critical("Failed to initialize database: %s", exc)
        return 1

    enforcer = Enforcer(
        store,
        warning_lifetime=app_config.warning_lifetime_seconds,
        warning_message=app_config.warning_message,
    )

    try:
        bot = create_bot(store, enforcer)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        await shutdown_runtime(None, store, None)
        return 1

    exit_code = 0
    try:
        await start_bot(bot, token)
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot, store, enforcer)

    return exit_code


def main() -> int:
    """Entrypoint that runs the async runtime and returns the process code."""
    logger.info("Starting SHUT…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
