from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from shut import main as shut_main
from shut.datatypes.moderation_datatypes import EnforcementOutcome
from shut.moderation.enforcer import Enforcer


class FakeBot:
    def __init__(self):
        self.closed = False

    def is_closed(self):
        return self.closed

    async def close(self):
        self.closed = True


def make_session_bound_warning(bot, deleted):
    async def delete():
        if bot.closed:
            raise RuntimeError("Session is closed")
        deleted.append(900)

    return SimpleNamespace(id=900, delete=delete)


@pytest.mark.asyncio
async def test_shutdown_lets_warning_deletions_finish_before_closing_bot(store):
    await store.toggle(42)
    bot = FakeBot()
    deleted = []
    warning = make_session_bound_warning(bot, deleted)
    enforcer = Enforcer(store, warning_lifetime=0.01)
    message = SimpleNamespace(
        id=1,
        author=SimpleNamespace(id=5, bot=False, mention="<@5>"),
        channel=SimpleNamespace(id=42, send=AsyncMock(return_value=warning)),
        content="",
        attachments=[],
        delete=AsyncMock(),
    )

    assert await enforcer.handle_message(message) is EnforcementOutcome.WARNED
    assert enforcer.pending_cleanups == 1

    await shut_main.shutdown_runtime(bot, store, enforcer)

    assert deleted == [900]
    assert enforcer.pending_cleanups == 0
    assert bot.closed is True
    with pytest.raises(RuntimeError):
        _ = store._connection.connection


@pytest.mark.asyncio
async def test_shutdown_without_bot_closes_store(store):
    await shut_main.shutdown_runtime(None, store, None)

    with pytest.raises(RuntimeError):
        _ = store._connection.connection
