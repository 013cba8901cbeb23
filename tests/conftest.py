"""
Pytest configuration and fixtures for SHUT tests.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from shut.moderation.channel_policy_store import ChannelPolicyStore  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "settings.sqlite"


@pytest_asyncio.fixture
async def store(db_path):
    """A freshly loaded store on an empty database, closed after the test."""
    channel_store = await ChannelPolicyStore.load(db_path)
    yield channel_store
    await channel_store.close()
