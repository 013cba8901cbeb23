"""
Type-safe wrapper for Discord channel identifiers.
"""

from __future__ import annotations

from typing import Union

import discord


class ChannelID:
    """
    Wrapper for a Discord channel snowflake.

    Snowflakes are unsigned 64-bit integers. The value is stored as an int
    because that is how it is persisted in SQLite, and the hash matches the
    plain int so ``42 in {ChannelID(42)}`` holds.

    Example:
        >>> cid = ChannelID.from_int(123456789012345678)
        >>> cid.to_int()
        123456789012345678
        >>> ChannelID("123456789012345678") == 123456789012345678
        True
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[str, int, "ChannelID"]) -> None:
        """
        Raises:
            ValueError: If the value is not a non-negative integer snowflake.
        """
        if isinstance(value, ChannelID):
            self._value = value._value
            return
        if isinstance(value, bool):
            raise ValueError(f"Cannot create ChannelID from bool: {value}")
        if isinstance(value, int):
            parsed = value
        elif isinstance(value, str):
            parsed = int(value.strip())
        else:
            raise ValueError(f"Cannot create ChannelID from {type(value).__name__}: {value}")
        if parsed < 0:
            raise ValueError(f"Channel snowflake must be non-negative: {parsed}")
        self._value = parsed

    @classmethod
    def from_int(cls, value: int) -> "ChannelID":
        return cls(value)

    @classmethod
    def from_channel(cls, channel: Union[discord.abc.GuildChannel, discord.Thread, discord.abc.Messageable]) -> "ChannelID":
        """Create a ChannelID from any Discord channel object carrying an ``id``."""
        return cls(channel.id)  # type: ignore[union-attr]

    def to_int(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"ChannelID({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChannelID):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)
