"""
Utility functions and helpers for SHUT.

- **logger.py**: Centralized logging configuration with colored console output
  through prompt_toolkit, a rotating per-session log file, and quieted
  Discord/aiosqlite internals.

- **discord_utils.py**: Single-attempt Discord API helpers (delete, send,
  author and permission checks) that log failures instead of raising.
"""
