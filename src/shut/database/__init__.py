"""
Database package for SHUT.

Provides the long-lived aiosqlite connection manager and schema creation
used by the channel policy store.
"""
