"""Moderation core: channel policy store, message classifier and enforcer."""
