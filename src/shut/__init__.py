"""
SHUT - media-only channel moderation for Discord

Core Components:

- **Channel policy store**: the set of channels under enforcement, kept in
  memory and mirrored in SQLite so it survives restarts
- **Message classifier**: a message is exempt when it carries an attachment
  or a hyperlink
- **Enforcer**: deletes non-exempt messages in enforced channels, posts a
  warning and removes it a few seconds later

Usage:
    from shut.main import main
    main()
"""
