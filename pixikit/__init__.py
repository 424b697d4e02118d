"""Versions, credentials, package listings, project info and global launcher paths for pixi.toml projects."""

__version__ = "0.1.0"