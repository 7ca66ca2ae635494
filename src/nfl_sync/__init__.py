"""Scheduled sync of NFL play-by-play and alternate-line odds feeds into a REST upsert store."""

__version__ = "1.0.0"
