"""Data models for gitwatch."""

from gitwatch.models.snapshot import NOTFOUND_SENTINEL, RETRIEVED_STATE_NAME, Snapshot

__all__ = [
    "NOTFOUND_SENTINEL",
    "RETRIEVED_STATE_NAME",
    "Snapshot",
]
