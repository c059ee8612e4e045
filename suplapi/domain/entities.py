from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Track:
    """One played song on a channel."""

    # Epoch time at which the track is/was played
    timestamp: int
    # Play date as formatted by the API
    date: str
    channel: int
    artist: str
    song: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Playlist:
    """One page of a channel's play history."""

    items: Tuple[Track, ...]
    # Opaque cursor for the following page
    next_token: int

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [track.to_dict() for track in self.items],
            'next_token': self.next_token,
        }
