from dataclasses import FrozenInstanceError

import pytest

from suplapi.domain.entities import Playlist, Track


def _track(**overrides):
    values = dict(timestamp=1577836800, date="2020-01-01", channel=70, artist="A", song="B")
    values.update(overrides)
    return Track(**values)


def test_track_is_immutable():
    track = _track()
    with pytest.raises(FrozenInstanceError):
        track.artist = "Other"


def test_playlist_items_are_stored_as_tuple():
    playlist = Playlist(items=[_track(), _track(song="C")], next_token=5)

    assert isinstance(playlist.items, tuple)
    assert [t.song for t in playlist.items] == ["B", "C"]


def test_playlist_equality_is_by_value():
    assert Playlist(items=(_track(),), next_token=5) == Playlist(items=[_track()], next_token=5)
    assert Playlist(items=(), next_token=5) != Playlist(items=(), next_token=6)


def test_to_dict_matches_api_shape():
    playlist = Playlist(items=(_track(),), next_token=5)

    assert playlist.to_dict() == {
        "items": [
            {"timestamp": 1577836800, "date": "2020-01-01", "channel": 70, "artist": "A", "song": "B"}
        ],
        "next_token": 5,
    }
