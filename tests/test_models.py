from SpotifyMusic.models import Playlist, Track, TrackPage


def test_track_tolerates_local_file_fields():
    track = Track(
        id=None,
        name="Demo",
        album={"id": None, "name": ""},
        artists=[{"id": None, "name": "Me"}],
        is_local=True,
    )

    assert track.popularity is None
    assert track.artists[0].name == "Me"


def test_playlist_defaults_when_tracks_missing():
    playlist = Playlist(id="p1", name="Bare", owner={"id": "u"})

    assert playlist.tracks.total == 0
    assert playlist.tracks.items == []
    assert playlist.followers is None


def test_track_page_keeps_null_tracks():
    page = TrackPage(items=[{"track": None}, {"track": {"name": "x"}}], total=2)

    assert page.items[0].track is None
    assert page.items[1].track.name == "x"
