import os
import sys

import pytest
import requests
import simplejson as json

# Allow running the suite without installing the package
_SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

from SpotifyMusic import SpotifyMusic
from SpotifyMusic.models import Tokens


def make_response(payload=None, status_code: int = 200, raw: bytes | None = None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.encoding = "utf-8"
    if raw is not None:
        response._content = raw
    elif payload is None:
        response._content = b""
    else:
        response._content = json.dumps(payload).encode()
    return response


class FakeSession(requests.Session):
    """Records outgoing requests and replays queued responses."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self.responses = []

    def queue(self, payload=None, status_code: int = 200, raw: bytes | None = None):
        self.responses.append(make_response(payload, status_code, raw))

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        response.url = url
        return response

    @property
    def last_body(self):
        return json.loads(self.calls[-1][2]["data"])


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def tokens():
    return Tokens(access_token="app-token", user_token="user-token")


@pytest.fixture
def client(session, tokens):
    return SpotifyMusic(tokens, session=session)


def playlist_json(playlist_id: str, name: str, owner: str = "rweyant", total: int = 0):
    return {
        "id": playlist_id,
        "name": name,
        "owner": {"id": owner, "display_name": owner},
        "public": True,
        "collaborative": False,
        "tracks": {
            "href": f"https://api.spotify.com/v1/users/{owner}/playlists/{playlist_id}/tracks",
            "total": total,
        },
        "uri": f"spotify:user:{owner}:playlist:{playlist_id}",
        "href": f"https://api.spotify.com/v1/users/{owner}/playlists/{playlist_id}",
    }


def track_json(track_id: str, name: str, artists: list[tuple[str, str]]):
    return {
        "track": {
            "id": track_id,
            "name": name,
            "track_number": 1,
            "disc_number": 1,
            "duration_ms": 215000,
            "popularity": 42,
            "explicit": False,
            "album": {"id": f"album-{track_id}", "name": f"Album {name}"},
            "artists": [{"id": aid, "name": aname} for aid, aname in artists],
        }
    }
