from collections.abc import Iterable

import pandas as pd
import requests
import simplejson as json
from loguru import logger

from .auth import UserTokenRequired
from .models import *

USER_URL = "https://api.spotify.com/v1/users"

PLAYLIST_LIST_COLUMNS = [
    "name",
    "id",
    "owner_id",
    "track_total",
    "public",
    "collaborative",
    "uri",
    "href",
]
PLAYLIST_COLUMNS = [
    "name",
    "id",
    "description",
    "track_total",
    "owner_id",
    "follower_total",
    "public",
    "collaborative",
]
TRACK_COLUMNS = [
    "name",
    "id",
    "track_number",
    "disc_number",
    "duration_ms",
    "popularity",
    "explicit",
    "album_name",
    "album_id",
]


def _uri_list(uris: str | Iterable[str]) -> list[str]:
    if isinstance(uris, str):
        return [uris]
    return list(uris)


def _artist_columns(position: int) -> tuple[str, str]:
    # first artist keeps the bare name, later ones are numbered from 1
    suffix = str(position) if position else ""
    return f"artists_id{suffix}", f"artists_name{suffix}"


class SpotifyMusic:
    __slots__ = ("__tokens", "__session", "__timeout")
    __tokens: Tokens
    __session: requests.Session
    __timeout: float | None

    def __init__(
        self,
        tokens: Tokens,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.__tokens = tokens
        self.__session = session or requests.session()
        self.__session.headers.update({"Accept": "application/json"})
        self.__timeout = timeout

    @property
    def tokens(self) -> Tokens:
        return self.__tokens

    @tokens.setter
    def tokens(self, tokens: Tokens):
        self.__tokens = tokens

    def __request(
        self,
        method: str,
        path: str,
        user: bool = False,
        params: dict | None = None,
        payload: dict | None = None,
    ):
        if user:
            if not self.__tokens.user_token:
                raise UserTokenRequired(f"{method} {path} needs an authorized user token")
            token = self.__tokens.user_token
        else:
            token = self.__tokens.access_token
        headers = {"Authorization": f"Bearer {token}"}
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload)
        link = f"{USER_URL}/{path}"
        logger.debug("{} {} params={}", method, link, params)
        response = self.__session.request(
            method,
            link,
            params=params or None,
            data=data,
            headers=headers,
            timeout=self.__timeout,
        )
        if not response.ok:
            logger.error(
                "{} {} failed with {} {}",
                method,
                link,
                response.status_code,
                response.reason,
            )
            logger.debug(response.text)
        response.raise_for_status()
        if not response.content:
            return None
        try:
            content = response.json(cls=json.JSONDecoder)
        except json.JSONDecodeError:
            logger.exception("Failed to parse response")
            raise
        logger.debug(json.dumps(content, indent=2, ensure_ascii=False))
        return content

    def get_user_playlists(self, user_id: str, **params) -> pd.DataFrame:
        """Playlists owned or followed by a user, one row per playlist."""
        content = self.__request("GET", f"{user_id}/playlists", params=params)
        page = PlaylistPage(**content)
        playlists = [playlist for playlist in page.items if playlist is not None]
        if len(playlists) != len(page.items):
            logger.debug(
                "Skipped {} empty playlist entries for {}",
                len(page.items) - len(playlists),
                user_id,
            )
        rows = [
            {
                "name": playlist.name,
                "id": playlist.id,
                "owner_id": playlist.owner.id,
                "track_total": playlist.tracks.total,
                "public": playlist.public,
                "collaborative": playlist.collaborative,
                "uri": playlist.uri,
                "href": playlist.href,
            }
            for playlist in playlists
        ]
        return pd.DataFrame(rows, columns=PLAYLIST_LIST_COLUMNS)

    def get_playlist(self, user_id: str, playlist_id: str, **params) -> pd.DataFrame:
        """Single playlist as a one-row frame.

        ``track_total`` counts the track items embedded in the response rather
        than the server-side total, so it reflects what was actually returned.
        """
        content = self.__request(
            "GET", f"{user_id}/playlists/{playlist_id}", params=params
        )
        playlist = Playlist(**content)
        row = {
            "name": playlist.name,
            "id": playlist.id,
            "description": playlist.description,
            "track_total": len(playlist.tracks.items),
            "owner_id": playlist.owner.id,
            "follower_total": playlist.followers.total if playlist.followers else None,
            "public": playlist.public,
            "collaborative": playlist.collaborative,
        }
        return pd.DataFrame([row], columns=PLAYLIST_COLUMNS)

    def get_playlist_tracks(
        self, user_id: str, playlist_id: str, **params
    ) -> pd.DataFrame:
        content = self.__request(
            "GET", f"{user_id}/playlists/{playlist_id}/tracks/", params=params
        )
        page = TrackPage(**content)
        tracks = [item.track for item in page.items if item.track is not None]
        if len(tracks) != len(page.items):
            logger.debug(
                "Skipped {} unavailable items in playlist {}",
                len(page.items) - len(tracks),
                playlist_id,
            )
        width = max((len(track.artists) for track in tracks), default=0)
        columns = list(TRACK_COLUMNS)
        for position in range(width):
            columns.extend(_artist_columns(position))
        rows = []
        for track in tracks:
            row = {
                "name": track.name,
                "id": track.id,
                "track_number": track.track_number,
                "disc_number": track.disc_number,
                "duration_ms": track.duration_ms,
                "popularity": track.popularity,
                "explicit": track.explicit,
                "album_name": track.album.name if track.album else None,
                "album_id": track.album.id if track.album else None,
            }
            for position, artist in enumerate(track.artists):
                id_column, name_column = _artist_columns(position)
                row[name_column] = artist.name
                row[id_column] = artist.id
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)

    def create_playlist(self, user_id: str, name: str, **fields) -> dict | None:
        """Create an empty playlist. Extra fields go into the body as-is."""
        content = self.__request(
            "POST",
            f"{user_id}/playlists/",
            user=True,
            payload={"name": name, **fields},
        )
        logger.info("Created playlist {!r} for {}", name, user_id)
        return content

    def add_tracks_to_playlist(
        self, user_id: str, playlist_id: str, uris: str | Iterable[str]
    ) -> dict | None:
        uris = _uri_list(uris)
        content = self.__request(
            "POST",
            f"{user_id}/playlists/{playlist_id}/tracks",
            user=True,
            payload={"uris": uris},
        )
        logger.info("Added {} tracks to {}", len(uris), playlist_id)
        return content

    def remove_tracks_from_playlist(
        self, user_id: str, playlist_id: str, uris: str | Iterable[str]
    ) -> dict | None:
        uris = _uri_list(uris)
        content = self.__request(
            "DELETE",
            f"{user_id}/playlists/{playlist_id}/tracks",
            user=True,
            payload={"tracks": [{"uri": uri} for uri in uris]},
        )
        logger.info("Removed {} tracks from {}", len(uris), playlist_id)
        return content

    def replace_playlist_tracks(
        self, user_id: str, playlist_id: str, uris: str | Iterable[str]
    ) -> dict | None:
        """Overwrite the playlist contents. An empty list clears it."""
        uris = _uri_list(uris)
        content = self.__request(
            "PUT",
            f"{user_id}/playlists/{playlist_id}/tracks",
            user=True,
            payload={"uris": uris},
        )
        logger.info("Replaced tracks of {} with {} tracks", playlist_id, len(uris))
        return content

    def reorder_playlist_tracks(
        self,
        user_id: str,
        playlist_id: str,
        range_start: int,
        insert_before: int,
        range_length: int = 1,
        snapshot_id: str | None = None,
    ) -> dict | None:
        payload = {
            "range_start": range_start,
            "insert_before": insert_before,
            "range_length": range_length,
        }
        if snapshot_id:
            payload["snapshot_id"] = snapshot_id
        return self.__request(
            "PUT",
            f"{user_id}/playlists/{playlist_id}/tracks",
            user=True,
            payload=payload,
        )

    def change_playlist_details(
        self,
        user_id: str,
        playlist_id: str,
        name: str | None = None,
        public: bool | None = None,
        collaborative: bool | None = None,
        description: str | None = None,
    ) -> dict | None:
        payload = {
            key: value
            for key, value in (
                ("name", name),
                ("public", public),
                ("collaborative", collaborative),
                ("description", description),
            )
            if value is not None
        }
        if not payload:
            raise ValueError("No playlist details to change")
        return self.__request(
            "PUT",
            f"{user_id}/playlists/{playlist_id}",
            user=True,
            payload=payload,
        )
