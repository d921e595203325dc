import os

from loguru import logger

from SpotifyMusic import SpotifyMusic
from SpotifyMusic.auth import (
    authorize_url,
    load_tokens,
    request_app_token,
    request_user_token,
    save_tokens,
)

access_token = request_app_token(
    os.getenv("SPOTIFY_CLIENT_ID", ""), os.getenv("SPOTIFY_CLIENT_SECRET", "")
)
tokens = load_tokens(access_token, os.getenv("SPOTIFY_TOKEN_FILE", "config.json"))
timeout = os.getenv("SPOTIFY_TIMEOUT")
spotify = SpotifyMusic(tokens, timeout=float(timeout) if timeout else None)


def show_user_playlists(user_id: str):
    playlists = spotify.get_user_playlists(user_id, limit=50)
    if playlists.empty:
        logger.info("{} has no public playlists", user_id)
        return
    logger.info("Playlists of {}:\n{}", user_id, playlists.to_string(index=False))


def authorize_user():
    client_id = os.getenv("SPOTIFY_CLIENT_ID", "")
    redirect_uri = os.getenv("SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/callback")
    logger.info(
        "Open in browser:\n{}",
        authorize_url(client_id, redirect_uri, os.getenv("SPOTIFY_SCOPE")),
    )
    code = input("Paste the code parameter from the redirect: ").strip()
    spotify.tokens = tokens.model_copy(
        update={
            "user_token": request_user_token(
                client_id, os.getenv("SPOTIFY_CLIENT_SECRET", ""), code, redirect_uri
            )
        }
    )
    save_tokens(spotify.tokens, os.getenv("SPOTIFY_TOKEN_FILE", "config.json"))
    logger.info("User token saved")
