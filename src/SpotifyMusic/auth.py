import os
from urllib.parse import urlencode

import requests
import simplejson as json
from loguru import logger

from .models import Tokens

ACCOUNTS_URL = "https://accounts.spotify.com"
TOKEN_URL = f"{ACCOUNTS_URL}/api/token"
AUTHORIZE_URL = f"{ACCOUNTS_URL}/authorize"


class UserTokenRequired(RuntimeError):
    pass


def _token_request(data: dict, client_id: str, client_secret: str, session=None) -> dict:
    post = session.post if session is not None else requests.post
    response = post(TOKEN_URL, data=data, auth=(client_id, client_secret))
    if not response.ok:
        logger.error(
            "Token request failed with {} {}", response.status_code, response.reason
        )
        logger.debug(response.text)
    response.raise_for_status()
    try:
        return response.json(cls=json.JSONDecoder)
    except json.JSONDecodeError:
        logger.exception("Failed to parse token response")
        raise


def request_app_token(client_id: str, client_secret: str, session=None) -> str:
    """Client credentials flow. The token can read public playlists only."""
    content = _token_request(
        {"grant_type": "client_credentials"}, client_id, client_secret, session
    )
    logger.info("Got app token, expires in {}s", content.get("expires_in"))
    return content["access_token"]


def authorize_url(
    client_id: str, redirect_uri: str, scope: str | None = None, state: str | None = None
) -> str:
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
    }
    if scope:
        params["scope"] = scope
    if state:
        params["state"] = state
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def request_user_token(
    client_id: str, client_secret: str, code: str, redirect_uri: str, session=None
) -> str:
    content = _token_request(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        },
        client_id,
        client_secret,
        session,
    )
    logger.info("Got user token with scope {!r}", content.get("scope"))
    return content["access_token"]


def load_tokens(access_token: str, path: str = "config.json") -> Tokens:
    user_token = None
    if os.path.exists(path):
        with open(path, "r") as f:
            user_token = json.load(f).get("user_token")
    else:
        logger.warning("{} not found, mutating calls will be unavailable", path)
    return Tokens(access_token=access_token, user_token=user_token)


def save_tokens(tokens: Tokens, path: str = "config.json"):
    with open(path, "w") as f:
        json.dump({"user_token": tokens.user_token}, f)
