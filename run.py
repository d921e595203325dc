import os
import sys

from dotenv import load_dotenv
from loguru import logger

if __name__ == "__main__":
    load_dotenv()

    from main import authorize_user, show_user_playlists

    if sys.argv[1:2] == ["auth"]:
        authorize_user()
        sys.exit(0)
    user_id = sys.argv[1] if len(sys.argv) > 1 else os.getenv("SPOTIFY_USER_ID")
    if not user_id:
        logger.error("Pass a user id or set SPOTIFY_USER_ID")
        sys.exit(1)
    show_user_playlists(user_id)
