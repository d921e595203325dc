from pydantic import BaseModel, Field


class Tokens(BaseModel):
    access_token: str
    user_token: str | None = None


class Artist(BaseModel):
    id: str | None = None
    name: str


class Album(BaseModel):
    id: str | None = None
    name: str


class Track(BaseModel):
    id: str | None = None
    name: str
    track_number: int | None = None
    disc_number: int | None = None
    duration_ms: int | None = None
    popularity: int | None = None
    explicit: bool | None = None
    album: Album | None = None
    artists: list[Artist] = []


class PlaylistItem(BaseModel):
    added_at: str | None = None
    track: Track | None = None


class PlaylistTracks(BaseModel):
    href: str | None = None
    total: int = 0
    items: list[PlaylistItem] = []


class Owner(BaseModel):
    id: str
    display_name: str | None = None


class Followers(BaseModel):
    total: int = 0


class Playlist(BaseModel):
    id: str
    name: str
    description: str | None = None
    owner: Owner
    public: bool | None = None
    collaborative: bool = False
    tracks: PlaylistTracks = Field(default_factory=PlaylistTracks)
    followers: Followers | None = None
    uri: str | None = None
    href: str | None = None
    snapshot_id: str | None = None


class PlaylistPage(BaseModel):
    items: list[Playlist | None] = []
    total: int = 0
    limit: int | None = None
    offset: int = 0
    next: str | None = None


class TrackPage(BaseModel):
    items: list[PlaylistItem] = []
    total: int = 0
    limit: int | None = None
    offset: int = 0
    next: str | None = None
