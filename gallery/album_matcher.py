"""
Album Matcher

Turns a free-text album entry into a single Spotify album.

Matching is deliberately first-match: Spotify's relevance order is trusted, and
the only rule layered on top is that a year-aware lookup prefers a full album
or EP over a single. Ties are always broken by catalog order.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from spotify_client import SpotifyClient

logger = logging.getLogger(__name__)

SIMPLE_LIMIT = 1
YEAR_AWARE_LIMIT = 10
PREFERRED_ALBUM_TYPES = ('album', 'ep')


@dataclass(frozen=True)
class MatchResult:
    name: str
    artist: str
    cover: str
    url: str

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'artist': self.artist,
            'cover': self.cover,
            'url': self.url,
        }


def build_search_query(query: str, year=None) -> str:
    """Append Spotify's textual year filter when a year is given"""
    if year is None or str(year).strip() == '':
        return query
    return f"{query} year:{year}"


def select_candidate(albums: List[dict], year_aware: bool = False) -> Optional[dict]:
    """
    Pick the candidate to use from a list of Spotify albums.

    Args:
        albums: Candidates in Spotify's order
        year_aware: Prefer the first album/EP over singles

    Returns:
        The selected album dict, or None for an empty list
    """
    if not albums:
        return None

    if year_aware:
        for album in albums:
            album_type = (album.get('album_type') or '').lower()
            if album_type in PREFERRED_ALBUM_TYPES:
                return album

    return albums[0]


def to_match_result(album: dict) -> MatchResult:
    """Extract the fields the gallery keeps from a Spotify album object"""
    artists = ', '.join(a.get('name') or '' for a in album.get('artists') or [] if isinstance(a, dict))
    images = [image for image in album.get('images') or [] if isinstance(image, dict)]
    cover = (images[0].get('url') or '') if images else ''
    url = (album.get('external_urls') or {}).get('spotify') or ''
    return MatchResult(
        name=album.get('name') or '',
        artist=artists,
        cover=cover,
        url=url,
    )


class AlbumMatcher:
    """Best-effort matcher on top of SpotifyClient"""

    def __init__(self, client: SpotifyClient):
        self.client = client

    def match(self, token: str, query: str, year=None) -> Optional[MatchResult]:
        """
        Look up one entry.

        Without a year this asks Spotify for a single candidate and takes it.
        With a year the query gains a year filter, up to ten candidates are
        requested, and the first album/EP wins over any single.

        Returns:
            MatchResult, or None when Spotify errors or finds nothing
        """
        year_aware = year is not None and str(year).strip() != ''
        search_query = build_search_query(query, year)
        limit = YEAR_AWARE_LIMIT if year_aware else SIMPLE_LIMIT

        albums = self.client.search_albums(token, search_query, limit=limit)
        if albums is None:
            return None
        if not albums:
            logger.debug(f"  No candidates for: {search_query}")
            return None

        logger.debug(f"  Found {len(albums)} candidates for: {search_query}")
        album = select_candidate(albums, year_aware=year_aware)
        return to_match_result(album)
