"""
Spotify API Client Infrastructure

Handles low-level Spotify API concerns:
- Client-credentials token exchange
- Album search requests
- API call accounting

Used by AlbumMatcher for all catalog interactions. There is no token refresh
and no retry: a run asks for one token and lives with the outcome.
"""

import base64
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

TOKEN_URL = 'https://accounts.spotify.com/api/token'
SEARCH_URL = 'https://api.spotify.com/v1/search'


class SpotifyAuthError(Exception):
    """Raised when Spotify refuses to issue an access token"""
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class SpotifyClient:
    """
    Low-level Spotify API client with authentication and search.
    """

    def __init__(self, client_id: str, client_secret: str,
                 session: Optional[requests.Session] = None, timeout: int = 10):
        """
        Initialize Spotify Client

        Args:
            client_id: Spotify application client id
            client_secret: Spotify application client secret
            session: Optional requests session (a new one is created if omitted)
            timeout: Per-request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests.Session()
        self.timeout = timeout

        self.stats = {
            'api_calls': 0,
            'failed_calls': 0,
        }

    # ========================================================================
    # AUTHENTICATION
    # ========================================================================

    def _basic_auth_header(self) -> str:
        credentials = f"{self.client_id}:{self.client_secret}"
        credentials_b64 = base64.b64encode(credentials.encode()).decode()
        return f'Basic {credentials_b64}'

    def get_access_token(self) -> str:
        """
        Exchange the client credentials for a bearer token

        Returns:
            Access token string

        Raises:
            SpotifyAuthError: If the token endpoint fails or answers without a token
        """
        try:
            response = self.session.post(
                TOKEN_URL,
                headers={
                    'Authorization': self._basic_auth_header(),
                    'Content-Type': 'application/x-www-form-urlencoded'
                },
                data={'grant_type': 'client_credentials'},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise SpotifyAuthError(f"Failed to reach Spotify token endpoint: {e}") from e

        self.stats['api_calls'] += 1

        if not response.ok:
            self.stats['failed_calls'] += 1
            raise SpotifyAuthError(
                f"Failed to get Spotify access token (HTTP {response.status_code})",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SpotifyAuthError(f"Invalid token response from Spotify: {e}") from e

        token = data.get('access_token') if isinstance(data, dict) else None

        if not token:
            raise SpotifyAuthError("Spotify token response did not include an access token")

        logger.debug("Spotify authentication successful")
        return token

    # ========================================================================
    # SEARCH
    # ========================================================================

    def search_albums(self, token: str, query: str, limit: int = 1) -> Optional[list]:
        """
        Run an album search

        Args:
            token: Bearer token from get_access_token()
            query: Search text, passed through as the q parameter
            limit: Maximum number of candidates to return

        Returns:
            List of album objects in Spotify's relevance order (possibly empty),
            or None if Spotify answered with a non-success status
        """
        response = self.session.get(
            SEARCH_URL,
            headers={'Authorization': f'Bearer {token}'},
            params={
                'q': query,
                'type': 'album',
                'limit': limit
            },
            timeout=self.timeout
        )
        self.stats['api_calls'] += 1

        if not response.ok:
            self.stats['failed_calls'] += 1
            logger.warning(f"Spotify search failed (HTTP {response.status_code}) for: {query}")
            return None

        data = response.json()
        albums = data.get('albums') if isinstance(data, dict) else None
        items = albums.get('items') if isinstance(albums, dict) else None
        if not isinstance(items, list):
            if data:
                logger.warning(f"Unexpected Spotify search response for: {query}")
            return []
        return [item for item in items if isinstance(item, dict)]
