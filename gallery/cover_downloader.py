"""
Cover Downloader

Fetches album covers into a flat image directory. The file name is derived
from the record's artist and title, and an existing file means the cover (and
the record's Spotify URL) were already resolved on an earlier run: nothing is
re-checked and no request is made for it.

Known limitation: sanitizing is lossy, so two records that differ only in
punctuation or non-ASCII letters can map to the same file.
"""

import re
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

import requests

from album_matcher import AlbumMatcher

logger = logging.getLogger(__name__)

CACHED = 'cached'
DOWNLOADED = 'downloaded'
SKIPPED = 'skipped'


def sanitize_filename_part(text: str) -> str:
    """Replace every character outside [A-Za-z0-9_] with an underscore"""
    return re.sub(r'[^A-Za-z0-9_]', '_', text or '')


def cover_filename(title: str, artist: str) -> str:
    return f"{sanitize_filename_part(artist)}-{sanitize_filename_part(title)}.jpg"


class CoverDownloader:
    """Downloads missing covers, one catalog lookup per missing file"""

    def __init__(self, matcher: AlbumMatcher, session: requests.Session,
                 images_dir: Path, token_provider: Callable[[], str],
                 timeout: int = 15, dry_run: bool = False):
        """
        Args:
            matcher: AlbumMatcher used for single-candidate lookups
            session: requests session used for the image bytes
            images_dir: Directory holding the cover files
            token_provider: Called once, on the first cache miss, for a bearer token
            timeout: Image request timeout in seconds
            dry_run: Log what would be downloaded without writing files
        """
        self.matcher = matcher
        self.session = session
        self.images_dir = Path(images_dir)
        self.token_provider = token_provider
        self.timeout = timeout
        self.dry_run = dry_run
        self._token: Optional[str] = None
        self.downloaded = 0

    def _get_token(self) -> str:
        if self._token is None:
            self._token = self.token_provider()
        return self._token

    def cover_path(self, record: dict) -> Path:
        return self.images_dir / cover_filename(record.get('title', ''), record.get('artist', ''))

    def download(self, record: dict) -> str:
        """
        Make sure the record's cover exists locally.

        On a successful download the record gains its Spotify URL in place.

        Returns:
            'cached', 'downloaded' or 'skipped'
        """
        path = self.cover_path(record)
        if path.exists():
            logger.debug(f"  Cover cached: {path.name}")
            return CACHED

        title = record.get('title', '')
        artist = record.get('artist', '')
        query = f"{title} {artist}".strip()

        try:
            match = self.matcher.match(self._get_token(), query)
        except requests.exceptions.RequestException as e:
            logger.error(f"  Search failed for {query}: {e}")
            return SKIPPED

        if match is None or not match.cover or not match.url:
            logger.warning(f"  No cover found for {title} by {artist}")
            return SKIPPED

        if self.dry_run:
            logger.info(f"  [DRY RUN] Would download {match.cover} -> {path.name}")
            return SKIPPED

        try:
            response = self.session.get(match.cover, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"  Image download failed for {title}: {e}")
            return SKIPPED

        if not response.ok:
            logger.error(f"  Image download failed for {title} (HTTP {response.status_code})")
            return SKIPPED

        self.images_dir.mkdir(parents=True, exist_ok=True)
        try:
            path.write_bytes(response.content)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        record['url'] = match.url
        self.downloaded += 1
        logger.info(f"  ✓ Downloaded cover for {title} by {artist}")
        return DOWNLOADED

    def enrich_dataset(self, dataset: Dict[str, List[dict]]) -> Dict[str, int]:
        """Run download() over every record, year by year, in dataset order"""
        counts = {CACHED: 0, DOWNLOADED: 0, SKIPPED: 0}
        for year, records in dataset.items():
            logger.info(f"Year {year}: {len(records)} albums")
            for record in records:
                counts[self.download(record)] += 1
        return counts
