"""
Configuration Module for the Album Year Gallery
Resolves credentials and paths once and hands them to each component
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENTRY_SOURCES = ('file', 'sheet')


class ConfigError(Exception):
    """Raised when a required setting is missing or invalid"""


@dataclass(frozen=True)
class GalleryConfig:
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    sheet_id: Optional[str] = None
    google_api_key: Optional[str] = None
    entry_source: str = 'file'
    albums_dir: Path = Path('albums')
    json_dir: Path = Path('docs') / 'json'
    images_dir: Path = Path('docs') / 'images'
    album_data_file: Path = Path('data') / 'albums.json'
    gallery_html: Path = Path('docs') / 'index.html'
    last_updated_file: Path = Path('docs') / 'last-updated.txt'
    log_dir: Path = Path('log')

    def require_spotify(self):
        """Fail fast when Spotify credentials are absent"""
        if not self.client_id or not self.client_secret:
            raise ConfigError(
                "Missing Spotify credentials. "
                "Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET"
            )

    def require_sheet(self):
        """Fail fast when spreadsheet access is not configured"""
        if not self.sheet_id or not self.google_api_key:
            raise ConfigError(
                "Missing spreadsheet settings. "
                "Set GOOGLE_SHEET_ID and GOOGLE_API_KEY"
            )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config(env: Optional[Mapping[str, str]] = None,
                env_file: Optional[Path] = None) -> GalleryConfig:
    """
    Build a GalleryConfig from the environment.

    A .env file is always offered to python-dotenv first. Variables that are
    already set in the process environment win over the file.

    Args:
        env: Mapping to read instead of os.environ (dotenv is skipped)
        env_file: Explicit .env path (default: search from the working directory)

    Returns:
        GalleryConfig instance
    """
    if env is None:
        load_dotenv(dotenv_path=env_file)
        env = os.environ

    entry_source = (_clean(env.get('ENTRY_SOURCE')) or 'file').lower()
    if entry_source not in ENTRY_SOURCES:
        raise ConfigError(
            f"Invalid ENTRY_SOURCE '{entry_source}' (expected one of {', '.join(ENTRY_SOURCES)})"
        )

    def path_setting(name: str, default: Path) -> Path:
        value = _clean(env.get(name))
        return Path(value).expanduser() if value else default

    defaults = GalleryConfig()
    config = GalleryConfig(
        client_id=_clean(env.get('SPOTIFY_CLIENT_ID')),
        client_secret=_clean(env.get('SPOTIFY_CLIENT_SECRET')),
        sheet_id=_clean(env.get('GOOGLE_SHEET_ID')),
        google_api_key=_clean(env.get('GOOGLE_API_KEY')),
        entry_source=entry_source,
        albums_dir=path_setting('ALBUMS_DIR', defaults.albums_dir),
        json_dir=path_setting('JSON_DIR', defaults.json_dir),
        images_dir=path_setting('IMAGES_DIR', defaults.images_dir),
        album_data_file=path_setting('ALBUM_DATA_FILE', defaults.album_data_file),
        gallery_html=path_setting('GALLERY_HTML', defaults.gallery_html),
        last_updated_file=path_setting('LAST_UPDATED_FILE', defaults.last_updated_file),
        log_dir=path_setting('LOG_DIR', defaults.log_dir),
    )
    logger.debug(f"Configuration loaded (entry source: {config.entry_source})")
    return config
