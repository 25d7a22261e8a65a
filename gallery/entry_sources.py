"""
Entry Sources

Produce the ordered list of album entries for a year, either from a local
text file (albums/<year>.txt) or from the spreadsheet tab named after the year.

The two sources fail differently: a missing text file is an error the caller
must stop on, while any spreadsheet problem is logged and reported as "no
entries".
"""

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

import requests

from gallery_config import GalleryConfig

logger = logging.getLogger(__name__)

SHEETS_VALUES_URL = 'https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{range}'


class EntrySourceError(Exception):
    """Raised when a year's entries cannot be read at all"""


def clean_entries(values) -> List[str]:
    """Strip each value and drop the empty ones, keeping order"""
    entries = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            entries.append(text)
    return entries


class FileEntrySource:
    """Reads <albums_dir>/<year>.txt, one entry per line"""

    def __init__(self, albums_dir: Path):
        self.albums_dir = Path(albums_dir)

    def path_for(self, year) -> Path:
        return self.albums_dir / f"{year}.txt"

    def load(self, year) -> List[str]:
        path = self.path_for(year)
        if not path.exists():
            raise EntrySourceError(f"No file for year {year}: {path}")

        text = path.read_text(encoding='utf-8')
        entries = clean_entries(text.split('\n'))
        logger.info(f"Read {len(entries)} entries from {path}")
        return entries


class SheetEntrySource:
    """Reads the spreadsheet tab named after the year via the Sheets values API"""

    def __init__(self, sheet_id: str, api_key: str,
                 session: Optional[requests.Session] = None, timeout: int = 10):
        self.sheet_id = sheet_id
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def load(self, year) -> List[str]:
        url = SHEETS_VALUES_URL.format(
            sheet_id=quote(self.sheet_id, safe=''),
            range=quote(str(year), safe='')
        )
        try:
            response = self.session.get(url, params={'key': self.api_key}, timeout=self.timeout)
            if not response.ok:
                logger.error(f"Error fetching sheet data for {year}: HTTP {response.status_code}")
                return []
            rows = response.json().get('values') or []
        except (requests.exceptions.RequestException, ValueError, AttributeError) as e:
            logger.error(f"Error fetching sheet data for {year}: {e}")
            return []

        values = []
        for row in rows:
            if isinstance(row, list):
                values.extend(row)
            else:
                values.append(row)

        entries = clean_entries(values)
        logger.info(f"Read {len(entries)} entries from sheet tab '{year}'")
        return entries


def get_entry_source(mode: str, config: GalleryConfig,
                     session: Optional[requests.Session] = None):
    """
    Build the entry source for a deployment mode.

    Args:
        mode: 'file' or 'sheet'
        config: Resolved configuration
        session: Optional requests session for the spreadsheet source

    Raises:
        ValueError: For an unknown mode
        ConfigError: If sheet mode is requested without sheet settings
    """
    if mode == 'file':
        return FileEntrySource(config.albums_dir)
    if mode == 'sheet':
        config.require_sheet()
        return SheetEntrySource(config.sheet_id, config.google_api_key, session=session)
    raise ValueError(f"Unknown entry source: {mode}")
