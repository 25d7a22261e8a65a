#!/usr/bin/env python3
"""
Fetch Year - look up a year's albums on Spotify and write docs/json/<year>.json

Entries come from albums/<year>.txt (one album per line) or, with
--source sheet, from the spreadsheet tab named after the year. Each entry is
searched on Spotify in order; entries without a match are skipped. The year's
JSON file is rewritten from scratch on every run and docs/last-updated.txt is
stamped.

Usage:
    python gallery/fetch_year.py 2024
    python gallery/fetch_year.py 2024 --source sheet
    python gallery/fetch_year.py 2024 --year-aware --debug
"""

import logging
from typing import Optional

import requests

from album_matcher import AlbumMatcher
from entry_sources import EntrySourceError, SheetEntrySource, get_entry_source
from gallery_config import ENTRY_SOURCES, ConfigError, GalleryConfig, load_config
from script_base import ScriptBase, run_script
from spotify_client import SpotifyAuthError, SpotifyClient
from year_cache import write_last_updated, write_year_dataset

logger = logging.getLogger(__name__)


def generate_year_json(year: str, config: GalleryConfig, source_mode: str,
                       session: requests.Session, year_aware: bool = False,
                       dry_run: bool = False, log: Optional[logging.Logger] = None) -> dict:
    """
    Match every entry for a year and write the year's JSON file.

    Args:
        year: Year key (file name, sheet tab and output name)
        config: Resolved configuration
        source_mode: 'file' or 'sheet'
        session: requests session shared by Spotify and the spreadsheet source
        year_aware: Add a year filter and prefer albums/EPs over singles
        dry_run: Match but do not write any files
        log: Logger for progress output

    Returns:
        Stats dict

    Raises:
        ConfigError: Missing credentials
        EntrySourceError: Missing entry file in file mode
        SpotifyAuthError: Token request failed
    """
    log = log or logger
    config.require_spotify()

    source = get_entry_source(source_mode, config, session=session)
    entries = source.load(year)

    stats = {
        'entries': len(entries),
        'found': 0,
        'not_found': 0,
        'errors': 0,
        'api_calls': 0,
        'written': False,
    }

    if not entries and isinstance(source, SheetEntrySource):
        log.warning(f"No entries for {year} in the spreadsheet, nothing written")
        return stats

    client = SpotifyClient(config.client_id, config.client_secret, session=session)
    matcher = AlbumMatcher(client)
    token = client.get_access_token()

    albums = []
    for i, entry in enumerate(entries, start=1):
        log.info(f"[{i}/{len(entries)}] {entry}")
        try:
            album = matcher.match(token, entry, year if year_aware else None)
        except requests.exceptions.RequestException as e:
            stats['errors'] += 1
            log.error(f"  Error fetching {entry}: {e}")
            continue

        if album:
            albums.append(album)
            stats['found'] += 1
            log.info(f"  ✓ Found: {album.name} by {album.artist}")
        else:
            stats['not_found'] += 1
            log.info(f"  ✗ Skipped (not found): {entry}")

    stats['api_calls'] = client.stats['api_calls']

    if dry_run:
        log.info(f"[DRY RUN] Would write {len(albums)} albums for {year}")
        return stats

    path = write_year_dataset(config.json_dir, year, albums)
    stamp = write_last_updated(config.last_updated_file)
    stats['written'] = True
    log.info(f"Generated {path} with {len(albums)} albums (updated {stamp})")
    return stats


def main(argv=None) -> bool:
    config = load_config()

    script = ScriptBase(
        name="fetch_year",
        description="Look up a year's albums on Spotify and write the year's JSON file",
        epilog="""
Examples:
  python gallery/fetch_year.py 2024
  python gallery/fetch_year.py 2024 --source sheet
  python gallery/fetch_year.py 2024 --year-aware --dry-run
        """,
        log_dir=config.log_dir
    )
    script.parser.add_argument('year', help='Year to process (albums/<year>.txt or the sheet tab)')
    script.parser.add_argument(
        '--source',
        choices=ENTRY_SOURCES,
        default=config.entry_source,
        help=f'Where entries come from (default: {config.entry_source})'
    )
    script.parser.add_argument(
        '--year-aware',
        action='store_true',
        help='Filter the search by year and prefer albums/EPs over singles'
    )
    script.add_common_args()

    args = script.parse_args(argv)

    script.print_header(
        settings={
            "Year": args.year,
            "Entry source": args.source,
            "Output": config.json_dir / f"{args.year}.json",
        },
        modes={
            "DRY RUN": args.dry_run,
            "YEAR AWARE": args.year_aware,
        },
        title=f"Fetch albums for {args.year}"
    )

    session = requests.Session()
    try:
        stats = generate_year_json(
            args.year,
            config,
            args.source,
            session,
            year_aware=args.year_aware,
            dry_run=args.dry_run,
            log=script.logger
        )
    except (ConfigError, EntrySourceError, SpotifyAuthError) as e:
        script.logger.error(str(e))
        return False
    finally:
        session.close()

    script.print_summary(stats)
    return True


def cli():
    run_script(main)


if __name__ == "__main__":
    cli()
