#!/usr/bin/env python3
"""
Build Gallery - download missing covers and render docs/index.html

Reads the album dataset (data/albums.json by default), fetches covers that are
not yet in docs/images/, stores the Spotify URLs it resolves back into the
dataset, and renders the year-grouped gallery page.

Usage:
    python gallery/build_gallery.py
    python gallery/build_gallery.py --data data/albums.json --output docs/index.html
    python gallery/build_gallery.py --dry-run
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from album_dataset import load_album_dataset, save_album_dataset
from album_matcher import AlbumMatcher
from cover_downloader import CoverDownloader
from gallery_config import ConfigError, GalleryConfig, load_config
from gallery_renderer import render_gallery, write_gallery
from script_base import ScriptBase, run_script
from spotify_client import SpotifyAuthError, SpotifyClient
from year_cache import read_last_updated

logger = logging.getLogger(__name__)


def build_gallery(config: GalleryConfig, session: requests.Session,
                  data_file: Optional[Path] = None, output: Optional[Path] = None,
                  dry_run: bool = False, log: Optional[logging.Logger] = None) -> dict:
    """
    Enrich the album dataset with covers and write the gallery page.

    Spotify credentials are only needed when at least one cover is missing.

    Raises:
        ConfigError: A cover is missing and no credentials are configured
        SpotifyAuthError: Token request failed
        FileNotFoundError: The dataset file does not exist
    """
    log = log or logger
    data_file = Path(data_file or config.album_data_file)
    output = Path(output or config.gallery_html)

    dataset = load_album_dataset(data_file)

    client = SpotifyClient(config.client_id, config.client_secret, session=session)

    def token_provider() -> str:
        config.require_spotify()
        return client.get_access_token()

    downloader = CoverDownloader(
        AlbumMatcher(client),
        session,
        config.images_dir,
        token_provider,
        dry_run=dry_run
    )
    try:
        counts = downloader.enrich_dataset(dataset)
    finally:
        # saved even when the loop stops part-way: a cover on disk is never looked up again
        if downloader.downloaded and not dry_run:
            save_album_dataset(data_file, dataset)
            log.info(f"Saved {downloader.downloaded} new Spotify URLs to {data_file}")

    stats = {
        'years': len(dataset),
        'albums': sum(len(records) for records in dataset.values()),
        **counts,
        'api_calls': client.stats['api_calls'],
    }

    html = render_gallery(dataset, last_updated=read_last_updated(config.last_updated_file))

    if dry_run:
        log.info(f"[DRY RUN] Would write {output} and update {data_file}")
        return stats

    write_gallery(output, html)
    return stats


def main(argv=None) -> bool:
    config = load_config()

    script = ScriptBase(
        name="build_gallery",
        description="Download missing album covers and render the year-grouped gallery page",
        epilog="""
Examples:
  python gallery/build_gallery.py
  python gallery/build_gallery.py --data data/albums.json --output docs/index.html
  python gallery/build_gallery.py --dry-run --debug
        """,
        log_dir=config.log_dir
    )
    script.parser.add_argument('--data', type=Path, default=None,
                               help=f'Album dataset file (default: {config.album_data_file})')
    script.parser.add_argument('--output', type=Path, default=None,
                               help=f'Gallery HTML path (default: {config.gallery_html})')
    script.add_common_args()

    args = script.parse_args(argv)

    script.print_header(
        settings={
            "Album data": args.data or config.album_data_file,
            "Images": config.images_dir,
            "Output": args.output or config.gallery_html,
        },
        modes={"DRY RUN": args.dry_run}
    )

    session = requests.Session()
    try:
        stats = build_gallery(
            config,
            session,
            data_file=args.data,
            output=args.output,
            dry_run=args.dry_run,
            log=script.logger
        )
    except FileNotFoundError as e:
        script.logger.error(f"Album dataset not found: {e.filename}")
        return False
    except (ConfigError, SpotifyAuthError, ValueError) as e:
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
