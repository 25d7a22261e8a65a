"""
Year Cache Writer
Persists matched albums as docs/json/<year>.json and stamps the run time
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%d/%m/%Y %H:%M:%S'


def year_json_path(json_dir: Path, year) -> Path:
    return Path(json_dir) / f"{year}.json"


def write_year_dataset(json_dir: Path, year, results: Iterable) -> Path:
    """
    Write the year's results, replacing whatever the file held before.

    Args:
        json_dir: Output directory (created if needed)
        year: Year key used for the file name
        results: MatchResult objects or plain dicts, in entry order

    Returns:
        Path of the written file
    """
    records = [r.to_dict() if hasattr(r, 'to_dict') else dict(r) for r in results]

    path = year_json_path(json_dir, year)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(json.dumps(records, indent=2, ensure_ascii=False))

    logger.debug(f"Wrote {len(records)} albums to {path}")
    return path


def format_timestamp(now: datetime) -> str:
    """en-GB style, 24-hour clock, no comma: 19/10/2026 14:03:22"""
    return now.strftime(TIMESTAMP_FORMAT)


def write_last_updated(path: Path, now: Optional[datetime] = None) -> str:
    """Overwrite the freshness sentinel with the current time"""
    stamp = format_timestamp(now or datetime.now())
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stamp, encoding='utf-8')
    return stamp


def read_last_updated(path: Path) -> Optional[str]:
    path = Path(path)
    if not path.exists():
        return None
    return path.read_text(encoding='utf-8').strip() or None
