"""
Album dataset file: {"<year>": [{"title": ..., "artist": ..., "url": ...}, ...]}

Key order in the file is the order the gallery shows years in.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)


def load_album_dataset(path: Path) -> Dict[str, List[dict]]:
    """
    Load the gallery dataset. Records keep exactly the fields the file gives
    them; their year is the key they are grouped under.

    Raises:
        FileNotFoundError: If the dataset file does not exist
        ValueError: If the file is not a year -> list mapping
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Album dataset must be an object keyed by year: {path}")

    dataset = {}
    for year, records in data.items():
        if not isinstance(records, list):
            raise ValueError(f"Albums for {year} must be a list: {path}")
        dataset[str(year)] = records

    logger.debug(f"Loaded {sum(len(r) for r in dataset.values())} albums from {path}")
    return dataset


def save_album_dataset(path: Path, dataset: Dict[str, List[dict]]) -> None:
    """Write the dataset back in year order, records unchanged"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(dataset, f, indent=2, ensure_ascii=False)
