"""
Gallery Renderer
Builds the static docs/index.html page from the album dataset
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment

from cover_downloader import cover_filename

logger = logging.getLogger(__name__)

_jinja_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

GALLERY_TEMPLATE = _jinja_env.from_string("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<style>
  body { font-family: system-ui, sans-serif; margin: 0 auto; max-width: 1200px; padding: 1rem; background: #111; color: #eee; }
  h1 { margin-bottom: 0.25rem; }
  .updated { color: #999; font-size: 0.85rem; margin-top: 0; }
  h2 { border-bottom: 1px solid #333; padding-bottom: 0.25rem; margin-top: 2rem; }
  .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); gap: 1rem; }
  .album { color: inherit; text-decoration: none; }
  .album img { width: 100%; aspect-ratio: 1 / 1; object-fit: cover; border-radius: 4px; background: #222; }
  .album .name { font-weight: 600; font-size: 0.9rem; margin: 0.4rem 0 0; }
  .album .artist { color: #aaa; font-size: 0.8rem; margin: 0.1rem 0 0; }
</style>
</head>
<body>
<h1>{{ title }}</h1>
{% if last_updated %}
<p class="updated">Last updated: {{ last_updated }}</p>
{% endif %}
{% for year, albums in years %}
<h2>{{ year }}</h2>
<div class="grid">
{% for album in albums %}
{% if album.url %}
  <a class="album" href="{{ album.url }}" target="_blank" rel="noopener noreferrer">
{% else %}
  <div class="album">
{% endif %}
    <img src="images/{{ album.image }}" alt="{{ album.title }} by {{ album.artist }}" loading="lazy">
    <p class="name">{{ album.title }}</p>
    <p class="artist">{{ album.artist }}</p>
{% if album.url %}
  </a>
{% else %}
  </div>
{% endif %}
{% endfor %}
</div>
{% endfor %}
</body>
</html>
""")


def render_gallery(dataset: Dict[str, List[dict]], last_updated: Optional[str] = None,
                   title: str = 'Albums by Year') -> str:
    """
    Render the gallery page. Years appear in the dataset's own key order.

    Args:
        dataset: year -> album records ({title, artist, url})
        last_updated: Optional freshness stamp shown under the heading
        title: Page title

    Returns:
        HTML document as a string
    """
    years = []
    for year, records in dataset.items():
        albums = []
        for record in records:
            albums.append({
                'title': record.get('title', ''),
                'artist': record.get('artist', ''),
                'url': record.get('url') or '',
                'image': cover_filename(record.get('title', ''), record.get('artist', '')),
            })
        years.append((year, albums))

    return GALLERY_TEMPLATE.render(title=title, last_updated=last_updated, years=years)


def write_gallery(path: Path, html: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding='utf-8')
    logger.info(f"Wrote gallery to {path}")
    return path
