import tempfile
import unittest
from pathlib import Path

from gallery_renderer import render_gallery, write_gallery


class RenderGalleryTests(unittest.TestCase):
    def setUp(self):
        self.dataset = {
            "2024": [
                {"title": "Record One", "artist": "Artist A", "url": "https://open.spotify.com/album/1"},
            ],
            "2019": [
                {"title": "Rock & Roll", "artist": "The <Band>", "url": "https://open.spotify.com/album/2"},
            ],
            "2021": [
                {"title": "Unresolved", "artist": "Somebody"},
            ],
        }

    def test_years_follow_dataset_order(self):
        html = render_gallery(self.dataset)

        positions = [html.index(f"<h2>{year}</h2>") for year in ("2024", "2019", "2021")]
        self.assertEqual(positions, sorted(positions))
        self.assertEqual(html.count('<div class="grid">'), 3)

    def test_entries_link_to_catalog_and_local_image(self):
        html = render_gallery(self.dataset)

        self.assertIn('href="https://open.spotify.com/album/1"', html)
        self.assertIn('src="images/Artist_A-Record_One.jpg"', html)
        self.assertIn("display: grid", html)

    def test_text_is_escaped(self):
        html = render_gallery(self.dataset)

        self.assertIn("Rock &amp; Roll", html)
        self.assertIn("The &lt;Band&gt;", html)
        self.assertNotIn("<Band>", html)

    def test_record_without_url_has_no_link(self):
        html = render_gallery({"2021": self.dataset["2021"]})

        self.assertNotIn("<a ", html)
        self.assertIn('src="images/Somebody-Unresolved.jpg"', html)

    def test_last_updated_is_shown(self):
        self.assertIn("Last updated: 01/02/2025 10:00:00", render_gallery(self.dataset, "01/02/2025 10:00:00"))
        self.assertNotIn("Last updated", render_gallery(self.dataset))

    def test_write_gallery_creates_parent(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_gallery(Path(tmp) / "docs" / "index.html", "<html></html>")
            self.assertEqual(path.read_text(encoding="utf-8"), "<html></html>")


if __name__ == "__main__":
    unittest.main()
