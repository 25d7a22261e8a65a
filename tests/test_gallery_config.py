import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gallery_config import ConfigError, GalleryConfig, load_config


class LoadConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = load_config(env={})

        self.assertIsNone(config.client_id)
        self.assertEqual(config.entry_source, "file")
        self.assertEqual(config.albums_dir, Path("albums"))
        self.assertEqual(config.json_dir, Path("docs") / "json")
        self.assertEqual(config.images_dir, Path("docs") / "images")

    def test_values_are_read_and_trimmed(self):
        config = load_config(env={
            "SPOTIFY_CLIENT_ID": " id ",
            "SPOTIFY_CLIENT_SECRET": "secret",
            "GOOGLE_SHEET_ID": "",
            "ENTRY_SOURCE": "Sheet",
            "JSON_DIR": "out/json",
        })

        self.assertEqual(config.client_id, "id")
        self.assertIsNone(config.sheet_id)
        self.assertEqual(config.entry_source, "sheet")
        self.assertEqual(config.json_dir, Path("out/json"))

    def test_invalid_entry_source(self):
        with self.assertRaises(ConfigError):
            load_config(env={"ENTRY_SOURCE": "database"})

    def test_env_file_does_not_override_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            env_file = Path(tmp) / ".env"
            env_file.write_text(
                "SPOTIFY_CLIENT_ID=from-file\nSPOTIFY_CLIENT_SECRET=file-secret\n", encoding="utf-8"
            )
            with mock.patch.dict("os.environ", {"SPOTIFY_CLIENT_ID": "from-env"}, clear=True):
                config = load_config(env_file=env_file)

        self.assertEqual(config.client_id, "from-env")
        self.assertEqual(config.client_secret, "file-secret")


class RequirementTests(unittest.TestCase):
    def test_require_spotify(self):
        with self.assertRaises(ConfigError):
            GalleryConfig(client_id="id").require_spotify()
        GalleryConfig(client_id="id", client_secret="secret").require_spotify()

    def test_require_sheet(self):
        with self.assertRaises(ConfigError):
            GalleryConfig(sheet_id="abc").require_sheet()
        GalleryConfig(sheet_id="abc", google_api_key="key").require_sheet()


if __name__ == "__main__":
    unittest.main()
