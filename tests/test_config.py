import tempfile
import unittest
from pathlib import Path

from docstore.infra.config import AppConfig, load_config


class LoadConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_missing_file_uses_defaults(self) -> None:
        cfg = load_config(self.dir / "absent.yaml")

        self.assertEqual(AppConfig(), cfg)
        self.assertEqual(5000, cfg.server.port)
        self.assertFalse(cfg.storage.lock_paths)
        self.assertFalse(cfg.storage.strict_presence)

    def test_partial_file_fills_defaults(self) -> None:
        path = self.dir / "settings.yaml"
        path.write_text("storage:\n  data_dir: /srv/docs\n  lock_paths: true\nserver:\n  port: 8080\n", encoding="utf-8")

        cfg = load_config(path)

        self.assertEqual("/srv/docs", cfg.storage.data_dir)
        self.assertEqual("log.txt", cfg.storage.log_file)
        self.assertTrue(cfg.storage.lock_paths)
        self.assertEqual(8080, cfg.server.port)
        self.assertEqual("127.0.0.1", cfg.server.host)

    def test_empty_file(self) -> None:
        path = self.dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        self.assertEqual(AppConfig(), load_config(path))


if __name__ == "__main__":
    unittest.main()
