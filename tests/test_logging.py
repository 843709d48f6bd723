import logging
import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch

from rich.logging import RichHandler

from tohls import config
from tohls.exceptions import DependencyError
from tohls.logging import configure_logging
from tohls.utils import check_dependencies

class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("tohls")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    def test_console_only(self):
        self.assertIsNone(configure_logging("DEBUG", file_logging=False))
        logger = logging.getLogger("tohls")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], RichHandler)

    def test_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            with patch.object(config, "LOG_DIR", Path(tmp) / "logs"):
                log_file = configure_logging("INFO")
                logging.getLogger("tohls.pipeline").info("hello")
                self.tearDown()
            self.assertTrue(log_file.exists())
            self.assertIn("hello", log_file.read_text())

    def test_reconfigure_replaces_handlers(self):
        configure_logging("INFO", file_logging=False)
        configure_logging("WARNING", file_logging=False)
        self.assertEqual(len(logging.getLogger("tohls").handlers), 1)

class TestCheckDependencies(unittest.TestCase):
    @patch("tohls.utils.shutil.which")
    def test_all_present(self, mock_which):
        mock_which.return_value = "/usr/bin/tool"
        check_dependencies(["ffmpeg", "ffprobe"])

    @patch("tohls.utils.shutil.which")
    def test_missing(self, mock_which):
        mock_which.side_effect = lambda cmd: None if cmd == "ffprobe" else "/usr/bin/ffmpeg"
        with self.assertRaises(DependencyError) as ctx:
            check_dependencies(["ffmpeg", "ffprobe"])
        self.assertIn("ffprobe", str(ctx.exception))

if __name__ == "__main__":
    unittest.main()
