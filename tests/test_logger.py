import logging
import os
import sys
import tempfile
import unittest
from unittest import mock

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from utils import logger as logger_module  # noqa: E402


class SharedLogFileTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.log_file = os.path.join(self.temp_dir.name, "shophub.log")
        self.patcher = mock.patch.object(logger_module, "LOG_FILE", self.log_file)
        self.patcher.start()
        logger_module._file_handler = None
        self.loggers = []

    def tearDown(self):
        handler = logger_module._file_handler
        for lg in self.loggers:
            for h in list(lg.handlers):
                lg.removeHandler(h)
        if handler is not None:
            handler.close()
        logger_module._file_handler = None
        self.patcher.stop()
        self.temp_dir.cleanup()

    def make_logger(self, name):
        lg = logger_module.get_logger(name)
        self.loggers.append(lg)
        return lg

    def file_handlers(self, lg):
        return [h for h in lg.handlers if isinstance(h, logging.FileHandler)]

    def test_loggers_share_one_file_handler(self):
        first = self.make_logger("shophub.test.shared.first")
        second = self.make_logger("shophub.test.shared.second")

        self.assertEqual(len(self.file_handlers(first)), 1)
        self.assertEqual(len(self.file_handlers(second)), 1)
        self.assertIs(self.file_handlers(first)[0], self.file_handlers(second)[0])
        self.assertIs(self.file_handlers(first)[0], logger_module._file_handler)

    def test_records_from_both_loggers_reach_the_file(self):
        first = self.make_logger("shophub.test.file.first")
        second = self.make_logger("shophub.test.file.second")
        first.info("hello from first")
        second.info("hello from second")
        logger_module._file_handler.flush()

        with open(self.log_file, encoding="utf-8") as fh:
            text = fh.read()
        self.assertIn("hello from first", text)
        self.assertIn("hello from second", text)


if __name__ == "__main__":
    unittest.main()
