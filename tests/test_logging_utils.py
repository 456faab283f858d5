import logging
import unittest

from logging_utils import get_log_level, get_logger, log_event, set_log_level


class TestLogEvent(unittest.TestCase):
    def setUp(self):
        self._saved = get_log_level()

    def tearDown(self):
        set_log_level(self._saved)

    def test_fields_and_tag(self):
        with self.assertLogs(get_logger(), level="INFO") as ctx:
            log_event("info", "Engine", "Tick", elapsed=0.016, track=2)
        record = ctx.records[0]
        self.assertEqual(record.levelno, logging.INFO)
        self.assertEqual(record.tag, "Engine")
        self.assertEqual(record.getMessage(), "Tick | elapsed=0.016 track=2")

    def test_unknown_level_logs_at_info(self):
        with self.assertLogs(get_logger(), level="INFO") as ctx:
            log_event("chatty", "App", "hello")
        self.assertEqual(ctx.records[0].levelno, logging.INFO)

    def test_set_log_level(self):
        set_log_level("debug")
        self.assertEqual(get_log_level(), "DEBUG")
        set_log_level("nonsense")
        self.assertEqual(get_log_level(), "INFO")
        set_log_level(None)
        self.assertEqual(get_log_level(), "INFO")


if __name__ == "__main__":
    unittest.main()
