import logging
import unittest

from logging_setup import APP_LOGGER, QUIET_LOGGERS, KeyValueFormatter, configure_logging


def _record(msg, *args, **extra):
    record = logging.LogRecord("docmgr.documents", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestKeyValueFormatter(unittest.TestCase):
    def test_base_fields(self):
        line = KeyValueFormatter().format(_record("documents_created count=%s", 2))
        self.assertTrue(line.startswith("time="))
        self.assertIn("level=INFO logger=docmgr.documents message=documents_created count=2", line)

    def test_extra_fields_appended(self):
        line = KeyValueFormatter().format(_record("dashboard_fetch_failed", collection="loans"))
        self.assertTrue(line.endswith("message=dashboard_fetch_failed collection=loans"))


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        configure_logging()

    def test_app_logger_level(self):
        configure_logging("debug")
        self.assertEqual(logging.getLogger(APP_LOGGER).level, logging.DEBUG)
        self.assertTrue(logging.getLogger("docmgr.backend").isEnabledFor(logging.DEBUG))

    def test_third_party_loggers_quieted(self):
        configure_logging("info")
        for name in QUIET_LOGGERS:
            self.assertEqual(logging.getLogger(name).level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
