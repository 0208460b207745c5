import io
import json
import logging
import os
import unittest
from unittest import mock

from docstore.infra.logging import configure_logging


class ConfigureLoggingTest(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self.saved = (list(root.handlers), root.level)
        self.access_level = logging.getLogger("uvicorn.access").level

    def tearDown(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self.saved[0]
        root.setLevel(self.saved[1])
        logging.getLogger("uvicorn.access").setLevel(self.access_level)

    def test_records_render_as_json_with_extras(self) -> None:
        stream = io.StringIO()
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
            configure_logging(stream=stream)

        logging.getLogger("docstore.audit").info("user.json: deleted", extra={"event": "audit"})
        logging.getLogger("uvicorn.error").info("Started server process")

        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        self.assertEqual("user.json: deleted", first["message"])
        self.assertEqual("audit", first["event"])
        self.assertEqual("docstore.audit", first["logger"])
        self.assertEqual("uvicorn.error", second["logger"])
        self.assertEqual(logging.DEBUG, logging.getLogger().level)

    def test_access_log_can_be_silenced(self) -> None:
        stream = io.StringIO()
        with mock.patch.dict(os.environ, {"DOCSTORE_ACCESS_LOG": "0"}):
            configure_logging(stream=stream)

        logging.getLogger("uvicorn.access").info("GET / 200")
        self.assertEqual("", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
