import json
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from docstore.api.app import create_app
from docstore.infra.config import ServerConfig
from docstore.store.database import Database


class ApiTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.db = Database.open(self.root)
        self.client = TestClient(create_app(self.db, ServerConfig(owner="tester")))
        self.client.post("/reset")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_home_and_status(self) -> None:
        response = self.client.get("/")
        self.assertEqual(200, response.status_code)
        self.assertEqual("Welcome to my server", response.text)
        self.assertEqual("This is a great API", response.headers["my-custom-header"])

        status = self.client.get("/status").json()
        self.assertTrue(status["up"])
        self.assertEqual("tester", status["owner"])
        self.assertIsInstance(status["timestamp"], int)

    def test_get_and_set(self) -> None:
        response = self.client.patch("/set", params={"file": "scott.json", "key": "username", "value": "scotty"})
        self.assertEqual(200, response.status_code)
        self.assertEqual("scott.json: Successfully set username to scotty", response.text)

        response = self.client.get("/get", params={"file": "scott.json", "key": "username"})
        self.assertEqual("scotty", response.text)

    def test_store_failures_become_400(self) -> None:
        response = self.client.get("/get", params={"file": "scott.json", "key": "nope"})
        self.assertEqual(400, response.status_code)
        self.assertEqual("scott.json: Invalid key nope", response.text)

        response = self.client.patch("/set", params={"file": "nobody.json", "key": "a", "value": "b"})
        self.assertEqual(400, response.status_code)
        self.assertEqual("nobody.json: File not found", response.text)

    def test_missing_arguments(self) -> None:
        response = self.client.patch("/set", params={"file": "scott.json", "key": "a"})
        self.assertEqual(400, response.status_code)
        self.assertEqual("Invalid arguments", response.text)

    def test_write_creates_once(self) -> None:
        response = self.client.post("/write/new.json", content=json.dumps({"a": 1}))
        self.assertEqual(201, response.status_code)
        self.assertEqual("new.json: Successfully created", response.text)

        response = self.client.post("/write/new.json", content=json.dumps({"a": 2}))
        self.assertEqual(400, response.status_code)
        self.assertEqual("new.json: File already exists", response.text)

    def test_write_rejects_malformed_body_and_non_json_names(self) -> None:
        response = self.client.post("/write/bad.json", content="{nope")
        self.assertEqual(400, response.status_code)
        self.assertIn("Malformed data", response.text)
        self.assertFalse((self.root / "bad.json").exists())

        response = self.client.post("/write/notes.txt", content="{}")
        self.assertEqual(404, response.status_code)

    def test_write_rejects_non_object_bodies(self) -> None:
        for body in ("[1, 2]", "\"text\"", "3", "null"):
            response = self.client.post("/write/list.json", content=body)
            self.assertEqual(400, response.status_code, body)
            self.assertIn("JSON object", response.text)
        self.assertFalse((self.root / "list.json").exists())

    def test_remove_and_delete(self) -> None:
        response = self.client.patch("/remove", params={"file": "post.json", "key": "date"})
        self.assertEqual("post.json: date removed", response.text)

        response = self.client.delete("/delete", params={"file": "post.json"})
        self.assertEqual("post.json: deleted", response.text)

        response = self.client.delete("/delete", params={"file": "post.json"})
        self.assertEqual(400, response.status_code)

    def test_merge_and_set_operations(self) -> None:
        merged = self.client.get("/merge").json()
        self.assertEqual(["andrew", "post", "scott"], sorted(merged))

        response = self.client.get("/difference", params={"a": "scott.json", "b": "andrew.json"})
        self.assertEqual("username", response.text)

        response = self.client.get("/union", params={"a": "scott.json", "b": "post.json"})
        self.assertEqual(7, len(response.text.split(",")))

        response = self.client.get("/intersect", params={"a": "scott.json", "b": "missing.json"})
        self.assertEqual(400, response.status_code)

    def test_unknown_routes_are_404(self) -> None:
        for method, path in [("GET", "/nowhere"), ("POST", "/get"), ("PUT", "/set")]:
            response = self.client.request(method, path)
            self.assertEqual(404, response.status_code, path)
            self.assertIn("404", response.text)


if __name__ == "__main__":
    unittest.main()
