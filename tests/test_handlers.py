"""Tests for the UI handlers (no Gradio server involved)."""
from __future__ import annotations

import io
import json


class TestLoadHandlers:
    def test_no_file(self):
        from json_schema_resolver.handlers import load_schema_handler

        assert load_schema_handler(None) == (None, "No file uploaded.", "")

    def test_loads_stream(self):
        from json_schema_resolver.handlers import load_schema_handler

        schema, status, text = load_schema_handler(io.BytesIO(b'{"type": "object"}'))
        assert schema == {"type": "object"}
        assert status == "Schema loaded."
        assert json.loads(text) == schema

    def test_undecodable_file_reported(self, tmp_path):
        from json_schema_resolver.handlers import load_schema_handler

        path = tmp_path / "schema.json"
        path.write_bytes(b'{"title": "\xff"}')

        schema, status, text = load_schema_handler(str(path))
        assert schema is None
        assert status.startswith("Error loading schema: ")
        assert text == ""

    def test_bad_text(self):
        from json_schema_resolver.handlers import parse_schema_text_handler

        schema, status = parse_schema_text_handler("[]")
        assert schema is None
        assert status.startswith("Error parsing schema:")


class TestResolveHandler:
    def test_resolves_schema(self, user_schema):
        from json_schema_resolver.handlers import resolve_schema_handler

        definition, example, table, status = resolve_schema_handler(user_schema)

        assert "_original" not in definition
        assert json.loads(example) == {"name": "Ada", "age": 36}
        assert [row[0] for row in table] == ["name", "age"]
        assert status == "Resolved 2 top-level properties, 0 variants."

    def test_hidden_schema(self):
        from json_schema_resolver.handlers import resolve_schema_handler

        assert resolve_schema_handler({"noDisplay": True})[3].startswith("Schema is marked noDisplay")

    def test_cycle_reported(self):
        from json_schema_resolver.handlers import resolve_schema_handler

        definition, _, _, status = resolve_schema_handler({"id": "s", "properties": {"me": {"rel": "self"}}})
        assert definition is None
        assert "schema cycle detected" in status


class TestCurlHandler:
    def test_requires_uri(self):
        from json_schema_resolver.handlers import curl_handler

        assert curl_handler(None, "", "GET", "")[1] == "Enter a request URI."

    def test_payload_from_schema_example(self, user_schema):
        from json_schema_resolver.handlers import curl_handler

        command, status = curl_handler(user_schema, "http://x/users", "POST", '{"Accept": "application/json"}')

        assert command.startswith('curl -X "POST" "http://x/users"')
        assert '-H "Accept: application/json"' in command
        assert "--data '" in command
        assert status == "cURL command generated."

    def test_bad_headers(self):
        from json_schema_resolver.handlers import curl_handler

        assert curl_handler(None, "http://x", "GET", "[1]")[1] == "Headers must be a JSON object."
