# tests/test_generation_client.py
"""
Unit tests for functions.generation_client

The HTTP session is a MagicMock; no network access.

Covers:
- Request body `{action, payload}` and camelCase payload keys
- Local validation before any network call
- `{result}` text extraction, design parsing (wrapped and bare)
- Non-2xx -> ServiceError with `{error, details}`, 429 -> RateLimitError
- Transport failures and non-JSON bodies -> ServiceError
"""

from __future__ import annotations

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from functions.generation_client import GenerationClient
from functions.utils.errors import (
    DesignParseError,
    InputValidationError,
    RateLimitError,
    ServiceError,
)
from utils_test_support import design


class LoggingTestCase(unittest.TestCase):
    """Base TestCase that prints a readable header per test."""

    def setUp(self) -> None:
        test_name = self._testMethodName
        print("\n" + "=" * 90, file=sys.stderr)
        print(f"🧪 STARTING TEST: {self.__class__.__name__}.{test_name}", file=sys.stderr)
        print("=" * 90, file=sys.stderr)

    def tearDown(self) -> None:
        print("-" * 90 + "\n", file=sys.stderr)


def _response(status_code: int = 200, json_body=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_body is None:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = json_body
    return resp


def _client(resp: MagicMock) -> tuple[GenerationClient, MagicMock]:
    session = MagicMock()
    session.post.return_value = resp
    return GenerationClient("http://test/api/generate", timeout=5, session=session), session


class TestTextActions(LoggingTestCase):
    def test_generate_summary_request_and_result(self):
        client, session = _client(_response(json_body={"result": " Un profil solide. "}))
        text = client.generate_summary("Ingénieur Logiciel", "Python")

        self.assertEqual(text, "Un profil solide.")
        session.post.assert_called_once_with(
            "http://test/api/generate",
            json={"action": "GENERATE_SUMMARY", "payload": {"jobTitle": "Ingénieur Logiciel", "keywords": "Python"}},
            timeout=5.0,
        )

    def test_improve_experience(self):
        client, session = _client(_response(json_body={"result": "Texte amélioré"}))
        self.assertEqual(client.improve_experience("Chef", "Texte"), "Texte amélioré")
        body = session.post.call_args.kwargs["json"]
        self.assertEqual(body["action"], "IMPROVE_EXPERIENCE")
        self.assertEqual(body["payload"], {"role": "Chef", "description": "Texte"})

    def test_local_validation_skips_network(self):
        client, session = _client(_response(json_body={"result": "x"}))
        with self.assertRaises(InputValidationError):
            client.generate_summary("   ")
        with self.assertRaises(InputValidationError):
            client.improve_experience("Chef", "  ")
        with self.assertRaises(InputValidationError):
            client.generate_design("")
        session.post.assert_not_called()

    def test_non_text_result_is_rejected(self):
        client, _ = _client(_response(json_body={"result": {"a": 1}}))
        with self.assertRaises(ServiceError):
            client.generate_summary("Ingénieur")


class TestDesign(LoggingTestCase):
    def test_wrapped_design(self):
        wire = design(layout="sidebar-left").model_dump(by_alias=True)
        client, session = _client(_response(json_body={"result": wire}))
        config = client.generate_design("Professionnel, bleu marine")
        self.assertEqual(config.layout, "sidebar-left")
        self.assertEqual(
            session.post.call_args.kwargs["json"],
            {"action": "GENERATE_DESIGN", "payload": {"description": "Professionnel, bleu marine"}},
        )

    def test_bare_design(self):
        wire = design(layout="asymmetric").model_dump(by_alias=True)
        client, _ = _client(_response(json_body=wire))
        self.assertEqual(client.generate_design("Créatif").layout, "asymmetric")

    def test_invalid_design(self):
        client, _ = _client(_response(json_body={"result": {"layout": "diagonal"}}))
        with self.assertRaises(DesignParseError):
            client.generate_design("Créatif")


class TestErrors(LoggingTestCase):
    def test_rate_limit(self):
        client, _ = _client(_response(429, {"error": "Quota exceeded, retry later", "details": "429 quota"}))
        with self.assertRaises(RateLimitError) as ctx:
            client.generate_summary("Ingénieur")
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(ctx.exception.details, "429 quota")

    def test_server_error_body(self):
        client, _ = _client(_response(500, {"error": "Server configuration error: API key missing"}))
        with self.assertRaises(ServiceError) as ctx:
            client.improve_experience("Chef", "Texte")
        self.assertNotIsInstance(ctx.exception, RateLimitError)
        self.assertEqual(str(ctx.exception), "Server configuration error: API key missing")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_non_json_error_body(self):
        client, _ = _client(_response(502, text="<html>Bad gateway</html>"))
        with self.assertRaises(ServiceError) as ctx:
            client.generate_summary("Ingénieur")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_non_json_success_body(self):
        client, _ = _client(_response(200, text="ok"))
        with self.assertRaises(ServiceError):
            client.generate_summary("Ingénieur")

    def test_transport_error(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        client = GenerationClient("http://test/api/generate", session=session)
        with self.assertRaises(ServiceError):
            client.generate_design("Tech")


if __name__ == "__main__":
    unittest.main()
