"""Unit tests for app.services.recaptcha with a mocked httpx client."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from pydantic import SecretStr

from app.services.recaptcha import verify_recaptcha


def _settings(secret: str | None = "recaptcha-secret") -> MagicMock:
    settings = MagicMock()
    settings.RECAPTCHA_SECRET_KEY = SecretStr(secret) if secret is not None else None
    settings.RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
    settings.RECAPTCHA_TIMEOUT_SEC = 10.0
    return settings


def _response(status_code: int, body: object) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body
    return resp


def _install_client(mock_client_class: MagicMock, post: AsyncMock) -> None:
    mock_instance = MagicMock()
    mock_instance.post = post
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)


class TestVerifyRecaptcha(unittest.TestCase):
    @patch("app.services.recaptcha.httpx.AsyncClient")
    def test_accepted_token(self, mock_client_class: MagicMock) -> None:
        post = AsyncMock(return_value=_response(200, {"success": True}))
        _install_client(mock_client_class, post)
        self.assertTrue(asyncio.run(verify_recaptcha("tok", _settings())))
        args, kwargs = post.call_args
        self.assertEqual(args[0], "https://www.google.com/recaptcha/api/siteverify")
        self.assertEqual(kwargs["data"], {"secret": "recaptcha-secret", "response": "tok"})

    @patch("app.services.recaptcha.httpx.AsyncClient")
    def test_rejected_token(self, mock_client_class: MagicMock) -> None:
        post = AsyncMock(
            return_value=_response(200, {"success": False, "error-codes": ["invalid-input-response"]})
        )
        _install_client(mock_client_class, post)
        self.assertFalse(asyncio.run(verify_recaptcha("tok", _settings())))

    @patch("app.services.recaptcha.httpx.AsyncClient")
    def test_server_error(self, mock_client_class: MagicMock) -> None:
        _install_client(mock_client_class, AsyncMock(return_value=_response(500, {})))
        self.assertFalse(asyncio.run(verify_recaptcha("tok", _settings())))

    @patch("app.services.recaptcha.httpx.AsyncClient")
    def test_unreachable(self, mock_client_class: MagicMock) -> None:
        _install_client(
            mock_client_class, AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        self.assertFalse(asyncio.run(verify_recaptcha("tok", _settings())))

    @patch("app.services.recaptcha.httpx.AsyncClient")
    def test_missing_secret_skips_request(self, mock_client_class: MagicMock) -> None:
        self.assertFalse(asyncio.run(verify_recaptcha("tok", _settings(secret=None))))
        self.assertFalse(asyncio.run(verify_recaptcha("tok", _settings(secret=" "))))
        mock_client_class.assert_not_called()


if __name__ == "__main__":
    unittest.main()
