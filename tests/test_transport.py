"""Testes do transporte HTTP baseado em requests."""

from __future__ import annotations

import json
import unittest
from unittest import mock

import requests
from fakes import make_logger

from sonix.config.constants import BROWSER_HEADERS
from sonix.config.models import TransportConfig
from sonix.core.exceptions import HttpStatusException, RequestException, RequestTimeoutException
from sonix.infrastructure.http import RequestsTransport

UA = "Mozilla/5.0 (teste)"


def fake_response(status: int = 200, body=None, content_type: str = "application/json", text: str = ""):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.ok = status < 400
    response.headers = {"content-type": content_type}
    response.text = text
    response.json.return_value = body
    return response


class TestRequestsTransport(unittest.IsolatedAsyncioTestCase):

    def build(self, response=None, side_effect=None, **kwargs) -> RequestsTransport:
        self.session = mock.MagicMock()
        self.session.request.return_value = response
        self.session.request.side_effect = side_effect
        logger, _ = make_logger()
        return RequestsTransport(
            user_agent=UA,
            session=self.session,
            logger=logger,
            config=TransportConfig(timeout=12),
            **kwargs,
        )

    async def test_2xx_normalizado(self) -> None:
        transport = self.build(fake_response(201, {"result": 1}))

        resposta = await transport.request("https://x.test/rpc", "post", {"a": 1}, {"x-owner": "0xabc"})

        self.assertEqual(resposta.status, 200)
        self.assertEqual(resposta.body, {"result": 1})
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("POST", "https://x.test/rpc"))
        self.assertEqual(json.loads(kwargs["data"]), {"a": 1})
        self.assertEqual(kwargs["timeout"], 12)
        self.assertEqual(kwargs["headers"]["x-owner"], "0xabc")
        self.assertEqual(kwargs["headers"]["User-Agent"], UA)
        for chave in BROWSER_HEADERS:
            self.assertIn(chave, kwargs["headers"])

    async def test_get_sem_corpo(self) -> None:
        transport = self.build(fake_response(200, {}), origin="https://arcade.test", referer="https://arcade.test/")

        await transport.request("https://x.test/points", body={"ignorado": True})

        _, kwargs = self.session.request.call_args
        self.assertNotIn("data", kwargs)
        self.assertEqual(kwargs["headers"]["Origin"], "https://arcade.test")
        self.assertEqual(kwargs["headers"]["Referer"], "https://arcade.test/")

    async def test_status_de_erro(self) -> None:
        transport = self.build(fake_response(404, {"error": "not found"}))

        with self.assertRaises(HttpStatusException) as ctx:
            await transport.request("https://x.test/missing")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.body, {"error": "not found"})

    async def test_timeout(self) -> None:
        transport = self.build(side_effect=requests.exceptions.Timeout("lento"))

        with self.assertRaises(RequestTimeoutException):
            await transport.request("https://x.test/")

    async def test_erro_de_conexao(self) -> None:
        transport = self.build(side_effect=requests.exceptions.ConnectionError("recusado"))

        with self.assertRaises(RequestException) as ctx:
            await transport.request("https://x.test/")
        self.assertNotIsInstance(ctx.exception, RequestTimeoutException)

    async def test_corpo_nao_json(self) -> None:
        transport = self.build(fake_response(200, None, content_type="text/html", text="<html>"))

        resposta = await transport.request("https://x.test/")

        self.assertEqual(resposta.body, {"status": 200, "message": "<html>"})

    def test_proxy_configurado_na_sessao(self) -> None:
        transport = self.build(proxy="http://user:pw@p:1")

        self.session.proxies.update.assert_called_once_with({"http": "http://user:pw@p:1", "https": "http://user:pw@p:1"})
        self.assertFalse(self.session.verify)

    def test_close(self) -> None:
        self.build().close()
        self.session.close.assert_called_once_with()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
