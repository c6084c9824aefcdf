"""
Cliente HTTP baseado em requests.

Cada conta recebe uma sessão própria (proxy e User-Agent fixos). As
chamadas bloqueantes rodam em thread via `asyncio.to_thread` para não
travar as demais contas.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import requests
from random_user_agent.params import OperatingSystem, SoftwareName
from random_user_agent.user_agent import UserAgent

from sonix.config.constants import BROWSER_HEADERS
from sonix.config.models import TransportConfig
from sonix.core.domain.relay import TransportResponse
from sonix.core.exceptions import HttpStatusException, RequestException, RequestTimeoutException
from sonix.core.interfaces import Transport


def random_user_agent(limit: int = 100) -> str:
    """User-Agent aleatório de navegador desktop."""
    provider = UserAgent(
        limit=limit,
        software_names=[SoftwareName.CHROME.value, SoftwareName.EDGE.value],
        operating_systems=[OperatingSystem.WINDOWS.value, OperatingSystem.MACOS.value, OperatingSystem.LINUX.value],
    )
    return provider.get_random_user_agent()


class RequestsTransport(Transport):
    """Implementação de Transport com `requests.Session`."""

    def __init__(
        self,
        proxy: Optional[str] = None,
        config: Optional[TransportConfig] = None,
        origin: Optional[str] = None,
        referer: Optional[str] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[Any] = None,
    ):
        self.config = config or TransportConfig()
        self.proxy = proxy
        self.origin = origin
        self.referer = referer
        self.user_agent = user_agent or random_user_agent(self.config.ua_limit)
        self.session = session or requests.Session()
        if logger is None:
            from sonix.infrastructure.logging import get_logger
            logger = get_logger()
        self._logger = logger

        if proxy:
            self.session.proxies.update({"http": proxy, "https": proxy})
            self.session.verify = self.config.verify_proxy_ssl

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        final = dict(headers or {})
        final.update(BROWSER_HEADERS)
        final["User-Agent"] = self.user_agent
        if self.origin:
            final["Origin"] = self.origin
        if self.referer:
            final["Referer"] = self.referer
        return final

    async def request(
        self,
        url: str,
        method: str = "GET",
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        return await asyncio.to_thread(self._send, url, method.upper(), body, headers)

    def _send(self, url: str, method: str, body: Optional[Any], headers: Optional[Dict[str, str]]) -> TransportResponse:
        """
        Executa a requisição de forma síncrona.

        Raises:
            RequestTimeoutException: Timeout
            RequestException: Erro de conexão/proxy
            HttpStatusException: Status fora de 2xx
        """
        kwargs: Dict[str, Any] = {
            "headers": self._build_headers(headers),
            "timeout": self.config.timeout,
        }
        if method != "GET" and body is not None:
            kwargs["data"] = json.dumps(body)

        self._logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutException(
                f"Timeout ao acessar {url}", details={"url": url, "method": method}, cause=e
            ) from e
        except requests.exceptions.RequestException as e:
            raise RequestException(
                f"Erro de conexão: {e}", details={"url": url, "method": method}, cause=e
            ) from e

        parsed = self._parse_body(response)
        self._logger.debug(f"Resposta {response.status_code} {response.reason}", url=url)

        if not response.ok:
            raise HttpStatusException(response.status_code, response.reason or "", url=url, body=parsed)

        # 2xx normalizado para 200
        return TransportResponse(status=200, body=parsed)

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                pass
        return {"status": response.status_code, "message": response.text}

    def close(self) -> None:
        self.session.close()

    def __repr__(self) -> str:
        return f"RequestsTransport(proxy={'sim' if self.proxy else 'não'})"
