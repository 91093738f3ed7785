"""Cliente HTTP base para os provedores de pagamento.

Uma única tentativa por chamada, com timeout limitado: falhas de
transporte viram exceções tipadas (retryable) e o chamador decide o que
fazer. O corpo da resposta nunca é convertido em exceção aqui; corpo
não-JSON chega como ``ProviderResponse(data=None)`` com o texto bruto.
"""

from __future__ import annotations

import json as jsonlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.domain.payment import ProviderResponse
from app.observability import record_latency
from config.logging.redaction import redact
from utils.errors import (
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    component: str = "http"


def parse_response(response: httpx.Response) -> ProviderResponse:
    """Converte httpx.Response em ProviderResponse sem lançar exceção."""
    text = response.text
    data: dict[str, Any] | None = None
    if text:
        try:
            parsed = jsonlib.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            data = parsed
    return ProviderResponse(status_code=response.status_code, text=text, data=data)


class HttpClient:
    """Cliente HTTP assíncrono para chamadas aos provedores.

    Args:
        config: Timeout, headers padrão e nome do componente (métricas)
        transport: Transport httpx opcional (testes usam MockTransport)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> ProviderResponse:
        """Executa uma requisição e devolve a resposta crua.

        Raises:
            UpstreamTimeoutError: Provedor não respondeu a tempo.
            UpstreamUnavailableError: Falha de conexão/transporte.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=merged_headers,
                    json=json,
                    data=data,
                    params=params,
                    timeout=self._config.timeout_seconds,
                )
        except httpx.TimeoutException as exc:
            logger.warning(
                "provider_timeout",
                extra={"component": self._config.component, "url": url},
            )
            raise UpstreamTimeoutError(
                "Tempo esgotado ao contatar o provedor de pagamento",
                details=str(exc) or "timeout",
            ) from exc
        except httpx.TransportError as exc:
            logger.warning(
                "provider_unavailable",
                extra={"component": self._config.component, "url": url},
            )
            raise UpstreamUnavailableError(
                "Provedor de pagamento indisponível",
                details=str(exc) or exc.__class__.__name__,
            ) from exc
        finally:
            record_latency(
                self._config.component,
                f"{method.upper()} {httpx.URL(url).path}",
                (time.perf_counter() - start) * 1000,
            )

        provider_response = parse_response(response)
        logger.info(
            "provider_response",
            extra={
                "component": self._config.component,
                "status_code": provider_response.status_code,
                "json_body": provider_response.data is not None,
            },
        )
        return provider_response


def ensure_success(
    response: ProviderResponse,
    message: str,
    error_key: str | None = None,
) -> ProviderResponse:
    """Lança UpstreamRejectedError se o status não for 2xx.

    Args:
        response: Resposta crua do provedor.
        message: Mensagem exposta ao cliente.
        error_key: Campo do corpo com o detalhe do erro (ex: error_messages).
    """
    if response.is_success:
        return response

    if response.data is None:
        details: Any = response.text
    elif error_key and error_key in response.data:
        details = response.data[error_key]
    else:
        details = response.data

    logger.warning(
        "provider_rejected",
        extra={"upstream_status": response.status_code, "details": redact(details)},
    )
    raise UpstreamRejectedError(message, details=details, upstream_status=response.status_code)


def bearer_headers(
    token: str,
    idempotency_header: str | None = None,
    key: str | None = None,
) -> dict[str, str]:
    """Headers de autenticação (+ idempotência quando informada)."""
    headers = {"Authorization": f"Bearer {token}"}
    if idempotency_header and key:
        headers[idempotency_header] = key
    return headers
