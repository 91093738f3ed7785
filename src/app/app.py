"""Entrypoint da API de pagamentos Dancing Patinação.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3001

Uso (desenvolvimento):
    python -m app.app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import close_clients
from app.observability import (
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from config.logging import get_logger
from config.settings import get_base_settings
from utils.errors import CheckoutError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORRELATION_HEADER = "x-correlation-id"

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version, Stripe-Signature, X-Correlation-Id"
    ),
}

METHOD_NOT_ALLOWED = "Método não permitido"
NOT_FOUND = "Rota não encontrada"
INTERNAL_ERROR = "Erro interno do servidor"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup valida configurações; shutdown fecha os clientes Redis e
    Firestore abertos pelo token store.
    """
    logger.info("app_starting", extra={"service": "dancing-pagamentos"})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": "dancing-pagamentos"})
    await close_clients()


def _allowed_origin(request: Request) -> str:
    allowed = get_base_settings().allowed_origins
    if "*" in allowed:
        return "*"
    origin = request.headers.get("origin", "")
    return origin if origin in allowed else allowed[0]


async def cors_and_correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Aplica CORS em toda resposta e propaga o correlation id.

    ``OPTIONS`` em qualquer rota responde 200 vazio (preflight). Exceções
    não tratadas viram 500 aqui, para que a resposta também leve os
    headers de CORS e correlação.
    """
    correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
    token = set_correlation_id(correlation_id)
    try:
        if request.method == "OPTIONS":
            response: Response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = await handle_unexpected_error(request, exc)
    finally:
        reset_correlation_id(token)

    response.headers.update(CORS_HEADERS)
    response.headers["Access-Control-Allow-Origin"] = _allowed_origin(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


# ──────────────────────────────────────────────────────────────────────────────
# Exception handlers: forma uniforme {error, details}
# ──────────────────────────────────────────────────────────────────────────────


async def handle_checkout_error(request: Request, exc: CheckoutError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_failed",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
            "retryable": exc.is_retryable,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        message = METHOD_NOT_ALLOWED
    elif exc.status_code == 404:
        message = NOT_FOUND
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "details": None},
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Dados inválidos", "details": "Corpo da requisição inválido"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR, "details": type(exc).__name__},
    )


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Dancing Patinação - Pagamentos",
        description="Checkout Mercado Pago, PagBank/PagSeguro e Stripe",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.middleware("http")(cors_and_correlation_middleware)

    fastapi_app.add_exception_handler(CheckoutError, handle_checkout_error)
    fastapi_app.add_exception_handler(StarletteHTTPException, handle_http_error)
    fastapi_app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    fastapi_app.add_exception_handler(Exception, handle_unexpected_error)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "dancing-pagamentos"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    port = get_base_settings().port
    logger.info("Starting Dancing Pagamentos in development mode", extra={"port": port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=port,
        reload=get_base_settings().is_development,
    )


if __name__ == "__main__":
    main()
