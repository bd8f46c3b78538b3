# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI da API de Produtos.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import Settings
from src.database import create_db_engine, create_session_factory, init_db
from src.models import produto  # noqa: F401  registra a tabela no Base.metadata
from src.routes import produtos_fastapi

# Mensagem do 500 quando o ID do path não chega a um comando válido
PATH_ERROR_MESSAGES = {
    "GET": "Error fetching data",
    "PUT": "Error updating data",
    "DELETE": "Error deleting data",
}

ALLOW_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, Authorization"
ALLOW_METHODS = "PUT, POST, PATCH, DELETE, GET"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        filename=settings.log_file,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    # Cria as tabelas no banco de dados
    init_db(engine)
    logging.info(
        f"Banco de dados: {engine.url.get_backend_name()} "
        f"(pool máximo {app.state.settings.pool_max})"
    )
    logging.info(f"Servidor rodando na porta {app.state.settings.port}")
    yield
    engine.dispose()


async def cors_middleware(request: Request, call_next):
    # Não usa o CORSMiddleware: ele só trata preflight com Origin e não devolve {} em todo OPTIONS
    if request.method == "OPTIONS":
        response = JSONResponse(content={}, status_code=200)
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    else:
        response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    ID do path que não é inteiro falha como erro do banco (500 genérico),
    igual a um comando rejeitado. O corpo é validado nas próprias rotas.
    """
    locations = [error.get("loc", ())[:1] for error in exc.errors()]
    if ("path",) in locations:
        message = PATH_ERROR_MESSAGES.get(request.method, "Error fetching data")
        logging.error(f"{message}: {exc.errors()}")
        return JSONResponse(status_code=500, content={"message": message})
    return await request_validation_exception_handler(request, exc)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings)

    servers = [{"url": settings.api_server_url}] if settings.api_server_url else None

    app = FastAPI(
        title="API de Produtos",
        description="API para gerenciar produtos",
        version="1.0.0",
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        servers=servers,
        lifespan=lifespan,
    )

    # Pool criado uma única vez e compartilhado pelas rotas via app.state
    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.middleware("http")(cors_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(produtos_fastapi.router, prefix="/api/produto")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
