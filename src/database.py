# -*- coding: utf-8 -*-
"""
Configuração do banco de dados SQLAlchemy para a aplicação FastAPI.
"""

from pathlib import Path
from typing import Union

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from src.config import DEFAULT_DATABASE_URL, Settings

# Cria uma Base class
Base = declarative_base()


def resolve_database_url(settings: Settings) -> Union[str, URL]:
    """
    Escolhe a URL do banco: DATABASE_URL completa, depois host/usuário/senha,
    e por fim o SQLite local.
    """
    if settings.database_url:
        database_url = settings.database_url
        # Se for PostgreSQL no Render, ajusta o prefixo se necessário
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        return database_url

    if settings.db_host:
        return URL.create(
            "postgresql+psycopg2",
            username=settings.db_user,
            password=settings.db_password,
            host=settings.db_host,
            port=settings.db_port,
            database=settings.db_name,
        )

    return DEFAULT_DATABASE_URL


def create_db_engine(settings: Settings) -> Engine:
    """
    Cria a engine com pool limitado. Chamado uma vez por aplicação.
    """
    database_url = resolve_database_url(settings)
    is_sqlite = str(database_url).startswith("sqlite")

    # Configuração de argumentos de conexão
    connect_args = {}
    engine_args = {
        # Verifica se a conexão está viva antes de usar
        "pool_pre_ping": True,
        # Conexões mais velhas que o tempo ocioso são recicladas
        "pool_recycle": max(settings.idle_timeout_ms // 1000, 1),
    }

    if is_sqlite:
        connect_args = {"check_same_thread": False}
    else:
        connect_args = {"connect_timeout": max(settings.connect_timeout_ms // 1000, 1)}
        engine_args.update(
            pool_size=settings.pool_max,
            max_overflow=0,
            pool_timeout=settings.connect_timeout_ms / 1000,
        )

    return create_engine(database_url, connect_args=connect_args, **engine_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Cria as tabelas que ainda não existem. Não é uma migração.
    """
    if engine.url.get_backend_name() == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


# Função para obter uma sessão do banco de dados (usada com Depends)
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
